"""
RouteMap - static HTTP route discovery for TypeScript/JavaScript backends
"""

__version__ = "1.0.0"
