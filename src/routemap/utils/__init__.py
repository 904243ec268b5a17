# utils/__init__.py
from .route_records import RouteRecord, HTTP_METHODS
from .route_extractor import (
    CallRouteStrategy,
    ConventionRouteStrategy,
    extract_and_save_routes,
    extract_routes,
    strategy_for,
)
from .framework_detector import DetectedProject, FrameworkDetector, detect_framework
from .prefix_resolver import PrefixMaps, join_paths, resolve_prefixes
from .mount_graph import MountEdge, extract_mount_edges
from .syntax_index import FileParseError

__all__ = [
    'RouteRecord',
    'HTTP_METHODS',
    'CallRouteStrategy',
    'ConventionRouteStrategy',
    'extract_routes',
    'extract_and_save_routes',
    'strategy_for',
    'DetectedProject',
    'FrameworkDetector',
    'detect_framework',
    'MountEdge',
    'extract_mount_edges',
    'PrefixMaps',
    'join_paths',
    'resolve_prefixes',
    'FileParseError',
]
