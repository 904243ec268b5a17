#!/usr/bin/env python3
"""
Setup script for RouteMap
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README for long description
readme_path = Path(__file__).parent / "README.md"
long_description = readme_path.read_text(encoding="utf-8") if readme_path.exists() else ""

setup(
    name="routemap",
    version="1.0.0",
    description="Static HTTP route discovery for TypeScript/JavaScript backends",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="RouteMap Team",
    package_dir={"": "src"},
    packages=find_packages(where="src", include=["routemap*"]),
    python_requires=">=3.9",
    install_requires=[
        "tree-sitter>=0.23.0",
        "tree-sitter-typescript>=0.23.0",
        "PyYAML>=6.0",
        "pydantic>=2.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "routemap=routemap.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Quality Assurance",
    ],
    keywords="routes static-analysis hono express nextjs manifest",
    license="MIT",
    include_package_data=True,
)
