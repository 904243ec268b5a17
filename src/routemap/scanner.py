#!/usr/bin/env python3
"""
RouteMap scanner

Discovers the HTTP routes a TypeScript/JavaScript backend declares, without
running it:
1. Detect the framework from package.json (unless given)
2. Discover routes with the matching strategy (explicit calls + mount
   prefixes, or Next.js App Router directory conventions)
3. Print a summary and optionally write routes.json

The result feeds manifest builders keyed by "<METHOD> <path>".
"""

from routemap.config import ConfigLoader, RouteMapConfig, get_config_loader
from routemap.security import FRAMEWORKS, SecurityValidationError, validate_project_root
from routemap.utils.framework_detector import DetectedProject, detect_framework
from routemap.utils.route_extractor import extract_routes, save_routes
from routemap.utils.route_records import RouteRecord
import argparse
import json
import logging
import sys
import time
import yaml
from dataclasses import asdict, replace
from typing import List, Optional

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool, level_name: str = "WARNING") -> None:
    level = logging.DEBUG if verbose else getattr(logging, level_name.upper(), logging.WARNING)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def resolve_project(project_root: str, requested: Optional[str], config: RouteMapConfig) -> DetectedProject:
    """package.json detection; the framework is overridden by the flag, then the config default."""
    detected = detect_framework(project_root)
    logger.info(f"Detected framework {detected.framework} (ORM: {detected.orm})")
    override = requested or config.default_framework
    if override:
        detected = replace(detected, framework=override)
    return detected


def print_summary(routes: List[RouteRecord], project: DetectedProject, duration: float) -> None:
    """Print discovered routes to console"""
    print("\n" + "=" * 80)
    print("🧭 ROUTE DISCOVERY RESULTS")
    print("=" * 80)
    print(f"🔧 Strategy: {project.framework}")
    orm = project.orm if project.orm_schema_path is None else f"{project.orm} ({project.orm_schema_path})"
    print(f"🗄️  ORM: {orm}")
    print(f"⏱️  Scan duration: {duration:.2f} seconds")
    print(f"📍 Total Routes: {len(routes)}")
    print()

    if not routes:
        print("⚠️  No routes found.")
    else:
        width = max(len(r.path) for r in routes)
        for route in routes:
            print(f"   {route.method:7} {route.path:{width}}  {route.file_path}")
            if route.description:
                print(f"           {route.description}")

    print("=" * 80)


def main(argv: Optional[List[str]] = None):
    start_time = time.time()
    parser = argparse.ArgumentParser(
        description='Static HTTP route discovery for TypeScript/JavaScript backends',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Detect the framework and print discovered routes
  %(prog)s /path/to/project

  # Force the Next.js App Router strategy and save routes.json
  %(prog)s /path/to/project --framework nextjs --output routes.json

  # Emit JSON on stdout
  %(prog)s /path/to/project --json
        """
    )

    parser.add_argument('target', nargs='?', help='Project directory to scan')
    parser.add_argument('--framework', choices=FRAMEWORKS,
                        help='Routing framework (default: detect from package.json)')
    parser.add_argument('--output', nargs='?', const='',
                        help='Write discovered routes as JSON (default path from config: routes.json)')
    parser.add_argument('--json', action='store_true', help='Print routes as JSON instead of a summary')
    parser.add_argument('--config', help='Path to config file (default: ~/.routemap/config.yaml)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')
    parser.add_argument('--init-config', action='store_true',
                        help='Create default configuration file at ~/.routemap/config.yaml')

    args = parser.parse_args(argv)

    loader: ConfigLoader = get_config_loader(args.config)

    if args.init_config:
        loader.create_default_config()
        return 0

    try:
        config = loader.get_config()
    except (yaml.YAMLError, ValueError) as e:
        print(f"⚠️  Warning: Failed to load configuration from {loader.config_path}: {e}")
        print("   Continuing with default settings...")
        config = RouteMapConfig()
    configure_logging(args.verbose, config.log_level)

    if not args.target:
        print("❌ Error: Must specify a project directory")
        parser.print_help()
        return 2

    try:
        project_root = str(validate_project_root(args.target))
        project = resolve_project(project_root, args.framework, config)
        routes = extract_routes(project_root, project.framework, config.scan)
    except SecurityValidationError as e:
        print(f"❌ {e}")
        return 2

    if args.output is not None:
        output_path = args.output or config.output_path
        save_routes(routes, output_path)
        print(f"✅ Routes saved to: {output_path}", file=sys.stderr if args.json else sys.stdout)

    if args.json:
        print(json.dumps([asdict(r) for r in routes], indent=2))
    else:
        print_summary(routes, project, time.time() - start_time)
    return 0


if __name__ == "__main__":
    sys.exit(main())
