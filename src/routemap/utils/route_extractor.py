"""Static route extraction for Hono/Express/Fastify and Next.js projects.

Parses TypeScript/JavaScript sources without executing them and emits a
normalized, ordered list of routes. Call-registered routes get the path
prefix accumulated through `.route()` mounts; Next.js App Router routes are
derived from the directory layout.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict
from pathlib import Path
from typing import Dict, List, Optional, Protocol

from ..config import ScanConfig
from ..security import validate_framework, validate_project_root
from .convention_extractor import extract_convention_routes
from .import_resolver import ImportResolver
from .mount_graph import extract_mount_edges
from .prefix_resolver import PrefixMaps, join_paths, resolve_prefixes
from .route_records import HTTP_METHODS, RouteRecord, relative_file_path
from .syntax_index import (
    ParsedFile,
    SyntaxIndex,
    build_index,
    call_arguments,
    comment_description,
    enclosing_statement,
    iter_calls,
    leading_comment,
    member_callee,
    string_value,
)
from .tree_walker import walk_source_files

logger = logging.getLogger(__name__)

_VERBS = {m.lower() for m in HTTP_METHODS}


class RouteStrategy(Protocol):
    def discover(self, project_root: Path, config: ScanConfig) -> List[RouteRecord]:
        ...


# ------------------ Explicit registration calls ------------------

def _statement_description(parsed: ParsedFile, call) -> Optional[str]:
    stmt = enclosing_statement(call)
    if stmt is None:
        return None
    return comment_description(leading_comment(parsed, stmt))


def extract_file_routes(parsed: ParsedFile, project_root: Path, prefixes: PrefixMaps) -> List[RouteRecord]:
    """Routes registered by `<receiver>.<verb>("/literal", ...)` calls in one file."""
    routes: List[RouteRecord] = []
    file_path = relative_file_path(parsed.path, project_root)

    for call in iter_calls(parsed):
        callee = member_callee(call)
        if callee is None:
            continue
        receiver, method = callee
        if method.lower() not in _VERBS:
            continue

        args = call_arguments(call)
        if not args:
            continue
        local_path = string_value(args[0])
        # `headers.delete("Content-Type")`, `c.get("user")`: not routes
        if not local_path or not local_path.startswith("/"):
            continue

        prefix = prefixes.lookup(parsed.path, parsed.text(receiver))
        routes.append(
            RouteRecord(
                method=method.upper(),
                path=join_paths(prefix, local_path),
                file_path=file_path,
                description=_statement_description(parsed, call),
            )
        )
    return routes


def extract_call_routes(project_root: Path, config: Optional[ScanConfig] = None) -> List[RouteRecord]:
    config = config or ScanConfig()
    paths = walk_source_files(str(project_root), config.source_extensions, config.extra_skip_dirs)
    index: SyntaxIndex = build_index(paths, max_size=config.max_file_size_bytes)
    logger.info(f"Indexed {len(index)} of {len(paths)} source file(s) under {project_root}")

    resolver = ImportResolver(index.paths)
    edges = extract_mount_edges(index, resolver)
    prefixes = resolve_prefixes(edges, max_iterations=config.max_prefix_iterations)

    routes: List[RouteRecord] = []
    for parsed in index:
        routes.extend(extract_file_routes(parsed, project_root, prefixes))
    return routes


class CallRouteStrategy:
    """Routes registered through explicit verb calls, composed across `.route()` mounts."""

    def discover(self, project_root: Path, config: ScanConfig) -> List[RouteRecord]:
        return extract_call_routes(project_root, config)


class ConventionRouteStrategy:
    """Routes derived from `route.ts` files under the App Router directory."""

    def discover(self, project_root: Path, config: ScanConfig) -> List[RouteRecord]:
        return extract_convention_routes(
            project_root,
            routes_root=config.routes_root,
            skip_dirs=config.extra_skip_dirs,
            max_file_size=config.max_file_size_bytes,
        )


STRATEGIES: Dict[str, RouteStrategy] = {
    "nextjs": ConventionRouteStrategy(),
}
DEFAULT_STRATEGY: RouteStrategy = CallRouteStrategy()


def strategy_for(framework: str) -> RouteStrategy:
    return STRATEGIES.get(framework, DEFAULT_STRATEGY)


# ------------------ Entry points ------------------

def extract_routes(
    project_root: str,
    framework: Optional[str] = "unknown",
    config: Optional[ScanConfig] = None,
) -> List[RouteRecord]:
    """
    Discover HTTP routes declared in a project

    Args:
        project_root: Directory to scan
        framework: hono, express, fastify, nextjs or unknown
        config: Scan settings; defaults apply when omitted

    Returns:
        Routes in discovery order (file order, then statement order)

    Raises:
        PreconditionError: If the project root is missing or unreadable
        SecurityValidationError: If the framework tag is not supported
    """
    root = validate_project_root(project_root)
    tag = validate_framework(framework)
    routes = strategy_for(tag).discover(root, config or ScanConfig())
    logger.info(f"Discovered {len(routes)} route(s) in {root} ({tag})")
    return routes


def save_routes(routes: List[RouteRecord], output_path: str) -> None:
    out_dir = os.path.dirname(output_path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as fh:
        json.dump([asdict(r) for r in routes], fh, indent=2)


def extract_and_save_routes(
    project_root: str,
    output_path: str,
    framework: Optional[str] = "unknown",
    config: Optional[ScanConfig] = None,
) -> int:
    routes = extract_routes(project_root, framework, config)
    save_routes(routes, output_path)
    return len(routes)


__all__ = [
    "CallRouteStrategy",
    "ConventionRouteStrategy",
    "RouteRecord",
    "extract_and_save_routes",
    "extract_routes",
    "save_routes",
    "strategy_for",
]
