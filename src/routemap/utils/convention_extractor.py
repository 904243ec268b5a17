"""Directory-convention route discovery (Next.js App Router).

A `route.ts` file's URL comes from its directory relative to the routes root;
each exported function named after an HTTP verb is one handler at that URL.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, List, Optional

from .route_records import HTTP_METHODS, RouteRecord, relative_file_path
from .syntax_index import (
    DEFAULT_MAX_FILE_SIZE,
    FileParseError,
    comment_description,
    exported_functions,
    leading_comment,
    parse_file,
)
from .tree_walker import walk_route_files

logger = logging.getLogger(__name__)

DEFAULT_ROUTES_ROOTS = ("app", os.path.join("src", "app"))


def find_routes_root(project_root: Path, override: Optional[str] = None) -> Path:
    """Routes root under the project: the override, else `app/`, else `src/app/`."""
    if override:
        return project_root / override
    for candidate in DEFAULT_ROUTES_ROOTS:
        if (project_root / candidate).is_dir():
            return project_root / candidate
    return project_root / DEFAULT_ROUTES_ROOTS[0]


def url_path_for(route_file: str, routes_root: Path) -> str:
    """`<root>/users/route.ts` -> `/users`; `<root>/route.ts` -> `/`."""
    rel_dir = Path(route_file).parent.relative_to(routes_root)
    segments = [part for part in rel_dir.parts if part not in ("", ".")]
    return "/" + "/".join(segments)


def extract_convention_routes(
    project_root: Path,
    routes_root: Optional[str] = None,
    skip_dirs: Optional[Iterable[str]] = None,
    max_file_size: int = DEFAULT_MAX_FILE_SIZE,
) -> List[RouteRecord]:
    root = find_routes_root(project_root, routes_root)
    if not root.is_dir():
        logger.info(f"No routes root at {root}; nothing to scan")
        return []

    routes: List[RouteRecord] = []
    for route_file in walk_route_files(str(root), skip_dirs):
        try:
            parsed = parse_file(route_file, max_size=max_file_size)
        except FileParseError as e:
            logger.warning(f"Skipping {route_file}: {e}")
            continue

        url_path = url_path_for(route_file, root)
        file_path = relative_file_path(route_file, project_root)
        for name, export_stmt in exported_functions(parsed):
            method = name.upper()
            if method not in HTTP_METHODS:
                continue
            comment = leading_comment(parsed, export_stmt)
            description = comment_description(comment) if comment and comment.startswith("/**") else None
            routes.append(
                RouteRecord(
                    method=method,
                    path=url_path,
                    file_path=file_path,
                    description=description,
                )
            )
    return routes
