"""Candidate file enumeration for route discovery.

Walks a project tree in sorted order, pruning dependency caches, build output
and framework build directories so generated bundles never contribute routes.
"""

from __future__ import annotations

import logging
import os
from typing import Callable, Iterable, Iterator, List, Optional, Set

logger = logging.getLogger(__name__)

SKIP_DIRS = {
    "node_modules",
    ".next",
    "dist",
    "build",
    ".git",
    ".wrangler",
    ".output",
    ".nuxt",
    ".svelte-kit",
    ".vercel",
}
SOURCE_EXTENSIONS = (".ts", ".tsx", ".js", ".jsx")
ROUTE_FILE_NAMES = {"route.ts", "route.js"}


def _log_walk_error(err: OSError) -> None:
    logger.warning(f"Skipping unreadable directory {err.filename}: {err.strerror}")


def walk_files(
    root: str,
    matcher: Callable[[str], bool],
    skip_dirs: Optional[Iterable[str]] = None,
) -> Iterator[str]:
    """Yield absolute paths of files under root whose name satisfies matcher."""
    skip: Set[str] = set(SKIP_DIRS)
    if skip_dirs:
        skip.update(skip_dirs)

    for current, dirs, files in os.walk(root, onerror=_log_walk_error):
        dirs[:] = sorted(d for d in dirs if d not in skip)
        for name in sorted(files):
            if matcher(name):
                yield os.path.join(current, name)


def walk_source_files(
    root: str,
    extensions: Optional[Iterable[str]] = None,
    skip_dirs: Optional[Iterable[str]] = None,
) -> List[str]:
    exts = tuple(extensions) if extensions else SOURCE_EXTENSIONS
    return list(walk_files(root, lambda name: name.endswith(exts), skip_dirs))


def walk_route_files(root: str, skip_dirs: Optional[Iterable[str]] = None) -> List[str]:
    return list(walk_files(root, lambda name: name in ROUTE_FILE_NAMES, skip_dirs))
