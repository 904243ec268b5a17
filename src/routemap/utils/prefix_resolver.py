"""Mount prefix resolution over the MountEdge list.

Prefixes are computed by relaxing the flat edge list until nothing changes,
capped at a fixed number of passes so cyclic mount graphs terminate. Keys
that never resolve are looked up as the empty prefix, which leaves their
routes at their literal paths.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

from .mount_graph import MountEdge

logger = logging.getLogger(__name__)

MAX_ITERATIONS = 10

VarKey = Tuple[str, str]


def join_paths(prefix: str, path: str) -> str:
    """
    Append a path segment to a mount prefix

    >>> join_paths("/api", "/users")
    '/api/users'
    >>> join_paths("/api", "/")
    '/api'
    """
    if not prefix:
        return path
    if path == "/":
        return prefix
    clean_prefix = prefix[:-1] if prefix.endswith("/") else prefix
    clean_path = path if path.startswith("/") else "/" + path
    return clean_prefix + clean_path


@dataclass
class PrefixMaps:
    file_prefixes: Dict[str, str] = field(default_factory=dict)
    var_prefixes: Dict[VarKey, str] = field(default_factory=dict)
    iterations: int = 0
    converged: bool = True

    def lookup(self, file_path: str, var: str) -> str:
        """Variable-level prefix, then file-level, then empty."""
        prefix = self.var_prefixes.get((file_path, var))
        if prefix is None:
            prefix = self.file_prefixes.get(file_path)
        return prefix or ""


def find_roots(edges: List[MountEdge]) -> Set[VarKey]:
    """Parent references that are never mounted locally into another router."""
    local_children = {(e.in_file, e.child_var) for e in edges if e.child_file is None}
    return {(e.in_file, e.parent_var) for e in edges} - local_children


def resolve_prefixes(edges: List[MountEdge], max_iterations: int = MAX_ITERATIONS) -> PrefixMaps:
    maps = PrefixMaps()

    # Roots inside a file that is itself mounted first wait for that file's
    # prefix; any still unresolved once relaxation settles start from "".
    mounted_files = {e.child_file for e in edges if e.child_file is not None}
    deferred: List[VarKey] = []
    for key in sorted(find_roots(edges)):
        if key[0] in mounted_files:
            deferred.append(key)
        else:
            maps.var_prefixes[key] = ""

    changed = True
    while maps.iterations < max_iterations:
        if not changed:
            late = [key for key in deferred if key not in maps.var_prefixes]
            deferred = []
            if not late:
                break
            for key in late:
                maps.var_prefixes[key] = ""
            logger.debug(f"Seeding {len(late)} unreached root(s) with the empty prefix")

        changed = False
        maps.iterations += 1

        for edge in edges:
            parent_key = (edge.in_file, edge.parent_var)
            parent_prefix: Optional[str] = maps.var_prefixes.get(parent_key)

            if parent_prefix is None and edge.in_file in maps.file_prefixes:
                parent_prefix = maps.file_prefixes[edge.in_file]
                maps.var_prefixes[parent_key] = parent_prefix
                changed = True

            if parent_prefix is None:
                continue

            full_prefix = join_paths(parent_prefix, edge.mount_path)

            if edge.child_file is not None:
                if edge.child_file not in maps.file_prefixes:
                    maps.file_prefixes[edge.child_file] = full_prefix
                    changed = True
            else:
                child_key = (edge.in_file, edge.child_var)
                if child_key not in maps.var_prefixes:
                    maps.var_prefixes[child_key] = full_prefix
                    changed = True

    maps.converged = not changed and all(key in maps.var_prefixes for key in deferred)
    if not maps.converged:
        logger.debug(f"Prefix resolution stopped at the {max_iterations}-pass cap; unresolved mounts keep literal paths")
    logger.debug(
        f"Resolved {len(maps.file_prefixes)} file prefix(es) and "
        f"{len(maps.var_prefixes)} variable prefix(es) in {maps.iterations} pass(es)"
    )
    return maps
