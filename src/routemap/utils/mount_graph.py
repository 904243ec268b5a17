"""Sub-router mount graph extraction.

Records every `<parent>.route("<path>", <child>)` call site as a MountEdge.
The grammar is narrow: the method must be named `route`, the
first argument must be a plain string literal and a child argument must be
present. Anything else is not a mount.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from .import_resolver import ImportResolver, import_bindings
from .syntax_index import ParsedFile, call_arguments, iter_calls, member_callee, string_value

logger = logging.getLogger(__name__)

MOUNT_METHOD = "route"


@dataclass(frozen=True)
class MountEdge:
    parent_var: str
    mount_path: str
    child_var: str
    child_file: Optional[str]  # absolute path when the child is an imported binding
    in_file: str


def extract_file_mount_edges(parsed: ParsedFile, resolver: ImportResolver) -> List[MountEdge]:
    edges: List[MountEdge] = []
    bindings = import_bindings(parsed, resolver)

    for call in iter_calls(parsed):
        callee = member_callee(call)
        if callee is None:
            continue
        receiver, method = callee
        if method != MOUNT_METHOD:
            continue

        args = call_arguments(call)
        if len(args) < 2:
            continue
        mount_path = string_value(args[0])
        if not mount_path:
            continue

        child_var = parsed.text(args[1])
        edges.append(
            MountEdge(
                parent_var=parsed.text(receiver),
                mount_path=mount_path,
                child_var=child_var,
                child_file=bindings.get(child_var),
                in_file=parsed.path,
            )
        )
    return edges


def extract_mount_edges(files: Iterable[ParsedFile], resolver: ImportResolver) -> List[MountEdge]:
    """Mount edges of all files, in file order then document order."""
    edges: List[MountEdge] = []
    for parsed in files:
        file_edges = extract_file_mount_edges(parsed, resolver)
        if file_edges:
            logger.debug(f"{len(file_edges)} mount edge(s) in {parsed.path}")
        edges.extend(file_edges)
    return edges
