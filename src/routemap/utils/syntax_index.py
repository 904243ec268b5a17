"""Tree-sitter backed syntax index for TypeScript/JavaScript sources.

Parses each candidate file once and exposes the small query surface the
route discovery passes need: call expressions with their callee and
arguments, import declarations, top-level exported functions and the
leading comment of a statement.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

import tree_sitter_typescript as ts_typescript
from tree_sitter import Language, Node, Parser, Tree

from ..security import SecurityValidationError, validate_file_size

logger = logging.getLogger(__name__)

TS_LANGUAGE = Language(ts_typescript.language_typescript())
TSX_LANGUAGE = Language(ts_typescript.language_tsx())

# Plain .ts cannot use the TSX grammar: `<T>value` casts would parse as JSX.
_TYPESCRIPT_SUFFIXES = {".ts", ".mts", ".cts"}

_FUNCTION_DECLARATIONS = ("function_declaration", "generator_function_declaration")

DEFAULT_MAX_FILE_SIZE = 2 * 1024 * 1024

_ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}
_LINE_CONTINUATIONS = ("\n", "\r\n", "\r", "\u2028", "\u2029")


class FileParseError(RuntimeError):
    """Raised when a source file cannot be loaded into a syntax tree."""


@dataclass
class ImportDeclaration:
    specifier: str
    local_names: List[str] = field(default_factory=list)


@dataclass
class ParsedFile:
    path: str
    source: bytes
    tree: Tree

    @property
    def directory(self) -> str:
        return os.path.dirname(self.path)

    @property
    def root(self) -> Node:
        return self.tree.root_node

    def text(self, node: Node) -> str:
        return self.source[node.start_byte:node.end_byte].decode("utf-8")


class SyntaxIndex:
    """Ordered mapping of absolute path -> ParsedFile for one scan."""

    def __init__(self, files: Optional[Dict[str, ParsedFile]] = None):
        self._files: Dict[str, ParsedFile] = dict(files or {})

    def __iter__(self) -> Iterator[ParsedFile]:
        return iter(self._files.values())

    def __len__(self) -> int:
        return len(self._files)

    def __contains__(self, path: object) -> bool:
        return path in self._files

    def get(self, path: str) -> Optional[ParsedFile]:
        return self._files.get(path)

    @property
    def paths(self) -> List[str]:
        return list(self._files)


def _language_for(path: str) -> Language:
    if Path(path).suffix in _TYPESCRIPT_SUFFIXES:
        return TS_LANGUAGE
    return TSX_LANGUAGE


def parse_file(path: str, max_size: int = DEFAULT_MAX_FILE_SIZE) -> ParsedFile:
    """
    Parse one source file

    Args:
        path: Absolute path of the file
        max_size: Files above this many bytes are refused

    Returns:
        ParsedFile holding the source and its tree

    Raises:
        FileParseError: If the file cannot be read, decoded, or parsed
    """
    try:
        validate_file_size(Path(path), max_size=max_size)
        with open(path, "rb") as fh:
            source = fh.read()
        source.decode("utf-8")
    except (OSError, UnicodeDecodeError, SecurityValidationError) as e:
        raise FileParseError(f"Cannot load {path}: {e}") from e

    tree = Parser(_language_for(path)).parse(source)
    if tree is None:
        raise FileParseError(f"Parser produced no tree for {path}")
    if tree.root_node.has_error:
        # tree-sitter recovers from syntax errors; keep the partial tree.
        logger.debug(f"Syntax errors in {path}; using recovered tree")
    return ParsedFile(path=path, source=source, tree=tree)


def build_index(paths: Iterable[str], max_size: int = DEFAULT_MAX_FILE_SIZE) -> SyntaxIndex:
    """Parse every path, skipping files that fail to load."""
    files: Dict[str, ParsedFile] = {}
    for path in paths:
        try:
            files[path] = parse_file(path, max_size=max_size)
        except FileParseError as e:
            logger.warning(f"Skipping {path}: {e}")
    return SyntaxIndex(files)


# ------------------ Query surface ------------------

def iter_nodes(node: Node, node_type: str) -> Iterator[Node]:
    """Yield descendants of the given type in document (pre-order) order."""
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type == node_type:
            yield current
        stack.extend(reversed(current.named_children))


def iter_calls(parsed: ParsedFile) -> Iterator[Node]:
    return iter_nodes(parsed.root, "call_expression")


def call_arguments(call: Node) -> List[Node]:
    args = call.child_by_field_name("arguments")
    if args is None or args.type != "arguments":
        return []
    return [child for child in args.named_children if child.type != "comment"]


def member_callee(call: Node) -> Optional[Tuple[Node, str]]:
    """Return (receiver, property name) when the callee is `<receiver>.<name>`."""
    callee = call.child_by_field_name("function")
    if callee is None or callee.type != "member_expression":
        return None
    receiver = callee.child_by_field_name("object")
    prop = callee.child_by_field_name("property")
    if receiver is None or prop is None:
        return None
    return receiver, prop.text.decode("utf-8")


def _unescape(raw: str) -> str:
    """Value of one escape_sequence node, e.g. `\\n`, `\\x41`, `\\u{1F600}`."""
    body = raw[1:]
    if body in _LINE_CONTINUATIONS:
        return ""
    if body in _ESCAPES:
        return _ESCAPES[body]
    try:
        if body.startswith("u{") and body.endswith("}"):
            return chr(int(body[2:-1], 16))
        if body[:1] in ("x", "u") and len(body) in (3, 5):
            return chr(int(body[1:], 16))
    except ValueError:
        return body
    return body


def string_value(node: Node) -> Optional[str]:
    """Literal value of a quoted string node; None for anything else."""
    if node.type != "string":
        return None
    parts: List[str] = []
    for child in node.named_children:
        raw = child.text.decode("utf-8")
        parts.append(_unescape(raw) if child.type == "escape_sequence" else raw)
    return "".join(parts)


def import_declarations(parsed: ParsedFile) -> List[ImportDeclaration]:
    """Top-level imports with their named (alias-aware) and default bindings."""
    declarations: List[ImportDeclaration] = []
    for stmt in parsed.root.named_children:
        if stmt.type != "import_statement":
            continue
        source = stmt.child_by_field_name("source")
        specifier = string_value(source) if source is not None else None
        if specifier is None:
            continue
        decl = ImportDeclaration(specifier=specifier)
        for clause in stmt.named_children:
            if clause.type != "import_clause":
                continue
            for part in clause.named_children:
                if part.type == "identifier":
                    decl.local_names.append(parsed.text(part))
                elif part.type == "named_imports":
                    for spec in part.named_children:
                        if spec.type != "import_specifier":
                            continue
                        local = spec.child_by_field_name("alias") or spec.child_by_field_name("name")
                        if local is not None:
                            decl.local_names.append(parsed.text(local))
        declarations.append(decl)
    return declarations


def exported_functions(parsed: ParsedFile) -> List[Tuple[str, Node]]:
    """
    (exported name, declaring statement) for each top-level function the file
    exports, in declaration order. Covers `export [async] function NAME` and
    `export { NAME }` / `export { local as NAME }` naming a top-level function
    declaration of the same file. Re-exports from other modules are ignored.
    """
    declared: Dict[str, Node] = {}
    exported: List[Tuple[str, Node]] = []
    clauses: List[Node] = []

    for stmt in parsed.root.named_children:
        if stmt.type in _FUNCTION_DECLARATIONS:
            name = stmt.child_by_field_name("name")
            if name is not None:
                declared[parsed.text(name)] = stmt
            continue
        if stmt.type != "export_statement":
            continue
        decl = stmt.child_by_field_name("declaration")
        if decl is not None and decl.type in _FUNCTION_DECLARATIONS:
            name = decl.child_by_field_name("name")
            if name is not None:
                exported.append((parsed.text(name), stmt))
        elif stmt.child_by_field_name("source") is None:
            clauses.extend(c for c in stmt.named_children if c.type == "export_clause")

    for clause in clauses:
        for spec in clause.named_children:
            if spec.type != "export_specifier":
                continue
            local = spec.child_by_field_name("name")
            alias = spec.child_by_field_name("alias") or local
            if local is None or parsed.text(local) not in declared:
                continue
            exported.append((parsed.text(alias), declared[parsed.text(local)]))

    seen = set()
    functions: List[Tuple[str, Node]] = []
    for name, stmt in sorted(exported, key=lambda item: item[1].start_byte):
        if name not in seen:
            seen.add(name)
            functions.append((name, stmt))
    return functions


def enclosing_statement(node: Node) -> Optional[Node]:
    current = node.parent
    while current is not None:
        if current.type == "expression_statement":
            return current
        current = current.parent
    return None


def leading_comment(parsed: ParsedFile, stmt: Node) -> Optional[str]:
    """
    Raw text of the comment attached to the start of a statement

    Only the nearest comment counts. A `//` comment must end on the line
    directly above the statement; any comment sharing a line with the end of
    the previous statement belongs to that statement instead.
    """
    comment = stmt.prev_named_sibling
    if comment is None or comment.type != "comment":
        return None

    before = comment.prev_named_sibling
    if before is not None and before.type != "comment" and before.end_point[0] == comment.start_point[0]:
        return None

    text = parsed.text(comment)
    if text.startswith("//") and comment.end_point[0] != stmt.start_point[0] - 1:
        return None
    return text


def comment_description(text: Optional[str]) -> Optional[str]:
    """First descriptive line of a `/** */` or `//` comment, markers stripped."""
    if not text:
        return None
    if text.startswith("/**"):
        if len(text) <= 4:
            return None
        body = text[3:-2] if text.endswith("*/") else text[3:]
        for line in body.splitlines():
            line = line.strip().lstrip("*").strip()
            if line and not line.startswith("@"):
                return line
        return None
    if text.startswith("//"):
        return text[2:].strip() or None
    return None
