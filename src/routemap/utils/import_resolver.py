"""Relative import resolution restricted to files of the current scan."""

from __future__ import annotations

import logging
import os
from typing import Dict, Iterable, List, Optional, Sequence

from .syntax_index import ParsedFile, import_declarations

logger = logging.getLogger(__name__)

RESOLVE_EXTENSIONS = (".ts", ".tsx", ".js", ".jsx")
_JS_SUFFIXES = (".js", ".jsx", ".mjs", ".cjs")


class ImportResolver:
    """Maps `./` and `../` specifiers to indexed absolute paths."""

    def __init__(self, known_files: Iterable[str], extensions: Sequence[str] = RESOLVE_EXTENSIONS):
        self.known_files = set(known_files)
        self.extensions = tuple(extensions)

    def candidates(self, from_dir: str, specifier: str) -> List[str]:
        """Candidate paths in resolution order."""
        base = os.path.normpath(os.path.join(from_dir, specifier))
        ordered = [base + ext for ext in self.extensions]
        ordered += [os.path.join(base, "index" + ext) for ext in self.extensions]

        # ESM-style TypeScript imports name the emitted file: "./users.js" -> users.ts
        ordered.append(base)
        stem, suffix = os.path.splitext(base)
        if suffix in _JS_SUFFIXES:
            ordered += [stem + ext for ext in self.extensions]
        return ordered

    def resolve(self, from_dir: str, specifier: str) -> Optional[str]:
        if not specifier.startswith("."):
            return None
        for candidate in self.candidates(from_dir, specifier):
            if candidate in self.known_files:
                return candidate
        logger.debug(f"Unresolved import {specifier!r} from {from_dir}")
        return None


def import_bindings(parsed: ParsedFile, resolver: ImportResolver) -> Dict[str, str]:
    """Local binding name -> absolute path for every in-project import of a file."""
    bindings: Dict[str, str] = {}
    for decl in import_declarations(parsed):
        resolved = resolver.resolve(parsed.directory, decl.specifier)
        if resolved is None:
            continue
        for name in decl.local_names:
            bindings[name] = resolved
    return bindings
