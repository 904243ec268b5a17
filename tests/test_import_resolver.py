import os

import pytest

from routemap.utils.import_resolver import ImportResolver, import_bindings
from routemap.utils.syntax_index import parse_file

SRC = "/proj/src"


def _p(*parts):
    return os.path.join(SRC, *parts)


@pytest.mark.parametrize(
    "known,specifier,expected",
    [
        ([_p("users.ts")], "./users", _p("users.ts")),
        ([_p("users.js"), _p("users.ts")], "./users", _p("users.ts")),
        ([_p("users.tsx"), _p("users.js")], "./users", _p("users.tsx")),
        ([_p("routes", "index.ts")], "./routes", _p("routes", "index.ts")),
        ([_p("routes.ts"), _p("routes", "index.ts")], "./routes", _p("routes.ts")),
        (["/proj/lib/db.ts"], "../lib/db", "/proj/lib/db.ts"),
        ([_p("users.ts")], "./users.js", _p("users.ts")),
        ([_p("users.mjs")], "./users.mjs", _p("users.mjs")),
    ],
)
def test_resolution_order(known, specifier, expected):
    assert ImportResolver(known).resolve(SRC, specifier) == expected


@pytest.mark.parametrize("specifier", ["hono", "@hono/zod-validator", "./missing", "../nowhere/index"])
def test_unresolvable_specifiers(specifier):
    resolver = ImportResolver([_p("users.ts")])

    assert resolver.resolve(SRC, specifier) is None


def test_candidates_start_with_extension_probes():
    candidates = ImportResolver([]).candidates(SRC, "./users")

    assert candidates[:4] == [_p("users.ts"), _p("users.tsx"), _p("users.js"), _p("users.jsx")]
    assert candidates[4] == _p("users", "index.ts")


def test_import_bindings_only_map_project_files(make_project):
    root = make_project({
        "src/index.ts": """
            import { Hono } from "hono";
            import users, { adminRouter as admin, audit } from "./routes/users";
            import * as helpers from "./helpers";
            import "./side-effect";
        """,
        "src/routes/users.ts": "export default {};\n",
    })
    index_path = str(root / "src/index.ts")
    users_path = str(root / "src/routes/users.ts")

    bindings = import_bindings(parse_file(index_path), ImportResolver([index_path, users_path]))

    assert bindings == {"users": users_path, "admin": users_path, "audit": users_path}
