import pytest

from routemap.utils.mount_graph import MountEdge
from routemap.utils.prefix_resolver import find_roots, join_paths, resolve_prefixes

INDEX = "/proj/src/index.ts"
USERS = "/proj/src/users.ts"
ADMIN = "/proj/src/admin.ts"


def _local(parent, path, child, in_file=INDEX):
    return MountEdge(parent_var=parent, mount_path=path, child_var=child, child_file=None, in_file=in_file)


def _imported(parent, path, child, child_file, in_file=INDEX):
    return MountEdge(parent_var=parent, mount_path=path, child_var=child, child_file=child_file, in_file=in_file)


@pytest.mark.parametrize(
    "prefix,path,expected",
    [
        ("", "/users", "/users"),
        ("/api", "/users", "/api/users"),
        ("/api", "/", "/api"),
        ("/api/", "/users", "/api/users"),
        ("/api", "users", "/api/users"),
        ("", "/", "/"),
    ],
)
def test_join_paths(prefix, path, expected):
    assert join_paths(prefix, path) == expected


def test_roots_are_parents_never_mounted_locally():
    edges = [_local("app", "/api", "sub"), _local("sub", "/v1", "leaf")]

    assert find_roots(edges) == {(INDEX, "app")}


def test_local_chain_resolves_regardless_of_edge_order():
    edges = [_local("mid", "/b", "leaf"), _local("app", "/a", "mid")]

    maps = resolve_prefixes(edges)

    assert maps.var_prefixes[(INDEX, "app")] == ""
    assert maps.var_prefixes[(INDEX, "mid")] == "/a"
    assert maps.var_prefixes[(INDEX, "leaf")] == "/a/b"
    assert maps.converged


def test_imported_file_prefix_seeds_its_own_router():
    edges = [
        _imported("app", "/users", "users", USERS),
        _local("users", "/admin", "admin", in_file=USERS),
    ]

    maps = resolve_prefixes(edges)

    assert maps.file_prefixes[USERS] == "/users"
    assert maps.var_prefixes[(USERS, "users")] == "/users"
    assert maps.lookup(USERS, "admin") == "/users/admin"
    # Any other receiver in the mounted file falls back to the file prefix.
    assert maps.lookup(USERS, "somethingElse") == "/users"


def test_first_mount_wins():
    edges = [_local("app", "/v1", "sub"), _local("app", "/v2", "sub")]

    maps = resolve_prefixes(edges)

    assert maps.lookup(INDEX, "sub") == "/v1"


def test_cycle_between_files_terminates_with_empty_root_prefixes():
    edges = [
        _imported("a", "/b", "b", USERS, in_file=ADMIN),
        _imported("b", "/a", "a", ADMIN, in_file=USERS),
    ]

    maps = resolve_prefixes(edges)

    assert maps.converged
    assert maps.iterations <= 10
    assert maps.lookup(ADMIN, "a") == ""
    assert maps.lookup(USERS, "b") == ""


def test_unreached_mounted_file_still_composes_local_sub_apps():
    edges = [
        _imported("a", "/b", "b", USERS, in_file=ADMIN),
        _imported("b", "/a", "a", ADMIN, in_file=USERS),
        _local("b", "/s", "sub", in_file=USERS),
    ]

    maps = resolve_prefixes(edges)

    assert maps.lookup(USERS, "sub") == "/s"
    assert maps.lookup(USERS, "b") == ""


def test_late_seeding_respects_iteration_cap():
    edges = [
        _imported("a", "/b", "b", USERS, in_file=ADMIN),
        _imported("b", "/a", "a", ADMIN, in_file=USERS),
    ]

    maps = resolve_prefixes(edges, max_iterations=1)

    assert maps.iterations == 1
    assert not maps.converged
    assert maps.var_prefixes == {}


def test_cycle_reachable_from_root_keeps_first_prefix():
    edges = [
        _imported("app", "/a", "a", ADMIN),
        _imported("a", "/b", "b", USERS, in_file=ADMIN),
        _imported("b", "/x", "a", ADMIN, in_file=USERS),
    ]

    maps = resolve_prefixes(edges)

    assert maps.file_prefixes == {ADMIN: "/a", USERS: "/a/b"}
    assert maps.converged


def test_iteration_cap_leaves_deep_chain_unresolved():
    edges = [
        _local("c", "/d", "leaf"),
        _local("b", "/c", "c"),
        _local("app", "/b", "b"),
    ]

    capped = resolve_prefixes(edges, max_iterations=1)

    assert capped.iterations == 1
    assert not capped.converged
    assert capped.lookup(INDEX, "b") == "/b"
    assert capped.lookup(INDEX, "leaf") == ""

    full = resolve_prefixes(edges)
    assert full.lookup(INDEX, "leaf") == "/b/c/d"


def test_no_edges():
    maps = resolve_prefixes([])

    assert maps.lookup(INDEX, "app") == ""
    assert maps.iterations == 1
