from routemap.utils.import_resolver import ImportResolver
from routemap.utils.mount_graph import MountEdge, extract_file_mount_edges, extract_mount_edges
from routemap.utils.syntax_index import build_index


def _edges(root, *rel_paths):
    paths = [str(root / p) for p in rel_paths]
    index = build_index(paths)
    return extract_mount_edges(index, ImportResolver(index.paths))


def test_local_mount_edge(make_project):
    root = make_project({
        "src/index.ts": """
            const app = new Hono();
            const api = new Hono();
            app.route("/api", api);
        """,
    })

    edges = _edges(root, "src/index.ts")

    assert edges == [
        MountEdge(
            parent_var="app",
            mount_path="/api",
            child_var="api",
            child_file=None,
            in_file=str(root / "src/index.ts"),
        )
    ]


def test_imported_children_carry_resolved_file(make_project):
    root = make_project({
        "src/index.ts": """
            import users from "./users";
            import { ordersRouter as orders } from "./orders";
            app.route("/users", users);
            app.route("/orders", orders);
        """,
        "src/users.ts": "export default new Hono();\n",
        "src/orders/index.ts": "export const ordersRouter = new Hono();\n",
    })

    edges = _edges(root, "src/index.ts", "src/orders/index.ts", "src/users.ts")

    assert [(e.mount_path, e.child_var, e.child_file) for e in edges] == [
        ("/users", "users", str(root / "src/users.ts")),
        ("/orders", "orders", str(root / "src/orders/index.ts")),
    ]


def test_package_import_child_is_treated_as_local(make_project):
    root = make_project({
        "src/index.ts": """
            import { authRoutes } from "@acme/auth";
            app.route("/auth", authRoutes);
        """,
    })

    (edge,) = _edges(root, "src/index.ts")

    assert edge.child_file is None
    assert edge.child_var == "authRoutes"


def test_non_mount_shapes_are_ignored(make_project):
    root = make_project({
        "src/index.ts": """
            app.route(prefix, sub);
            app.route("/only-path");
            app.route(`/template`, sub);
            app.route("", sub);
            app.mount("/legacy", legacyHandler);
            route("/bare", sub);
        """,
    })

    assert _edges(root, "src/index.ts") == []


def test_nested_receiver_text_is_kept(make_project):
    root = make_project({
        "src/index.ts": 'server.app.route("/v2", v2);\n',
    })
    index = build_index([str(root / "src/index.ts")])
    (parsed,) = list(index)

    (edge,) = extract_file_mount_edges(parsed, ImportResolver(index.paths))

    assert edge.parent_var == "server.app"
    assert edge.mount_path == "/v2"
