import json
from pathlib import Path

import pytest

from routemap import cli
from routemap.config import RouteMapConfig
from routemap.scanner import main, resolve_project

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def no_config(tmp_path):
    return ["--config", str(tmp_path / "routemap.yaml")]


def test_json_output(no_config, capsys):
    code = main([str(FIXTURES / "hono_app"), "--json"] + no_config)

    payload = json.loads(capsys.readouterr().out)
    assert code == 0
    assert [f"{r['method']} {r['path']}" for r in payload][:2] == ["GET /health", "POST /api/orders"]


def test_framework_detected_from_package_json(no_config, capsys):
    code = main([str(FIXTURES / "next_app"), "--json"] + no_config)

    payload = json.loads(capsys.readouterr().out)
    assert code == 0
    assert payload[0]["file_path"] == "app/route.ts"


def test_summary_and_output_file(tmp_path, no_config, capsys):
    output = tmp_path / "routes.json"

    code = main([str(FIXTURES / "hono_app"), "--framework", "hono", "--output", str(output)] + no_config)

    out = capsys.readouterr().out
    assert code == 0
    assert "Total Routes: 6" in out
    assert "/api/orders/admin/:id/refund" in out
    assert len(json.loads(output.read_text())) == 6


def test_default_framework_from_config(tmp_path, capsys):
    config = tmp_path / "routemap.yaml"
    config.write_text("default_framework: nextjs\n")

    code = main([str(FIXTURES / "hono_app"), "--json", "--config", str(config)])

    assert code == 0
    assert json.loads(capsys.readouterr().out) == []


def test_missing_target_directory(tmp_path, no_config, capsys):
    code = main([str(tmp_path / "nope")] + no_config)

    assert code == 2
    assert "does not exist" in capsys.readouterr().out


def test_no_target(no_config, capsys):
    assert main(no_config) == 2
    assert "Must specify a project directory" in capsys.readouterr().out


def test_cli_exit_code(monkeypatch, tmp_path):
    monkeypatch.setattr(
        "sys.argv",
        ["routemap", str(FIXTURES / "hono_app"), "--json", "--config", str(tmp_path / "c.yaml")],
    )

    with pytest.raises(SystemExit) as exc:
        cli.main()

    assert exc.value.code == 0


def test_summary_reports_detected_orm(no_config, capsys):
    code = main([str(FIXTURES / "next_app")] + no_config)

    out = capsys.readouterr().out
    assert code == 0
    assert "Strategy: nextjs" in out
    assert "ORM: prisma" in out


def test_requested_framework_keeps_detected_orm(tmp_path):
    (tmp_path / "package.json").write_text('{"dependencies": {"hono": "4", "drizzle-orm": "0.30"}}')
    (tmp_path / "drizzle.config.ts").write_text("export default {};\n")

    project = resolve_project(str(tmp_path), "express", RouteMapConfig())

    assert project.framework == "express"
    assert project.orm == "drizzle"
    assert project.orm_schema_path == "drizzle.config.ts"

    from_config = resolve_project(str(tmp_path), None, RouteMapConfig(default_framework="fastify"))
    assert from_config.framework == "fastify"
