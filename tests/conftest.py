import textwrap

import pytest


@pytest.fixture
def make_project(tmp_path):
    """Write {relative path: source} into a fresh project directory."""

    def _make(files):
        for rel_path, content in files.items():
            target = tmp_path / rel_path
            target.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                target.write_bytes(content)
            else:
                target.write_text(textwrap.dedent(content).lstrip("\n"), encoding="utf-8")
        return tmp_path

    return _make
