"""Shared fixtures: a small project tree with tagged TODO markers."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest


def write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(text), encoding="utf-8")
    return path


@pytest.fixture()
def sample_project(tmp_path: Path) -> Path:
    """Create a project with known markers, including some in excluded dirs."""
    write(
        tmp_path / "app.py",
        """\
        import os

        # TODO: split this module @prio=high @resp=alice
        def main():
            pass  # todo handle errors @prio=low @due=2024-01-05
        """,
    )
    write(
        tmp_path / "lib" / "util.js",
        """\
        // TODO cache results @prio=medium @due=2024-01-14 @resp=bob,alice
        const x = 1;
        // Todo: rename @due=2024-01-25
        """,
    )
    write(
        tmp_path / "node_modules" / "dep" / "index.js",
        "// TODO vendored marker @prio=high\n",
    )
    write(
        tmp_path / "node_modules" / "dep" / "nested" / "deep.js",
        "// TODO deeper vendored marker\n",
    )
    write(tmp_path / "README.md", "Nothing to see here.\n")
    return tmp_path
