"""Shared test fixtures for Archlint."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from collections.abc import Callable

FIXTURES_DIR = Path(__file__).parent / "fixtures"
ADR_FIXTURES_DIR = FIXTURES_DIR / "adr"


def _read_fixture(name: str) -> str:
    return (ADR_FIXTURES_DIR / name).read_text(encoding="utf-8")


@pytest.fixture()
def load_adr() -> Callable[[str], str]:
    """Return a loader for ADR fixture files by name."""
    return _read_fixture


@pytest.fixture()
def valid_adr_text() -> str:
    """A complete ADR that passes every rule."""
    return _read_fixture("valid-adr.md")


@pytest.fixture()
def adr_dir(tmp_path: Path) -> Path:
    """Directory with the three ADR fixtures plus a non-Markdown file."""
    target = tmp_path / "adr"
    target.mkdir()
    for fixture in sorted(ADR_FIXTURES_DIR.glob("*.md")):
        (target / fixture.name).write_text(fixture.read_text(encoding="utf-8"))
    (target / "README.txt").write_text("not an ADR\n")
    return target


@pytest.fixture()
def source_tree(tmp_path: Path) -> Path:
    """Small source tree with one oversized TypeScript file in a subdirectory.

    Layout:
    - src/small.py        (2 effective lines)
    - src/notes.txt       (unsupported, ignored)
    - src/nested/large.ts (70 effective lines)
    """
    src = tmp_path / "src"
    nested = src / "nested"
    nested.mkdir(parents=True)
    (src / "small.py").write_text("import os\n\n# comment\ndef f():\n    return 1\n")
    (src / "notes.txt").write_text("just text\n")
    (nested / "large.ts").write_text(
        "\n".join(f"const var{i} = {i};" for i in range(70))
    )
    return tmp_path
