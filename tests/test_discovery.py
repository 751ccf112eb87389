"""Tests for archlint.discovery: resolving CLI targets into input files."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from archlint.discovery import (
    TargetNotFoundError,
    collect_adr_files,
    collect_source_files,
    read_source,
)

if TYPE_CHECKING:
    from pathlib import Path


class TestCollectAdrFiles:
    def test_directory_lists_markdown_sorted(self, adr_dir: Path) -> None:
        files = collect_adr_files(adr_dir)
        assert [f.name for f in files] == [
            "invalid-no-alternatives.md",
            "invalid-no-compliance.md",
            "valid-adr.md",
        ]

    def test_directory_is_not_recursive(self, adr_dir: Path) -> None:
        (adr_dir / "archive").mkdir()
        (adr_dir / "archive" / "old.md").write_text("# Old\n")
        assert all(f.parent == adr_dir for f in collect_adr_files(adr_dir))

    def test_single_markdown_file(self, adr_dir: Path) -> None:
        target = adr_dir / "valid-adr.md"
        assert collect_adr_files(target) == [target]

    def test_non_markdown_file_is_empty(self, adr_dir: Path) -> None:
        assert collect_adr_files(adr_dir / "README.txt") == []

    def test_missing_target(self, tmp_path: Path) -> None:
        with pytest.raises(TargetNotFoundError, match="path not found"):
            collect_adr_files(tmp_path / "missing")


class TestCollectSourceFiles:
    def test_flat_directory(self, source_tree: Path) -> None:
        files = collect_source_files(source_tree / "src")
        assert [f.name for f in files] == ["small.py"]

    def test_recursive_directory(self, source_tree: Path) -> None:
        files = collect_source_files(source_tree / "src", recursive=True)
        assert [f.name for f in files] == ["large.ts", "small.py"]

    def test_single_supported_file(self, source_tree: Path) -> None:
        target = source_tree / "src" / "small.py"
        assert collect_source_files(target) == [target]

    def test_unsupported_file(self, source_tree: Path) -> None:
        assert collect_source_files(source_tree / "src" / "notes.txt") == []

    def test_extension_match_is_case_insensitive(self, tmp_path: Path) -> None:
        (tmp_path / "Legacy.JS").write_text("var x = 1;\n")
        assert [f.name for f in collect_source_files(tmp_path)] == ["Legacy.JS"]

    def test_symlinked_directory_is_not_followed(self, tmp_path: Path) -> None:
        (tmp_path / "a.py").write_text("x = 1\n")
        (tmp_path / "loop").symlink_to(tmp_path, target_is_directory=True)
        files = collect_source_files(tmp_path, recursive=True)
        assert files == [tmp_path / "a.py"]

    def test_missing_target(self, tmp_path: Path) -> None:
        with pytest.raises(TargetNotFoundError):
            collect_source_files(tmp_path / "nope.ts")


class TestReadSource:
    def test_reads_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "a.py"
        path.write_text("name = 'café'\n", encoding="utf-8")
        assert read_source(path) == "name = 'café'\n"

    def test_undecodable_bytes_replaced(self, tmp_path: Path) -> None:
        path = tmp_path / "b.py"
        path.write_bytes(b"x = '\xff'\n")
        assert read_source(path) == "x = '�'\n"

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            read_source(tmp_path / "missing.py")
