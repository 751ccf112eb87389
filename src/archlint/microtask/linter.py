"""Micro-task linter orchestrator: count each file and decide the outcome."""

from __future__ import annotations

from typing import TYPE_CHECKING

from archlint.discovery import read_source
from archlint.microtask.line_counter import DEFAULT_MAX_LINES, count_effective_lines

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from pathlib import Path

    from archlint.microtask.line_counter import LineCountResult


def lint_files(
    paths: Iterable[Path],
    *,
    max_lines: int = DEFAULT_MAX_LINES,
) -> list[LineCountResult]:
    """Count effective lines of each file, preserving input order.

    ``OSError`` from reading a file propagates.
    """
    return [count_effective_lines(read_source(p), str(p), max_lines) for p in paths]


def has_violations(results: Sequence[LineCountResult]) -> bool:
    """Return True if any file exceeds the line limit."""
    return any(r.exceeds_limit for r in results)
