"""Effective line counter and split-suggestion heuristic for the micro-task rule.

"Effective lines" are lines of actual code: blank, comment, and import lines
do not count.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from archlint.microtask.classifier import LineKind, classify

if TYPE_CHECKING:
    from collections.abc import Sequence

    from archlint.microtask.classifier import ClassifiedLine

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DEFAULT_MAX_LINES = 50

_EXTENSION_LANGUAGES: dict[str, str] = {
    ".ts": "typescript",
    ".tsx": "typescript",
    ".js": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".py": "python",
}

# Natural split points: top-level functions/classes and indented method-like
# lines that open a block. Only a return type may sit between the parameter list
# and the opening brace, so arrow-function callbacks never match.
_BOUNDARY_RE = re.compile(
    r"^(?:export\s+)?(?:default\s+)?(?:async\s+)?function\*?\s+\w+"
    r"|^(?:export\s+)?(?:default\s+)?(?:abstract\s+)?class\s+\w+"
    r"|^(?:async\s+)?def\s+\w+"
    r"|^\s+(?:async\s+)?def\s+\w+\s*\(.*:\s*$"
    r"|^\s+(?:(?:public|private|protected|static|async|get|set)\s+)*"
    r"(\w+)\s*\([^)]*\)\s*(?::\s*[^={;]+)?[{:]\s*$"
)

_CONTROL_KEYWORDS: frozenset[str] = frozenset(
    {"if", "for", "while", "switch", "catch", "with", "return", "elif", "except", "function"}
)

# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LineBreakdown:
    """Per-kind line counts.  ``total`` always equals the sum of the others."""

    total: int = 0
    effective: int = 0
    blank: int = 0
    comment: int = 0
    imports: int = 0


@dataclass(frozen=True)
class SplitSuggestion:
    """A proposed extraction unit with an inclusive source line range."""

    name: str
    line_range: tuple[int, int]
    estimated_lines: int


@dataclass(frozen=True)
class LineCountResult:
    """Outcome of counting one source file against the line limit."""

    file_path: str
    language: str
    breakdown: LineBreakdown
    exceeds_limit: bool
    split_suggestions: list[SplitSuggestion] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Language detection
# ---------------------------------------------------------------------------


def detect_language(file_path: str) -> str:
    """Map a file path to ``typescript``, ``javascript``, ``python`` or ``unknown``."""
    dot = file_path.rfind(".")
    if dot == -1:
        return "unknown"
    return _EXTENSION_LANGUAGES.get(file_path[dot:].lower(), "unknown")


def supported_extensions() -> frozenset[str]:
    """Return the file extensions the linter knows how to classify."""
    return frozenset(_EXTENSION_LANGUAGES)


# ---------------------------------------------------------------------------
# Counting
# ---------------------------------------------------------------------------


def compute_breakdown(lines: Sequence[ClassifiedLine]) -> LineBreakdown:
    """Count lines by kind."""
    counts = dict.fromkeys(LineKind, 0)
    for line in lines:
        counts[line.kind] += 1
    return LineBreakdown(
        total=len(lines),
        effective=counts[LineKind.CODE],
        blank=counts[LineKind.BLANK],
        comment=counts[LineKind.COMMENT],
        imports=counts[LineKind.IMPORT],
    )


def count_effective_lines(
    source: str,
    file_path: str,
    max_lines: int = DEFAULT_MAX_LINES,
) -> LineCountResult:
    """Classify *source*, count effective lines and check them against *max_lines*.

    Split suggestions are only generated when the limit is exceeded.
    """
    language = detect_language(file_path)
    lines = classify(source, language)
    breakdown = compute_breakdown(lines)

    exceeds_limit = breakdown.effective > max_lines
    suggestions = generate_split_suggestions(lines, max_lines) if exceeds_limit else []

    logger.debug(
        "%s (%s): %d effective of %d lines, limit %d",
        file_path,
        language,
        breakdown.effective,
        breakdown.total,
        max_lines,
    )

    return LineCountResult(
        file_path=file_path,
        language=language,
        breakdown=breakdown,
        exceeds_limit=exceeds_limit,
        split_suggestions=suggestions,
    )


# ---------------------------------------------------------------------------
# Split suggestions
# ---------------------------------------------------------------------------


def is_boundary(line: ClassifiedLine) -> bool:
    """Return True if *line* starts a function, class, or method body."""
    if line.kind is not LineKind.CODE:
        return False
    match = _BOUNDARY_RE.match(line.raw)
    if match is None:
        return False
    method_name = match.group(1)
    return method_name is None or method_name not in _CONTROL_KEYWORDS


def _equal_chunks(code_lines: list[ClassifiedLine], max_lines: int) -> list[SplitSuggestion]:
    total = len(code_lines)
    if total == 0:
        return []
    chunk_size = math.ceil(total / math.ceil(total / max(max_lines, 1)))

    suggestions: list[SplitSuggestion] = []
    for start in range(0, total, chunk_size):
        chunk = code_lines[start : start + chunk_size]
        suggestions.append(
            SplitSuggestion(
                name=f"extracted-unit-{len(suggestions) + 1}",
                line_range=(chunk[0].line_number, chunk[-1].line_number),
                estimated_lines=len(chunk),
            )
        )
    return suggestions


def generate_split_suggestions(
    lines: Sequence[ClassifiedLine],
    max_lines: int,
) -> list[SplitSuggestion]:
    """Propose a partition of the code lines into extractable units.

    With two or more boundaries, each boundary opens a unit that runs to the
    line before the next boundary (the last one runs to end of file).  Code
    before the first boundary is attached to a leading unit starting at
    line 1.  Units without code lines are dropped.

    With at most one boundary there is no natural decomposition, so the
    code lines are cut into equal chunks of at most *max_lines*.
    """
    code_lines = [line for line in lines if line.kind is LineKind.CODE]
    boundaries = [line.line_number for line in lines if is_boundary(line)]

    if len(boundaries) <= 1:
        return _equal_chunks(code_lines, max_lines)

    if code_lines and code_lines[0].line_number < boundaries[0]:
        boundaries.insert(0, 1)

    last_line = lines[-1].line_number
    suggestions: list[SplitSuggestion] = []
    for idx, start in enumerate(boundaries):
        end = boundaries[idx + 1] - 1 if idx + 1 < len(boundaries) else last_line
        code_count = sum(1 for line in code_lines if start <= line.line_number <= end)
        if code_count == 0:
            continue
        suggestions.append(
            SplitSuggestion(
                name=f"unit-{len(suggestions) + 1}",
                line_range=(start, end),
                estimated_lines=code_count,
            )
        )
    return suggestions
