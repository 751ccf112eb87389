"""Micro-task linter: effective line counting, limit check, split suggestions."""

from archlint.microtask.classifier import (
    BlockState,
    ClassifiedLine,
    Classification,
    LineKind,
    classify,
    classify_python,
    classify_typescript,
    classify_with_state,
)
from archlint.microtask.line_counter import (
    DEFAULT_MAX_LINES,
    LineBreakdown,
    LineCountResult,
    SplitSuggestion,
    count_effective_lines,
    detect_language,
    generate_split_suggestions,
    supported_extensions,
)
from archlint.microtask.reporters import format_json, format_rich

__all__ = [
    "DEFAULT_MAX_LINES",
    "BlockState",
    "Classification",
    "ClassifiedLine",
    "LineBreakdown",
    "LineCountResult",
    "LineKind",
    "SplitSuggestion",
    "classify",
    "classify_python",
    "classify_typescript",
    "classify_with_state",
    "count_effective_lines",
    "detect_language",
    "format_json",
    "format_rich",
    "generate_split_suggestions",
    "supported_extensions",
]
