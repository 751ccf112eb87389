"""Line classifier: split source text into code, blank, comment, and import lines."""

from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------


class LineKind(enum.Enum):
    """Kind of a single source line."""

    CODE = "code"
    BLANK = "blank"
    COMMENT = "comment"
    IMPORT = "import"


class BlockState(enum.Enum):
    """Scanner state: outside or inside a multi-line comment/docstring."""

    NORMAL = "normal"
    IN_BLOCK = "in_block"


@dataclass(frozen=True)
class ClassifiedLine:
    """One input line together with its kind."""

    line_number: int  # 1-based
    raw: str
    kind: LineKind


@dataclass(frozen=True)
class Classification:
    """Classified lines plus the scanner state after the last line.

    ``final_state`` is :attr:`BlockState.IN_BLOCK` when the text ends inside
    an unterminated block comment or docstring.
    """

    lines: list[ClassifiedLine] = field(default_factory=list)
    final_state: BlockState = BlockState.NORMAL


@dataclass(frozen=True)
class LanguageSyntax:
    """Line-level comment and import syntax for one language family."""

    block_delimiters: tuple[tuple[str, str], ...]  # (opener, closer)
    line_comment: str
    import_patterns: tuple[re.Pattern[str], ...]


# ---------------------------------------------------------------------------
# Syntax tables
# ---------------------------------------------------------------------------

TYPESCRIPT_SYNTAX = LanguageSyntax(
    block_delimiters=(("/*", "*/"),),
    line_comment="//",
    import_patterns=(
        re.compile(r"^import\s"),
        re.compile(r"^export\s+\{"),
        re.compile(r"^export\s+\*\s+from"),
        re.compile(r"^const\s+\w+\s*=\s*require\("),
    ),
)

PYTHON_SYNTAX = LanguageSyntax(
    block_delimiters=(('"""', '"""'), ("'''", "'''")),
    line_comment="#",
    import_patterns=(
        re.compile(r"^import\s"),
        re.compile(r"^from\s+\S+\s+import\s"),
    ),
)

_SYNTAX_BY_LANGUAGE: dict[str, LanguageSyntax] = {
    "typescript": TYPESCRIPT_SYNTAX,
    "javascript": TYPESCRIPT_SYNTAX,
    "python": PYTHON_SYNTAX,
}

_FALLBACK_COMMENT_PREFIXES: tuple[str, ...] = ("#", "//")


# ---------------------------------------------------------------------------
# State machine
# ---------------------------------------------------------------------------


def _step(
    syntax: LanguageSyntax,
    state: BlockState,
    closer: str,
    trimmed: str,
) -> tuple[LineKind, BlockState, str]:
    """Classify one trimmed line and return ``(kind, next_state, active_closer)``."""
    if not trimmed:
        return LineKind.BLANK, state, closer

    if state is BlockState.IN_BLOCK:
        if closer in trimmed:
            return LineKind.COMMENT, BlockState.NORMAL, ""
        return LineKind.COMMENT, state, closer

    for opener, block_closer in syntax.block_delimiters:
        if trimmed.startswith(opener):
            if trimmed.find(block_closer, len(opener)) == -1:
                return LineKind.COMMENT, BlockState.IN_BLOCK, block_closer
            return LineKind.COMMENT, BlockState.NORMAL, ""

    if trimmed.startswith(syntax.line_comment):
        return LineKind.COMMENT, state, closer

    if any(pattern.match(trimmed) for pattern in syntax.import_patterns):
        return LineKind.IMPORT, state, closer

    return LineKind.CODE, state, closer


def _classify_fallback(source: str) -> Classification:
    """Degraded heuristic for unknown languages: no imports, no block tracking."""
    lines: list[ClassifiedLine] = []
    for idx, raw in enumerate(source.split("\n"), start=1):
        trimmed = raw.strip()
        if not trimmed:
            kind = LineKind.BLANK
        elif trimmed.startswith(_FALLBACK_COMMENT_PREFIXES):
            kind = LineKind.COMMENT
        else:
            kind = LineKind.CODE
        lines.append(ClassifiedLine(idx, raw, kind))
    return Classification(lines=lines)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def classify_with_state(source: str, language: str) -> Classification:
    """Classify every line of *source* and report the final scanner state.

    Lines are produced by splitting on ``"\\n"``, so a trailing newline
    yields a final empty (blank) line.  Unknown languages fall back to a
    degraded classifier that only recognises blank lines and ``#``/``//``
    comments.
    """
    syntax = _SYNTAX_BY_LANGUAGE.get(language)
    if syntax is None:
        logger.debug("No syntax table for %r, using fallback classifier", language)
        return _classify_fallback(source)

    lines: list[ClassifiedLine] = []
    state = BlockState.NORMAL
    closer = ""
    for idx, raw in enumerate(source.split("\n"), start=1):
        kind, state, closer = _step(syntax, state, closer, raw.strip())
        lines.append(ClassifiedLine(idx, raw, kind))

    if state is BlockState.IN_BLOCK:
        logger.debug("Unterminated block comment (expecting %r) at end of input", closer)

    return Classification(lines=lines, final_state=state)


def classify(source: str, language: str) -> list[ClassifiedLine]:
    """Return the classified lines of *source* for *language*."""
    return classify_with_state(source, language).lines


def classify_typescript(source: str) -> list[ClassifiedLine]:
    """Classify TypeScript/JavaScript source."""
    return classify(source, "typescript")


def classify_python(source: str) -> list[ClassifiedLine]:
    """Classify Python source (triple-quoted strings count as comments)."""
    return classify(source, "python")
