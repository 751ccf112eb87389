"""ADR Markdown parser: title, header metadata, and heading-delimited sections."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

# Title is the first level-1 heading only.
_TITLE_RE = re.compile(r"^#\s")
_TITLE_PREFIX_RE = re.compile(r"^#+\s+")

# Bold header labels; the value stops at a newline, a pipe, or another bold marker.
_DATE_RE = re.compile(r"\*\*Date:\*\*\s*([^\n|*]+)", re.IGNORECASE)
_STATUS_RE = re.compile(r"\*\*Status:\*\*\s*([^\n|*]+)", re.IGNORECASE)
_DECIDERS_RE = re.compile(r"\*\*Deciders?:\*\*\s*([^\n|*]+)", re.IGNORECASE)

# Level-2 and level-3 headings delimit sections.
_SECTION_RE = re.compile(r"^#{2,3}\s+(.+)$", re.MULTILINE)

_TABLE_ROW_RE = re.compile(r"^\|[^|\n]+\|[^|\n]+\|.*$", re.MULTILINE)
_TABLE_SEPARATOR_CELL_RE = re.compile(r"^\s*:?-+:?\s*$")
_LIST_ITEM_RE = re.compile(r"^(?:[-*+]|\d+[.)])\s+\S", re.MULTILINE)

REJECTION_KEYWORDS: tuple[str, ...] = (
    "rejected",
    "rejection",
    "why rejected",
    "not chosen",
    "discarded",
)

# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AdrSection:
    """A level-2/3 section.

    ``start``/``end`` are raw offsets into the document; ``content`` is that
    span trimmed of surrounding whitespace and still includes the heading line.
    """

    heading: str
    content: str
    start: int
    end: int


@dataclass(frozen=True)
class ParsedAdr:
    """Structured view of one ADR document."""

    title: str
    date: str | None
    status: str | None
    deciders: str | None
    sections: dict[str, AdrSection] = field(default_factory=dict)
    raw_content: str = ""
    file_path: str = ""


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def _extract_match(content: str, pattern: re.Pattern[str]) -> str | None:
    m = pattern.search(content)
    return m.group(1).strip() if m else None


def _extract_title(content: str) -> str:
    for line in content.split("\n"):
        if _TITLE_RE.match(line):
            return _TITLE_PREFIX_RE.sub("", line, count=1).strip()
    return ""


def parse_adr(content: str, file_path: str = "") -> ParsedAdr:
    """Parse an ADR Markdown document.

    Never fails: missing headings yield an empty title or no sections and
    missing header fields yield ``None``.  A repeated heading replaces the
    earlier section under the same key.
    """
    positions = [(m.group(1).strip(), m.start()) for m in _SECTION_RE.finditer(content)]

    sections: dict[str, AdrSection] = {}
    for idx, (heading, start) in enumerate(positions):
        end = positions[idx + 1][1] if idx + 1 < len(positions) else len(content)
        sections[heading.lower()] = AdrSection(
            heading=heading,
            content=content[start:end].strip(),
            start=start,
            end=end,
        )

    return ParsedAdr(
        title=_extract_title(content),
        date=_extract_match(content, _DATE_RE),
        status=_extract_match(content, _STATUS_RE),
        deciders=_extract_match(content, _DECIDERS_RE),
        sections=sections,
        raw_content=content,
        file_path=file_path,
    )


# ---------------------------------------------------------------------------
# Section lookup
# ---------------------------------------------------------------------------


def find_section(adr: ParsedAdr, name: str) -> AdrSection | None:
    """Return the section whose key equals *name*, else the first key containing it.

    Matching is case-insensitive substring containment, so ``alternatives``
    finds ``alternatives considered``.
    """
    key = name.lower()
    exact = adr.sections.get(key)
    if exact is not None:
        return exact
    for section_key, section in adr.sections.items():
        if key in section_key:
            return section
    return None


def has_section(adr: ParsedAdr, name: str) -> bool:
    """Return True if a section matching *name* exists."""
    return find_section(adr, name) is not None


def get_section_content(adr: ParsedAdr, name: str) -> str:
    """Return the content of the section matching *name*, or ``""``."""
    section = find_section(adr, name)
    return section.content if section is not None else ""


# ---------------------------------------------------------------------------
# Alternatives
# ---------------------------------------------------------------------------


def _cells(row: str) -> list[str]:
    return [cell.strip() for cell in row.strip().strip("|").split("|")]


def _is_separator(row: str) -> bool:
    return all(_TABLE_SEPARATOR_CELL_RE.match(cell) for cell in _cells(row))


def _count_table_rows(content: str) -> int:
    rows = [m.group(0) for m in _TABLE_ROW_RE.finditer(content)]
    count = 0
    for idx, row in enumerate(rows):
        if _is_separator(row):
            continue
        if idx + 1 < len(rows) and _is_separator(rows[idx + 1]):
            continue  # header row
        if "alternative" in _cells(row)[0].lower():
            continue
        count += 1
    return count


def count_alternatives(adr: ParsedAdr) -> int:
    """Count alternatives listed in the Alternatives section.

    Table data rows are preferred; when the section has no table rows,
    bullet and numbered list items at the start of a line are counted.
    """
    content = get_section_content(adr, "alternatives")
    if not content:
        return 0
    table_rows = _count_table_rows(content)
    if table_rows > 0:
        return table_rows
    return len(_LIST_ITEM_RE.findall(content))


def alternatives_have_rejection_reasons(adr: ParsedAdr) -> bool:
    """Return True if the Alternatives section explains why options were rejected."""
    content = get_section_content(adr, "alternatives").lower()
    if not content:
        return False
    return any(keyword in content for keyword in REJECTION_KEYWORDS)
