"""Tests for archlint.adr.parser: title, metadata, sections, alternatives."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from archlint.adr.parser import (
    alternatives_have_rejection_reasons,
    count_alternatives,
    find_section,
    get_section_content,
    has_section,
    parse_adr,
)

if TYPE_CHECKING:
    from collections.abc import Callable


def _adr_with_alternatives(body: str) -> str:
    return (
        "# ADR-001: Test\n\n## Context\n\nSome context.\n\n"
        f"## Alternatives Considered\n\n{body}\n"
    )


class TestTitleAndMetadata:
    """Title and bold header fields."""

    def test_title_from_first_h1(self) -> None:
        adr = parse_adr("# ADR-001: Use PostgreSQL\n\n# Second\n")
        assert adr.title == "ADR-001: Use PostgreSQL"

    def test_h2_is_not_a_title(self) -> None:
        adr = parse_adr("## Context\n\ntext\n")
        assert adr.title == ""

    def test_hash_without_space_is_not_a_title(self) -> None:
        adr = parse_adr("#hashtag\n# Real Title\n")
        assert adr.title == "Real Title"

    def test_metadata_fields(self, valid_adr_text: str) -> None:
        adr = parse_adr(valid_adr_text)
        assert adr.date == "2026-01-15"
        assert adr.status == "Accepted"
        assert adr.deciders == "Jane Doe (Lead Architect), Sam Roe (DBA)"

    def test_missing_metadata_is_none(self) -> None:
        adr = parse_adr("# Title\n\n## Context\n")
        assert adr.date is None
        assert adr.status is None
        assert adr.deciders is None

    def test_metadata_labels_case_insensitive(self) -> None:
        adr = parse_adr("**status:** proposed\n**DATE:** 2026-03-01\n**Decider:** Ana\n")
        assert adr.status == "proposed"
        assert adr.date == "2026-03-01"
        assert adr.deciders == "Ana"

    def test_metadata_value_stops_at_pipe(self) -> None:
        adr = parse_adr("**Status:** Accepted | **Date:** 2026-01-01\n")
        assert adr.status == "Accepted"
        assert adr.date == "2026-01-01"

    def test_raw_content_and_path_kept(self) -> None:
        adr = parse_adr("# T\n", "docs/adr/0001.md")
        assert adr.raw_content == "# T\n"
        assert adr.file_path == "docs/adr/0001.md"

    def test_empty_document(self) -> None:
        adr = parse_adr("")
        assert adr.title == ""
        assert adr.sections == {}


class TestSections:
    """Section splitting and lookup."""

    def test_keys_are_lowercased_headings(self, valid_adr_text: str) -> None:
        adr = parse_adr(valid_adr_text)
        assert list(adr.sections) == [
            "context",
            "decision",
            "alternatives considered",
            "consequences",
            "compliance impact",
        ]
        assert adr.sections["context"].heading == "Context"

    def test_content_includes_heading_line(self) -> None:
        adr = parse_adr("## Decision\n\nUse Kafka.\n\n## Consequences\n")
        assert adr.sections["decision"].content == "## Decision\n\nUse Kafka."

    def test_h3_delimits_sections_h4_does_not(self) -> None:
        adr = parse_adr("## Context\nA\n### Detail\nB\n#### Deeper\nC\n")
        assert list(adr.sections) == ["context", "detail"]
        assert "#### Deeper" in adr.sections["detail"].content

    def test_spans_partition_document_after_first_heading(self, valid_adr_text: str) -> None:
        adr = parse_adr(valid_adr_text)
        spans = sorted((s.start, s.end) for s in adr.sections.values())
        assert spans[-1][1] == len(valid_adr_text)
        for (_, end), (next_start, _) in zip(spans, spans[1:]):
            assert end == next_start

    def test_repeated_heading_keeps_later_section(self) -> None:
        adr = parse_adr("## Notes\nfirst\n## Notes\nsecond\n")
        assert list(adr.sections) == ["notes"]
        assert "second" in adr.sections["notes"].content

    def test_exact_match_preferred(self) -> None:
        adr = parse_adr("## Context Map\nx\n## Context\ny\n")
        section = find_section(adr, "Context")
        assert section is not None
        assert section.heading == "Context"

    def test_fuzzy_containment(self, valid_adr_text: str) -> None:
        adr = parse_adr(valid_adr_text)
        assert has_section(adr, "alternatives")
        assert has_section(adr, "COMPLIANCE")
        assert not has_section(adr, "rationale")

    @pytest.mark.parametrize("name", ["context", "alternatives", "compliance", "missing"])
    def test_has_section_agrees_with_content(self, valid_adr_text: str, name: str) -> None:
        adr = parse_adr(valid_adr_text)
        assert has_section(adr, name) == (get_section_content(adr, name) != "")

    def test_missing_section_content_is_empty(self) -> None:
        assert get_section_content(parse_adr("# T\n"), "decision") == ""


class TestAlternatives:
    """Counting alternatives and rejection reasons."""

    def test_table_rows_excluding_header_and_separator(self, valid_adr_text: str) -> None:
        assert count_alternatives(parse_adr(valid_adr_text)) == 3

    def test_alternative_label_rows_skipped(self) -> None:
        body = "| Alternative | Notes |\n| Kafka | rejected |\n| RabbitMQ | rejected |"
        assert count_alternatives(parse_adr(_adr_with_alternatives(body))) == 2

    def test_list_items(self) -> None:
        body = "- Option A, rejected\n* Option B, rejected\n1. Option C\n2) Option D"
        assert count_alternatives(parse_adr(_adr_with_alternatives(body))) == 4

    def test_indented_list_items_not_counted(self) -> None:
        body = "- Option A\n  - detail\n- Option B"
        assert count_alternatives(parse_adr(_adr_with_alternatives(body))) == 2

    def test_table_takes_precedence_over_list(self) -> None:
        body = "| Option | Why |\n|---|---|\n| A | rejected |\n\n- note\n- note"
        assert count_alternatives(parse_adr(_adr_with_alternatives(body))) == 1

    def test_no_section_counts_zero(self) -> None:
        assert count_alternatives(parse_adr("# T\n## Context\n")) == 0

    def test_rejection_keywords(self, load_adr: Callable[[str], str]) -> None:
        adr = parse_adr(load_adr("invalid-no-compliance.md"))
        assert alternatives_have_rejection_reasons(adr)

    def test_no_rejection_keywords(self) -> None:
        adr = parse_adr(_adr_with_alternatives("- Option A\n- Option B"))
        assert not alternatives_have_rejection_reasons(adr)

    def test_no_section_has_no_rejection_reasons(self) -> None:
        assert not alternatives_have_rejection_reasons(parse_adr("# T\n"))
