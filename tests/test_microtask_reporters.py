"""Tests for archlint.microtask.reporters: rich and JSON output."""

from __future__ import annotations

import json

from archlint.microtask.line_counter import count_effective_lines
from archlint.microtask.reporters import format_json, format_rich, result_to_dict

LARGE_TS = "\n".join(f"const var{i} = {i};" for i in range(70))
SMALL_PY = "import os\n\n# comment\ndef f():\n    return 1\n"


class TestResultToDict:
    def test_camel_case_fields(self) -> None:
        data = result_to_dict(count_effective_lines(LARGE_TS, "src/large.ts", 50))
        assert data["filePath"] == "src/large.ts"
        assert data["language"] == "typescript"
        assert data["breakdown"] == {
            "total": 70,
            "effective": 70,
            "blank": 0,
            "comment": 0,
            "imports": 0,
        }
        assert data["exceedsLimit"] is True
        assert data["splitSuggestions"][0] == {
            "name": "extracted-unit-1",
            "lineRange": [1, 35],
            "estimatedLines": 35,
        }

    def test_passing_file_has_no_suggestions(self) -> None:
        data = result_to_dict(count_effective_lines(SMALL_PY, "small.py"))
        assert data["exceedsLimit"] is False
        assert data["splitSuggestions"] == []


class TestFormatJson:
    def test_report_summary(self) -> None:
        results = [
            count_effective_lines(SMALL_PY, "small.py", 50),
            count_effective_lines(LARGE_TS, "large.ts", 50),
        ]
        data = json.loads(format_json(results, 50))
        assert data["maxLines"] == 50
        assert data["totalFiles"] == 2
        assert data["passed"] == 1
        assert data["failed"] == 1
        assert data["timestamp"].endswith("Z")
        assert [r["filePath"] for r in data["results"]] == ["small.py", "large.ts"]


class TestFormatRich:
    def test_pass_line(self) -> None:
        out = format_rich([count_effective_lines(SMALL_PY, "src/small.py", 50)], 50)
        assert "✓ src/small.py — PASS (2 effective lines)" in out
        assert "Validated: 1 file(s)  |  Violations: 0  |  Max: 50 lines" in out
        assert "Status:    ALL PASSED ✓" in out
        assert "Breakdown" not in out

    def test_fail_block(self) -> None:
        out = format_rich([count_effective_lines(LARGE_TS, "src/large.ts", 50)], 50)
        assert "✗ src/large.ts — FAIL (70 effective lines > 50)" in out
        assert "  Breakdown: 70 total | 70 code | 0 comments | 0 imports | 0 blank" in out
        assert "  Suggested split (2 units):" in out
        assert "    ├── extract: extracted-unit-1()  [lines 1–35]  ~35 effective lines" in out
        assert "    ├── extract: extracted-unit-2()  [lines 36–70]  ~35 effective lines" in out
        assert "  Result: 2 micro-tasks of ~35 lines each" in out
        assert "Violations: 1" in out
        assert "Status:    FAILED — split the tasks listed above before proceeding" in out

    def test_no_ansi_without_color(self) -> None:
        out = format_rich([count_effective_lines(LARGE_TS, "large.ts", 50)], 50)
        assert "\x1b[" not in out

    def test_empty_results(self) -> None:
        out = format_rich([], 50)
        assert "Validated: 0 file(s)" in out
        assert "ALL PASSED" in out
