"""Report formatters for micro-task line counting results."""

from __future__ import annotations

import json
import math
from io import StringIO
from typing import TYPE_CHECKING

from rich.text import Text

from archlint.reporting import RULE, make_console, timestamp

if TYPE_CHECKING:
    from collections.abc import Sequence

    from archlint.microtask.line_counter import LineCountResult


def result_to_dict(result: LineCountResult) -> dict[str, object]:
    """Serialize a LineCountResult using the report's camelCase field names."""
    b = result.breakdown
    return {
        "filePath": result.file_path,
        "language": result.language,
        "breakdown": {
            "total": b.total,
            "effective": b.effective,
            "blank": b.blank,
            "comment": b.comment,
            "imports": b.imports,
        },
        "exceedsLimit": result.exceeds_limit,
        "splitSuggestions": [
            {
                "name": s.name,
                "lineRange": list(s.line_range),
                "estimatedLines": s.estimated_lines,
            }
            for s in result.split_suggestions
        ],
    }


def format_json(results: Sequence[LineCountResult], max_lines: int) -> str:
    """Format results as the machine-readable JSON report."""
    passed = sum(1 for r in results if not r.exceeds_limit)
    report: dict[str, object] = {
        "timestamp": timestamp(),
        "maxLines": max_lines,
        "totalFiles": len(results),
        "passed": passed,
        "failed": len(results) - passed,
        "results": [result_to_dict(r) for r in results],
    }
    return json.dumps(report, indent=2)


def format_rich(
    results: Sequence[LineCountResult],
    max_lines: int,
    *,
    color: bool = False,
) -> str:
    """Format results as a human-readable console report.

    Example output::

        ✓ src/money.ts — PASS (38 effective lines)
        ✗ src/large.ts — FAIL (70 effective lines > 50)
          Breakdown: 70 total | 70 code | 0 comments | 0 imports | 0 blank

          Suggested split (2 units):
            ├── extract: extracted-unit-1()  [lines 1–35]  ~35 effective lines
            ├── extract: extracted-unit-2()  [lines 36–70]  ~35 effective lines

          Result: 2 micro-tasks of ~35 lines each
    """
    buf = StringIO()
    console = make_console(buf, color=color)

    violations = 0
    for r in results:
        b = r.breakdown
        line = Text()
        if r.exceeds_limit:
            violations += 1
            line.append("✗ ", style="bold red")
            line.append(r.file_path)
            line.append(f" — FAIL ({b.effective} effective lines > {max_lines})", style="red")
        else:
            line.append("✓ ", style="bold green")
            line.append(r.file_path)
            line.append(f" — PASS ({b.effective} effective lines)", style="green")
        console.print(line)

        if not r.exceeds_limit:
            continue

        console.print(
            f"  Breakdown: {b.total} total | {b.effective} code | {b.comment} comments"
            f" | {b.imports} imports | {b.blank} blank",
            markup=False,
        )
        if r.split_suggestions:
            count = len(r.split_suggestions)
            console.print()
            console.print(f"  Suggested split ({count} units):", markup=False)
            for s in r.split_suggestions:
                start, end = s.line_range
                console.print(
                    f"    ├── extract: {s.name}()  [lines {start}–{end}]"
                    f"  ~{s.estimated_lines} effective lines",
                    markup=False,
                )
            console.print()
            console.print(
                f"  Result: {count} micro-tasks of ~{math.ceil(b.effective / count)} lines each",
                markup=False,
            )

    console.print()
    console.print(RULE, style="dim")
    console.print(
        f"Validated: {len(results)} file(s)  |  Violations: {violations}  |  "
        f"Max: {max_lines} lines",
        markup=False,
    )
    if violations == 0:
        console.print("Status:    ALL PASSED ✓", style="bold green")
    else:
        console.print(
            "Status:    FAILED — split the tasks listed above before proceeding",
            style="bold red",
        )

    return buf.getvalue()
