"""Report formatters for ADR validation results: rich console, JSON, JUnit XML."""

from __future__ import annotations

import json
from io import StringIO
from typing import TYPE_CHECKING
from xml.sax.saxutils import escape

from rich.text import Text

from archlint.adr.rule_engine import Severity
from archlint.reporting import RULE, make_console, timestamp

if TYPE_CHECKING:
    from collections.abc import Sequence

    from archlint.adr.rule_engine import Violation
    from archlint.adr.validator import ValidationResult

_ICONS = {
    Severity.ERROR: ("✗", "bold red"),
    Severity.WARNING: ("⚠", "bold yellow"),
    Severity.INFO: ("ℹ", "bold blue"),
}

_XML_ENTITIES = {'"': "&quot;", "'": "&apos;"}


def escape_xml(value: str) -> str:
    """Escape ``& < > " '`` for use in XML text and attribute values."""
    return escape(value, _XML_ENTITIES)


# ---------------------------------------------------------------------------
# Rich
# ---------------------------------------------------------------------------


def format_rich(results: Sequence[ValidationResult], *, color: bool = False) -> str:
    """Format results as a human-readable console report.

    Example output::

        ✓ docs/adr/0001-use-postgres.md — PASS

        ✗ docs/adr/0002-auth.md — FAIL
          Title: ADR-002: Token based auth
          ✗ [ADR-ENT-004] ADR status is missing or invalid. ...
               → Add "**Status:** Accepted" ...

        ─────────────────────────────────────────────
        Validated: 2 ADR(s)
        Errors:    1
        Warnings:  0
        Status:    FAILED — fix errors before marking ADR as Accepted
    """
    buf = StringIO()
    console = make_console(buf, color=color)

    total_errors = 0
    total_warnings = 0
    for result in results:
        errors = result.errors
        warnings = result.warnings
        total_errors += len(errors)
        total_warnings += len(warnings)

        if not result.violations:
            line = Text()
            line.append("✓ ", style="bold green")
            line.append(result.file_path)
            line.append(" — PASS", style="green")
            console.print(line)
            continue

        failed = bool(errors)
        line = Text()
        line.append("✗ " if failed else "⚠ ", style="bold red" if failed else "bold yellow")
        line.append(result.file_path)
        line.append(" — FAIL" if failed else " — WARN", style="red" if failed else "yellow")
        console.print()
        console.print(line)
        console.print(Text(f"  Title: {result.adr_title}"))

        for v in result.violations:
            icon, style = _ICONS[v.severity]
            entry = Text("  ")
            entry.append(icon, style=style)
            entry.append(f" [{v.rule_id}] ", style="bold")
            entry.append(v.message)
            console.print(entry)
            if v.hint:
                console.print(Text(f"       → {v.hint}", style="dim"))

    console.print()
    console.print(RULE, style="dim")
    console.print(f"Validated: {len(results)} ADR(s)", markup=False)
    console.print(f"Errors:    {total_errors}", markup=False)
    console.print(f"Warnings:  {total_warnings}", markup=False)

    if total_errors == 0 and total_warnings == 0:
        console.print("Status:    ALL PASSED ✓", style="bold green")
    elif total_errors == 0:
        console.print("Status:    PASSED with warnings", style="bold yellow")
    else:
        console.print(
            "Status:    FAILED — fix errors before marking ADR as Accepted",
            style="bold red",
        )

    return buf.getvalue()


# ---------------------------------------------------------------------------
# JSON
# ---------------------------------------------------------------------------


def violation_to_dict(v: Violation) -> dict[str, object]:
    """Serialize a violation with the report's camelCase field names."""
    data: dict[str, object] = {
        "ruleId": v.rule_id,
        "severity": v.severity.value,
        "message": v.message,
    }
    if v.hint is not None:
        data["hint"] = v.hint
    return data


def format_json(results: Sequence[ValidationResult]) -> str:
    """Format results as the machine-readable JSON report.

    ``passed`` counts ADRs without errors; ``warned`` counts ADRs with
    warnings but no errors.
    """
    passed = sum(1 for r in results if not r.errors)
    warned = sum(1 for r in results if r.warnings and not r.errors)
    report: dict[str, object] = {
        "timestamp": timestamp(),
        "totalAdrs": len(results),
        "passed": passed,
        "failed": len(results) - passed,
        "warned": warned,
        "results": [
            {
                "filePath": r.file_path,
                "adrTitle": r.adr_title,
                "violations": [violation_to_dict(v) for v in r.violations],
            }
            for r in results
        ],
    }
    return json.dumps(report, indent=2, ensure_ascii=False)


# ---------------------------------------------------------------------------
# JUnit
# ---------------------------------------------------------------------------


def _testcase(result: ValidationResult) -> list[str]:
    lines = [
        f'    <testcase name="{escape_xml(result.file_path)}" classname="adr-validator" time="0">'
    ]
    if result.warnings:
        lines.append("      <properties>")
        lines.extend(
            f'        <property name="{escape_xml(v.rule_id)}" value="{escape_xml(v.message)}"/>'
            for v in result.warnings
        )
        lines.append("      </properties>")
    lines.extend(
        f'      <failure type="{escape_xml(v.rule_id)}" message="{escape_xml(v.message)}">'
        f"{escape_xml(v.hint or '')}</failure>"
        for v in result.errors
    )
    lines.append("    </testcase>")
    return lines


def format_junit(results: Sequence[ValidationResult]) -> str:
    """Format results as JUnit XML: one testcase per ADR.

    Errors become ``<failure>`` elements typed by rule id; warnings become
    ``<property>`` entries so they are visible without failing the case.
    """
    failed = sum(1 for r in results if r.errors)
    total_errors = sum(len(r.errors) for r in results)

    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<testsuites name="adr-validator" tests="{len(results)}" failures="{failed}"'
        f' errors="{total_errors}" time="0">',
        f'  <testsuite name="Enterprise ADR Validation" tests="{len(results)}"'
        f' failures="{failed}">',
    ]
    for result in results:
        lines.extend(_testcase(result))
    lines.append("  </testsuite>")
    lines.append("</testsuites>")
    return "\n".join(lines)
