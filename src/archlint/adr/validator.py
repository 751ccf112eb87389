"""ADR validator orchestrator: parse each file, run every rule set, collect results."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from archlint.adr.parser import parse_adr
from archlint.adr.rule_engine import Severity
from archlint.adr.rules import run_compliance_rules, run_enterprise_rules, run_structural_rules
from archlint.discovery import read_source

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from pathlib import Path

    from archlint.adr.rule_engine import Violation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationResult:
    """Violations found in one ADR."""

    file_path: str
    adr_title: str
    violations: list[Violation] = field(default_factory=list)

    @property
    def errors(self) -> list[Violation]:
        return [v for v in self.violations if v.severity is Severity.ERROR]

    @property
    def warnings(self) -> list[Violation]:
        return [v for v in self.violations if v.severity is Severity.WARNING]


def validate_content(content: str, file_path: str = "") -> ValidationResult:
    """Validate ADR text against the structural, enterprise, and compliance rules."""
    adr = parse_adr(content, file_path)
    violations = [
        *run_structural_rules(adr),
        *run_enterprise_rules(adr),
        *run_compliance_rules(adr),
    ]
    return ValidationResult(file_path=file_path, adr_title=adr.title, violations=violations)


def validate_file(path: Path) -> ValidationResult:
    """Read and validate one ADR file.  ``OSError`` propagates."""
    result = validate_content(read_source(path), str(path))
    logger.debug(
        "%s: %d error(s), %d warning(s)",
        path,
        len(result.errors),
        len(result.warnings),
    )
    return result


def validate_files(paths: Iterable[Path]) -> list[ValidationResult]:
    """Validate files in the given order."""
    return [validate_file(p) for p in paths]


def should_fail(results: Sequence[ValidationResult], *, strict: bool = False) -> bool:
    """Return True if any result has an error, or a warning when *strict*."""
    if any(r.errors for r in results):
        return True
    return strict and any(r.warnings for r in results)
