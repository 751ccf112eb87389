"""ADR rule engine: rules as data, evaluated as a fold into violations."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from archlint.adr.parser import ParsedAdr

logger = logging.getLogger(__name__)


class Severity(enum.Enum):
    """Violation strength.  Only errors block success outside strict mode."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class Rule:
    """A named, severity-tagged predicate over a parsed ADR.

    ``check`` returns True when the document complies.  The message and hint
    are static: every failure of a rule reports the same text.
    """

    rule_id: str
    name: str
    severity: Severity
    check: Callable[[ParsedAdr], bool]
    message: str
    hint: str | None = None


@dataclass(frozen=True)
class Violation:
    """A single rule violation."""

    rule_id: str
    severity: Severity
    message: str
    hint: str | None = None


def evaluate_rule(adr: ParsedAdr, rule: Rule) -> Violation | None:
    """Return the rule's violation for *adr*, or None if it holds."""
    if rule.check(adr):
        return None
    return Violation(
        rule_id=rule.rule_id,
        severity=rule.severity,
        message=rule.message,
        hint=rule.hint,
    )


def evaluate_rules(adr: ParsedAdr, rules: Iterable[Rule]) -> list[Violation]:
    """Evaluate every rule independently, keeping rule-definition order."""
    violations: list[Violation] = []
    for rule in rules:
        violation = evaluate_rule(adr, rule)
        if violation is not None:
            logger.debug("%s: %s failed", adr.file_path or "<adr>", rule.rule_id)
            violations.append(violation)
    return violations
