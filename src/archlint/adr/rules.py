"""Structural, enterprise, and compliance rule sets for ADR documents.

Rule ids are stable and appear in every report format:

- ``ADR-STR-001`` .. ``ADR-STR-003``: required structure.
- ``ADR-ENT-001`` .. ``ADR-ENT-005``: enterprise decision policy.
- ``ADR-COMP-001`` .. ``ADR-COMP-003``: compliance hygiene.  These are
  warnings so that non-regulated ADRs are never blocked by them.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from archlint.adr.parser import (
    alternatives_have_rejection_reasons,
    count_alternatives,
    get_section_content,
    has_section,
)
from archlint.adr.rule_engine import Rule, Severity, evaluate_rules

if TYPE_CHECKING:
    from archlint.adr.parser import ParsedAdr
    from archlint.adr.rule_engine import Violation

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

REQUIRED_SECTIONS: tuple[str, ...] = ("context", "decision")

VALID_STATUSES: tuple[str, ...] = ("Proposed", "Accepted", "Deprecated", "Superseded")

REGULATED_KEYWORDS: tuple[str, ...] = (
    "pci",
    "gdpr",
    "iso 27001",
    "soc2",
    "soc 2",
    "hipaa",
    "psd2",
    "eba",
)

SECURITY_KEYWORDS: tuple[str, ...] = (
    "authentication",
    "authorization",
    "encryption",
    "auth",
    "token",
    "certificate",
    "tls",
    "ssl",
    "rbac",
    "jwt",
)

MIN_CONTEXT_LENGTH = 50

_ISO_DATE_RE = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")
_H2_LINE_RE = re.compile(r"^##.*$", re.MULTILINE)

# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------


def _has_required_sections(adr: ParsedAdr) -> bool:
    return all(has_section(adr, name) for name in REQUIRED_SECTIONS)


def _has_title(adr: ParsedAdr) -> bool:
    return bool(adr.title.strip())


def _context_is_substantial(adr: ParsedAdr) -> bool:
    if not has_section(adr, "context"):
        return True
    content = "".join(
        section.content for key, section in adr.sections.items() if "context" in key
    )
    body = _H2_LINE_RE.sub("", content, count=1).strip()
    return len(body) > MIN_CONTEXT_LENGTH


def _has_two_alternatives(adr: ParsedAdr) -> bool:
    return count_alternatives(adr) >= 2


def _alternatives_explain_rejection(adr: ParsedAdr) -> bool:
    # Zero alternatives fails here too, on top of ADR-ENT-001.
    if count_alternatives(adr) < 1:
        return False
    return alternatives_have_rejection_reasons(adr)


def _has_compliance_section(adr: ParsedAdr) -> bool:
    return has_section(adr, "compliance")


def _has_valid_status(adr: ParsedAdr) -> bool:
    if not adr.status:
        return False
    status = adr.status.lower()
    return any(valid.lower() in status for valid in VALID_STATUSES)


def _has_iso_date(adr: ParsedAdr) -> bool:
    if not adr.date:
        return False
    return _ISO_DATE_RE.match(adr.date.strip()) is not None


def mentions_regulation(text: str) -> bool:
    """Return True if *text* names a regulation or compliance standard."""
    lower = text.lower()
    return any(keyword in lower for keyword in REGULATED_KEYWORDS)


def is_security_related(adr: ParsedAdr) -> bool:
    """Return True if the ADR mentions any security keyword."""
    lower = adr.raw_content.lower()
    return any(keyword in lower for keyword in SECURITY_KEYWORDS)


def _security_references_standard(adr: ParsedAdr) -> bool:
    if not is_security_related(adr):
        return True
    return mentions_regulation(get_section_content(adr, "compliance")) or mentions_regulation(
        adr.raw_content
    )


def _has_consequences(adr: ParsedAdr) -> bool:
    return has_section(adr, "consequences")


def _regulated_names_deciders(adr: ParsedAdr) -> bool:
    if not mentions_regulation(adr.raw_content):
        return True
    return adr.deciders is not None and bool(adr.deciders.strip())


# ---------------------------------------------------------------------------
# Rule tables
# ---------------------------------------------------------------------------

STRUCTURAL_RULES: tuple[Rule, ...] = (
    Rule(
        rule_id="ADR-STR-001",
        name="Required Sections Present",
        severity=Severity.ERROR,
        check=_has_required_sections,
        message='ADR is missing required sections: "## Context" and/or "## Decision".',
        hint=(
            "Add the missing sections. Minimum structure: ## Context, ## Decision, "
            "## Alternatives Considered, ## Consequences."
        ),
    ),
    Rule(
        rule_id="ADR-STR-002",
        name="ADR Has a Title",
        severity=Severity.ERROR,
        check=_has_title,
        message="ADR has no title. The first heading must identify the decision.",
        hint='Start the document with "# ADR-NNN: Short description of the decision".',
    ),
    Rule(
        rule_id="ADR-STR-003",
        name="Context Section Is Not Empty",
        severity=Severity.WARNING,
        check=_context_is_substantial,
        message='The "Context" section appears to be empty or too brief.',
        hint=(
            "Write at least 2-3 sentences explaining the problem, the constraints, "
            "and why a decision is needed."
        ),
    ),
)

ENTERPRISE_RULES: tuple[Rule, ...] = (
    Rule(
        rule_id="ADR-ENT-001",
        name="Alternatives Analysis Required",
        severity=Severity.ERROR,
        check=_has_two_alternatives,
        message=(
            "Enterprise ADRs must document at least 2 alternatives. Found fewer than 2 "
            'in "Alternatives Considered" section.'
        ),
        hint=(
            "Add a table or list with at least 2 alternative approaches and explain "
            "why each was rejected."
        ),
    ),
    Rule(
        rule_id="ADR-ENT-002",
        name="Alternatives Must Include Rejection Reasons",
        severity=Severity.ERROR,
        check=_alternatives_explain_rejection,
        message=(
            "Each alternative must explain why it was rejected. Missing rejection "
            'reasoning in "Alternatives Considered" section.'
        ),
        hint='Add "rejected because" or a "Why rejected" column to each alternative entry.',
    ),
    Rule(
        rule_id="ADR-ENT-003",
        name="Compliance Impact Assessment Required",
        severity=Severity.ERROR,
        check=_has_compliance_section,
        message=(
            "Compliance impact section is missing. Enterprise ADRs must explicitly "
            "state compliance implications (even if none)."
        ),
        hint=(
            'Add "## Compliance Impact" section stating which standards (PCI-DSS, GDPR, '
            "ISO 27001, SOC2) are affected, or confirm no compliance impact."
        ),
    ),
    Rule(
        rule_id="ADR-ENT-004",
        name="Decision Status Lifecycle",
        severity=Severity.ERROR,
        check=_has_valid_status,
        message=(
            f"ADR status is missing or invalid. Must be one of: {', '.join(VALID_STATUSES)}."
        ),
        hint='Add "**Status:** Accepted" (or Proposed/Deprecated/Superseded) to the ADR header.',
    ),
    Rule(
        rule_id="ADR-ENT-005",
        name="Date Format ISO 8601",
        severity=Severity.ERROR,
        check=_has_iso_date,
        message="ADR date is missing or not in ISO 8601 format (YYYY-MM-DD).",
        hint='Add "**Date:** 2026-02-20" to the ADR header.',
    ),
)

COMPLIANCE_RULES: tuple[Rule, ...] = (
    Rule(
        rule_id="ADR-COMP-001",
        name="Security ADR Must Reference Compliance Standard",
        severity=Severity.WARNING,
        check=_security_references_standard,
        message=(
            "This ADR appears security-related but does not reference any compliance "
            "standard (PCI-DSS, GDPR, ISO 27001, SOC2)."
        ),
        hint=(
            'Add the applicable standard to the "Compliance Impact" section, or confirm '
            "explicitly that no standard applies."
        ),
    ),
    Rule(
        rule_id="ADR-COMP-002",
        name="Consequences Section Must Be Present",
        severity=Severity.WARNING,
        check=_has_consequences,
        message='"Consequences" section is missing.',
        hint=(
            'Add "## Consequences" with positive (+) and negative (-) consequences '
            "of the decision."
        ),
    ),
    Rule(
        rule_id="ADR-COMP-003",
        name="Regulated ADR Must Name Deciders",
        severity=Severity.WARNING,
        check=_regulated_names_deciders,
        message=(
            "ADR references regulated data but does not name deciders. Compliance "
            "audits require accountability."
        ),
        hint='Add "**Deciders:** [name, role]" to the ADR header.',
    ),
)

ALL_RULES: tuple[Rule, ...] = STRUCTURAL_RULES + ENTERPRISE_RULES + COMPLIANCE_RULES


# ---------------------------------------------------------------------------
# Runners
# ---------------------------------------------------------------------------


def run_structural_rules(adr: ParsedAdr) -> list[Violation]:
    """Evaluate the structural rule set."""
    return evaluate_rules(adr, STRUCTURAL_RULES)


def run_enterprise_rules(adr: ParsedAdr) -> list[Violation]:
    """Evaluate the enterprise rule set."""
    return evaluate_rules(adr, ENTERPRISE_RULES)


def run_compliance_rules(adr: ParsedAdr) -> list[Violation]:
    """Evaluate the compliance rule set."""
    return evaluate_rules(adr, COMPLIANCE_RULES)


def run_all_rules(adr: ParsedAdr) -> list[Violation]:
    """Evaluate structural, enterprise, then compliance rules."""
    return evaluate_rules(adr, ALL_RULES)
