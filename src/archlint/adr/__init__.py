"""ADR validator: Markdown parser, rule engine, rule sets, validator, reporters."""

from archlint.adr.parser import (
    AdrSection,
    ParsedAdr,
    alternatives_have_rejection_reasons,
    count_alternatives,
    find_section,
    get_section_content,
    has_section,
    parse_adr,
)
from archlint.adr.reporters import format_json, format_junit, format_rich
from archlint.adr.rule_engine import Rule, Severity, Violation, evaluate_rule, evaluate_rules
from archlint.adr.rules import (
    ALL_RULES,
    COMPLIANCE_RULES,
    ENTERPRISE_RULES,
    STRUCTURAL_RULES,
    run_all_rules,
    run_compliance_rules,
    run_enterprise_rules,
    run_structural_rules,
)
from archlint.adr.validator import (
    ValidationResult,
    should_fail,
    validate_content,
    validate_file,
    validate_files,
)

__all__ = [
    "ALL_RULES",
    "COMPLIANCE_RULES",
    "ENTERPRISE_RULES",
    "STRUCTURAL_RULES",
    "AdrSection",
    "ParsedAdr",
    "Rule",
    "Severity",
    "ValidationResult",
    "Violation",
    "alternatives_have_rejection_reasons",
    "count_alternatives",
    "evaluate_rule",
    "evaluate_rules",
    "find_section",
    "format_json",
    "format_junit",
    "format_rich",
    "get_section_content",
    "has_section",
    "parse_adr",
    "run_all_rules",
    "run_compliance_rules",
    "run_enterprise_rules",
    "run_structural_rules",
    "should_fail",
    "validate_content",
    "validate_file",
    "validate_files",
]
