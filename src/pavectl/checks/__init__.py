from __future__ import annotations

from .model import DocumentFindings, Finding, RuleDef, RuleSet, Severity
from .rules import RULES, check_document, evaluate, list_rules

__all__ = [
    "DocumentFindings",
    "Finding",
    "RULES",
    "RuleDef",
    "RuleSet",
    "Severity",
    "check_document",
    "evaluate",
    "list_rules",
]
