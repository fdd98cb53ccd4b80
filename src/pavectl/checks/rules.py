"""Structural rules for PAVED documents.

Rules run in registry order and every enabled rule always runs, so the
finding list is deterministic for identical input. Severities are fixed per
rule; strict and gradual handling belongs to the caller.
"""

from __future__ import annotations

from ..docs.model import Document
from ..verify.extract import extract_commands
from .model import DocumentFindings, Finding, RuleDef, RuleFn, RuleSet, Severity


def _require_section(name: str) -> RuleFn:
    def _check(doc: Document, rules: RuleSet) -> list[Finding]:
        if doc.has_section(name):
            return []
        return [
            Finding(
                rule=f"require-section-{name.lower()}",
                severity=Severity.ERROR,
                line=1,
                message=f"missing required section: {name}",
                hint=f"add a '## {name}' section to the document",
            )
        ]

    return _check


def _examples_code_block(doc: Document, rules: RuleSet) -> list[Finding]:
    section = doc.section("examples")
    if section is None or section.code_blocks:
        return []
    return [
        Finding(
            rule="require-code-block-examples",
            severity=Severity.ERROR,
            line=section.start_line,
            message="section 'Examples' must contain at least one code block",
            hint="add a fenced code block with an example in the 'Examples' section",
        )
    ]


def _max_lines(doc: Document, rules: RuleSet) -> list[Finding]:
    if doc.line_count <= rules.max_lines:
        return []
    return [
        Finding(
            rule="max-lines",
            severity=Severity.ERROR,
            line=rules.max_lines + 1,
            message=f"document has {doc.line_count} lines, exceeds maximum of {rules.max_lines}",
            hint="split this document into smaller, focused documents",
        )
    ]


def _verification_commands(doc: Document, rules: RuleSet) -> list[Finding]:
    section = doc.section("verification")
    if section is None or extract_commands(doc):
        return []
    return [
        Finding(
            rule="require-command-verification",
            severity=Severity.WARNING,
            line=section.start_line,
            message="section 'Verification' has no runnable command",
            hint="add a ```bash code block with the commands that prove this document",
        )
    ]


RULES: tuple[RuleDef, ...] = (
    RuleDef("require-section-purpose", "document has a Purpose section", lambda rules: True, _require_section("Purpose")),
    RuleDef(
        "require-section-verification",
        "document has a Verification section",
        lambda rules: rules.require_verification,
        _require_section("Verification"),
    ),
    RuleDef(
        "require-section-examples",
        "document has an Examples section",
        lambda rules: rules.require_examples,
        _require_section("Examples"),
    ),
    RuleDef(
        "require-code-block-examples",
        "Examples section contains a code block",
        lambda rules: rules.require_examples,
        _examples_code_block,
    ),
    RuleDef("max-lines", "document stays within the line budget", lambda rules: True, _max_lines),
    RuleDef(
        "require-command-verification",
        "Verification section contains a runnable command",
        lambda rules: rules.require_verification and rules.require_verification_commands,
        _verification_commands,
    ),
)


def list_rules(rules: RuleSet) -> list[RuleDef]:
    return [rule for rule in RULES if rule.enabled(rules)]


def evaluate(doc: Document, rules: RuleSet) -> list[Finding]:
    findings: list[Finding] = []
    for rule in list_rules(rules):
        findings.extend(rule.fn(doc, rules))
    return findings


def check_document(doc: Document, rules: RuleSet) -> DocumentFindings:
    return DocumentFindings(path=doc.path, findings=tuple(evaluate(doc, rules)))


__all__ = ["RULES", "check_document", "evaluate", "list_rules"]
