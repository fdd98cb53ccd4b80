from __future__ import annotations

from datetime import date

from pavectl.checks import DocumentFindings, Finding, Severity
from pavectl.reporting import apply_gradual, apply_strict, gradual_active, reclassify


def _entries() -> list[DocumentFindings]:
    return [
        DocumentFindings(
            "a.md",
            (
                Finding(rule="e", severity=Severity.ERROR, line=1, message="error"),
                Finding(rule="w", severity=Severity.WARNING, line=2, message="warning"),
            ),
        )
    ]


def test_strict_upgrades_warnings() -> None:
    upgraded = apply_strict(_entries()[0].findings)
    assert [item.severity for item in upgraded] == [Severity.ERROR, Severity.ERROR]


def test_gradual_downgrades_errors_and_marks_them() -> None:
    downgraded = apply_gradual(_entries()[0].findings)
    assert [item.severity for item in downgraded] == [Severity.WARNING, Severity.WARNING]
    assert [item.converted_from_error for item in downgraded] == [True, False]


def test_strict_wins_over_gradual() -> None:
    (entry,) = reclassify(_entries(), strict=True, gradual=True)
    assert len(entry.errors) == 2


def test_no_policy_leaves_findings_alone() -> None:
    assert reclassify(_entries()) == _entries()


def test_gradual_deadline() -> None:
    assert gradual_active(None)
    assert gradual_active("2026-12-31", today=date(2026, 12, 31))
    assert not gradual_active("2026-12-31", today=date(2027, 1, 1))


def test_invalid_deadline_keeps_gradual_on() -> None:
    assert gradual_active("end of year", today=date(2030, 1, 1))
