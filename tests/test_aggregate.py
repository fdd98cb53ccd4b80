from __future__ import annotations

from pavectl.checks import DocumentFindings, Finding, Severity
from pavectl.reporting import aggregate
from pavectl.verify import CommandOutcome, CommandResult, DocumentVerification


def _finding(severity: Severity) -> Finding:
    return Finding(rule="r", severity=severity, line=1, message="m")


def _result(outcome: CommandOutcome) -> CommandResult:
    return CommandResult(command="c", outcome=outcome, exit_status=0 if outcome == CommandOutcome.PASS else 1)


def test_empty_batch() -> None:
    report = aggregate([])
    assert report.documents_checked == 0
    assert report.documents_verified == 0
    assert report.checks_ok()
    assert report.verification_ok


def test_counts_findings_by_severity() -> None:
    report = aggregate(
        [
            DocumentFindings("a.md", (_finding(Severity.ERROR), _finding(Severity.WARNING))),
            DocumentFindings("b.md", ()),
        ]
    )
    assert report.documents_checked == 2
    assert (report.errors, report.warnings) == (1, 1)
    assert not report.checks_ok()


def test_warnings_only_fail_under_strict() -> None:
    report = aggregate([DocumentFindings("a.md", (_finding(Severity.WARNING),))])
    assert report.checks_ok()
    assert not report.checks_ok(strict=True)


def test_counts_command_outcomes_and_skips() -> None:
    verification = DocumentVerification(
        path="a.md",
        section_line=4,
        planned=5,
        results=(_result(CommandOutcome.PASS), _result(CommandOutcome.FAIL), _result(CommandOutcome.TIMEOUT)),
    )
    report = aggregate([verification])
    assert report.documents_verified == 1
    assert (report.commands_passed, report.commands_failed, report.commands_timed_out) == (1, 1, 1)
    assert report.commands_skipped == 2
    assert report.commands_executed == 3
    assert not report.verification_ok


def test_preserves_input_order_for_mixed_entries() -> None:
    entries = [
        DocumentFindings("b.md", ()),
        DocumentVerification("a.md", 1, 1, (_result(CommandOutcome.PASS),)),
        DocumentFindings("a.md", ()),
    ]
    report = aggregate(entries)
    assert [entry.path for entry in report.documents] == ["b.md", "a.md", "a.md"]
    assert [entry.path for entry in report.findings] == ["b.md", "a.md"]
    assert report.verification_ok
