from __future__ import annotations

import json
from typing import Any

from ..checks.model import DocumentFindings, Finding
from ..contracts import CHECK_REPORT, VERIFY_REPORT, validate_self
from ..verify.model import CommandResult, DocumentVerification
from .aggregate import BatchReport

_OUTPUT_TAIL_LINES = 20


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


def _tail(text: str, max_lines: int = _OUTPUT_TAIL_LINES) -> str:
    lines = text.rstrip("\n").splitlines()
    if len(lines) <= max_lines:
        return "\n".join(lines)
    return "\n".join([f"... ({len(lines) - max_lines} lines omitted)", *lines[-max_lines:]])


def _finding_row(finding: Finding) -> dict[str, Any]:
    row: dict[str, Any] = {
        "rule": finding.rule,
        "severity": str(finding.severity),
        "line": finding.line,
        "message": finding.message,
    }
    if finding.hint:
        row["hint"] = finding.hint
    if finding.converted_from_error:
        row["converted_from_error"] = True
    return row


def _command_row(result: CommandResult) -> dict[str, Any]:
    return {
        "command": result.command,
        "outcome": str(result.outcome),
        "exit_status": result.exit_status,
        "stdout": result.stdout,
        "stderr": result.stderr,
        "duration_ms": int(result.duration_ms),
        "working_dir": result.working_dir,
        "truncated": bool(result.truncated),
    }


def check_payload(report: BatchReport, *, run_id: str = "", strict: bool = False) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "schema_name": CHECK_REPORT,
        "schema_version": 1,
        "tool": "pavectl",
        "kind": "check",
        "run_id": run_id,
        "status": "pass" if report.checks_ok(strict) else "fail",
        "summary": {
            "documents_checked": report.documents_checked,
            "errors": report.errors,
            "warnings": report.warnings,
        },
        "documents": [
            {"path": entry.path, "findings": [_finding_row(item) for item in entry.findings]}
            for entry in report.findings
        ],
    }
    return validate_self(CHECK_REPORT, payload)


def verify_payload(report: BatchReport, *, run_id: str = "") -> dict[str, Any]:
    payload: dict[str, Any] = {
        "schema_name": VERIFY_REPORT,
        "schema_version": 1,
        "tool": "pavectl",
        "kind": "verify",
        "run_id": run_id,
        "status": "pass" if report.verification_ok else "fail",
        "summary": {
            "documents_verified": report.documents_verified,
            "commands_executed": report.commands_executed,
            "commands_passed": report.commands_passed,
            "commands_failed": report.commands_failed,
            "commands_timed_out": report.commands_timed_out,
            "commands_skipped": report.commands_skipped,
        },
        "documents": [
            {
                "path": entry.path,
                "section_line": entry.section_line,
                "status": str(entry.status),
                "skipped": entry.skipped,
                "commands": [_command_row(result) for result in entry.results],
            }
            for entry in report.verifications
        ],
    }
    return validate_self(VERIFY_REPORT, payload)


def render_json(payload: dict[str, Any]) -> str:
    return json.dumps(payload, indent=2, sort_keys=True)


def _check_text_rows(entry: DocumentFindings) -> list[str]:
    out: list[str] = []
    for finding in entry.findings:
        out.append(f"{entry.path}:{finding.line}: {finding.severity}: {finding.message} [{finding.rule}]")
        if finding.hint:
            out.append(f"  hint: {finding.hint}")
    return out


def render_check_text(report: BatchReport, *, quiet: bool = False) -> str:
    out: list[str] = []
    for entry in report.findings:
        out.extend(_check_text_rows(entry))
    if not quiet or not out:
        if report.errors == 0 and report.warnings == 0:
            out.append(f"checked {_plural(report.documents_checked, 'document')}: all checks passed")
        else:
            out.append(
                f"checked {_plural(report.documents_checked, 'document')}: "
                f"{_plural(report.errors, 'error')}, {_plural(report.warnings, 'warning')}"
            )
    return "\n".join(out)


def _verify_text_rows(entry: DocumentVerification, verbose: bool) -> list[str]:
    out = [f"{str(entry.status).upper()} {entry.path} (Verification at line {entry.section_line})"]
    for result in entry.results:
        code = "-" if result.exit_status is None else str(result.exit_status)
        out.append(f"  {str(result.outcome).upper()} [{result.duration_ms}ms] exit={code} $ {result.command}")
        if result.passed and not verbose:
            continue
        for label, text in (("stdout", result.stdout), ("stderr", result.stderr)):
            if text.strip():
                out.append(f"    {label}:")
                out.extend(f"      {line}" for line in _tail(text).splitlines())
        if result.truncated:
            out.append("    (output truncated)")
    if entry.skipped:
        out.append(f"  skipped {_plural(entry.skipped, 'command')} after failure")
    return out


def render_verify_text(report: BatchReport, *, verbose: bool = False, quiet: bool = False) -> str:
    out: list[str] = []
    for entry in report.verifications:
        if quiet and entry.status.value == "pass":
            continue
        out.extend(_verify_text_rows(entry, verbose))
    out.append(
        f"verified {_plural(report.documents_verified, 'document')}: "
        f"{report.commands_passed} passed, {report.commands_failed} failed, "
        f"{report.commands_timed_out} timed out, {report.commands_skipped} skipped"
    )
    return "\n".join(out)


def _escape_annotation(text: str) -> str:
    return text.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def render_check_github(report: BatchReport) -> str:
    out: list[str] = []
    for entry in report.findings:
        for finding in entry.findings:
            level = "error" if str(finding.severity) == "error" else "warning"
            message = finding.message if not finding.hint else f"{finding.message} (hint: {finding.hint})"
            out.append(f"::{level} file={entry.path},line={finding.line}::{_escape_annotation(message)}")
    return "\n".join(out)


def render_verify_github(report: BatchReport) -> str:
    out: list[str] = []
    for entry in report.verifications:
        for result in entry.results:
            if result.passed:
                continue
            detail = _tail(result.stderr or result.stdout, 5)
            message = f"verification {result.outcome}: {result.command}"
            if detail:
                message = f"{message}\n{detail}"
            out.append(f"::error file={entry.path},line={entry.section_line}::{_escape_annotation(message)}")
    return "\n".join(out)


__all__ = [
    "check_payload",
    "render_check_github",
    "render_check_text",
    "render_json",
    "render_verify_github",
    "render_verify_text",
    "verify_payload",
]
