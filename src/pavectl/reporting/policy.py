from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING, Iterable

from ..checks.model import DocumentFindings, Finding, Severity
from ..core.logging import log_event

if TYPE_CHECKING:
    from ..core.context import RunContext


def apply_strict(findings: Iterable[Finding]) -> list[Finding]:
    return [item.with_severity(Severity.ERROR) if item.severity == Severity.WARNING else item for item in findings]


def apply_gradual(findings: Iterable[Finding]) -> list[Finding]:
    return [
        item.with_severity(Severity.WARNING, converted=True) if item.severity == Severity.ERROR else item
        for item in findings
    ]


def reclassify(entries: Iterable[DocumentFindings], *, strict: bool = False, gradual: bool = False) -> list[DocumentFindings]:
    # strict overrides gradual
    if strict:
        return [DocumentFindings(path=entry.path, findings=tuple(apply_strict(entry.findings))) for entry in entries]
    if gradual:
        return [DocumentFindings(path=entry.path, findings=tuple(apply_gradual(entry.findings))) for entry in entries]
    return list(entries)


def gradual_active(until: str | None, today: date | None = None, ctx: RunContext | None = None) -> bool:
    """Gradual mode stays on until the ``until`` date (inclusive) has passed."""
    if not until:
        return True
    try:
        deadline = datetime.strptime(str(until), "%Y-%m-%d").date()
    except ValueError:
        log_event(ctx, "warn", "policy", "gradual-deadline", until=until, reason="expected YYYY-MM-DD; ignoring deadline")
        return True
    return (today or date.today()) <= deadline


__all__ = ["apply_gradual", "apply_strict", "gradual_active", "reclassify"]
