from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Union

from ..checks.model import DocumentFindings, Severity
from ..verify.model import CommandOutcome, DocumentVerification

DocumentEntry = Union[DocumentFindings, DocumentVerification]


@dataclass(frozen=True)
class BatchReport:
    documents_checked: int = 0
    documents_verified: int = 0
    errors: int = 0
    warnings: int = 0
    commands_passed: int = 0
    commands_failed: int = 0
    commands_timed_out: int = 0
    commands_skipped: int = 0
    documents: tuple[DocumentEntry, ...] = ()

    @property
    def commands_executed(self) -> int:
        return self.commands_passed + self.commands_failed + self.commands_timed_out

    def checks_ok(self, strict: bool = False) -> bool:
        if strict:
            return self.errors == 0 and self.warnings == 0
        return self.errors == 0

    @property
    def verification_ok(self) -> bool:
        return self.commands_failed == 0 and self.commands_timed_out == 0

    @property
    def findings(self) -> tuple[DocumentFindings, ...]:
        return tuple(entry for entry in self.documents if isinstance(entry, DocumentFindings))

    @property
    def verifications(self) -> tuple[DocumentVerification, ...]:
        return tuple(entry for entry in self.documents if isinstance(entry, DocumentVerification))


def aggregate(entries: Iterable[DocumentEntry]) -> BatchReport:
    counts = {
        "documents_checked": 0,
        "documents_verified": 0,
        "errors": 0,
        "warnings": 0,
        "commands_passed": 0,
        "commands_failed": 0,
        "commands_timed_out": 0,
        "commands_skipped": 0,
    }
    documents: list[DocumentEntry] = []
    for entry in entries:
        documents.append(entry)
        if isinstance(entry, DocumentFindings):
            counts["documents_checked"] += 1
            for finding in entry.findings:
                key = "errors" if finding.severity == Severity.ERROR else "warnings"
                counts[key] += 1
            continue
        counts["documents_verified"] += 1
        counts["commands_skipped"] += entry.skipped
        for result in entry.results:
            if result.outcome == CommandOutcome.PASS:
                counts["commands_passed"] += 1
            elif result.outcome == CommandOutcome.TIMEOUT:
                counts["commands_timed_out"] += 1
            else:
                counts["commands_failed"] += 1
    return BatchReport(documents=tuple(documents), **counts)


__all__ = ["BatchReport", "DocumentEntry", "aggregate"]
