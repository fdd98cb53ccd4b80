from __future__ import annotations

from .extract import extract_commands, extract_verification, normalize_block
from .model import (
    CommandOutcome,
    CommandResult,
    DocumentVerification,
    RunnerConfig,
    VerificationItem,
    VerificationPlan,
)
from .runner import run, run_items, verify_document, verify_documents

__all__ = [
    "CommandOutcome",
    "CommandResult",
    "DocumentVerification",
    "RunnerConfig",
    "VerificationItem",
    "VerificationPlan",
    "extract_commands",
    "extract_verification",
    "normalize_block",
    "run",
    "run_items",
    "verify_document",
    "verify_documents",
]
