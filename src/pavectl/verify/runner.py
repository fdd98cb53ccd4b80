from __future__ import annotations

import os
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import TYPE_CHECKING, Sequence

from ..core.errors import ConfigurationError
from ..core.logging import log_event
from ..docs.model import Document
from .extract import extract_verification
from .model import CommandOutcome, CommandResult, DocumentVerification, RunnerConfig, VerificationItem
from .process import run_shell

if TYPE_CHECKING:
    from ..core.context import RunContext


def _resolve_dir(base: Path, item_dir: str | None) -> Path:
    if not item_dir:
        return base
    candidate = Path(item_dir)
    return candidate if candidate.is_absolute() else base / candidate


def _outcome(exit_status: int | None, timed_out: bool) -> CommandOutcome:
    if timed_out:
        return CommandOutcome.TIMEOUT
    return CommandOutcome.PASS if exit_status == 0 else CommandOutcome.FAIL


def run_item(item: VerificationItem, config: RunnerConfig, ctx: RunContext | None = None) -> CommandResult:
    cwd = _resolve_dir(config.working_directory, item.working_dir)
    env = {**os.environ, **dict(item.env)} if item.env else None
    output = run_shell(
        item.command,
        cwd=cwd,
        timeout_seconds=config.timeout_seconds,
        output_limit_bytes=config.output_limit_bytes,
        env=env,
        shell=config.shell,
        grace_seconds=config.kill_grace_seconds,
    )
    result = CommandResult(
        command=item.command,
        outcome=_outcome(output.exit_status, output.timed_out),
        exit_status=output.exit_status,
        stdout=output.stdout,
        stderr=output.stderr,
        duration_ms=output.duration_ms,
        working_dir=str(cwd),
        truncated=output.truncated,
    )
    log_event(
        ctx,
        "info",
        "verify",
        "run-command",
        command=item.command,
        cwd=str(cwd),
        code=output.exit_status,
        outcome=str(result.outcome),
        duration_ms=output.duration_ms,
    )
    return result


def run_items(items: Sequence[VerificationItem], config: RunnerConfig, ctx: RunContext | None = None) -> list[CommandResult]:
    results: list[CommandResult] = []
    for item in items:
        result = run_item(item, config, ctx)
        results.append(result)
        if config.fail_fast and not result.passed:
            break
    return results


def run(commands: Sequence[str], config: RunnerConfig, ctx: RunContext | None = None) -> list[CommandResult]:
    """Run ``commands`` one after another in ``config.working_directory``.

    Each command gets its own timeout budget. With ``fail_fast`` the first
    failing or timed-out command ends the run and later commands get no result.
    """
    return run_items([VerificationItem(command=command) for command in commands], config, ctx)


def verify_document(doc: Document, config: RunnerConfig, ctx: RunContext | None = None) -> DocumentVerification | None:
    plan = extract_verification(doc)
    if plan is None or not plan.items:
        return None
    results = run_items(plan.items, config, ctx)
    verification = DocumentVerification(
        path=doc.path,
        section_line=plan.section_line,
        planned=len(plan.items),
        results=tuple(results),
    )
    log_event(
        ctx,
        "info",
        "verify",
        "document",
        path=doc.path,
        status=str(verification.status),
        commands=len(results),
        skipped=verification.skipped,
    )
    return verification


def verify_documents(
    docs: Sequence[Document],
    config: RunnerConfig,
    *,
    jobs: int = 1,
    ctx: RunContext | None = None,
) -> list[DocumentVerification]:
    if jobs <= 0:
        raise ConfigurationError(f"verify.jobs must be greater than 0, got {jobs}")
    if jobs == 1 or len(docs) <= 1:
        outcomes = [verify_document(doc, config, ctx) for doc in docs]
    else:
        with ThreadPoolExecutor(max_workers=jobs) as pool:
            outcomes = list(pool.map(lambda doc: verify_document(doc, config, ctx), docs))
    return [outcome for outcome in outcomes if outcome is not None]


__all__ = ["run", "run_item", "run_items", "verify_document", "verify_documents"]
