from __future__ import annotations

import argparse
from pathlib import Path

from ..core.context import RunContext
from ..core.errors import ScriptError
from ..core.exit_codes import ERR_FAILED, ERR_IO, OK
from ..reporting import aggregate
from ..reporting.render import render_json, render_verify_github, render_verify_text, verify_payload
from ..verify import verify_documents
from ._shared import emit, load_documents, load_run_config


def configure_verify_parser(sub: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    p = sub.add_parser("verify", help="run the commands in each document's Verification section")
    p.add_argument("paths", nargs="*", help="files or directories (default: docs root from config)")
    p.add_argument("--timeout", type=float, help="per-command timeout in seconds")
    p.add_argument("--keep-going", action="store_true", default=None, help="run remaining commands after a failure")
    p.add_argument("--jobs", type=int, help="documents verified in parallel")
    p.add_argument("--report", help="write the JSON verify report to this path")


def _write_report(path: str, payload: str) -> None:
    target = Path(path)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(payload + "\n", encoding="utf-8")
    except OSError as exc:
        raise ScriptError(f"failed to write report {target}: {exc}", ERR_IO, "io_error") from exc


def run_verify_command(ctx: RunContext, ns: argparse.Namespace) -> int:
    config = load_run_config(ctx, ns)
    runner = config.runner_config(timeout_seconds=ns.timeout, keep_going=ns.keep_going)
    jobs = ns.jobs if ns.jobs is not None else config.verify.jobs
    docs = load_documents(ctx, config, ns.paths)
    report = aggregate(verify_documents(docs, runner, jobs=jobs, ctx=ctx))
    payload = verify_payload(report, run_id=ctx.run_id)
    if ns.report:
        _write_report(ns.report, render_json(payload))
    if ctx.output_format == "json":
        emit(render_json(payload))
    elif ctx.output_format == "github":
        emit(render_verify_github(report))
    else:
        emit(render_verify_text(report, verbose=ctx.verbose, quiet=ctx.quiet))
    return OK if report.verification_ok else ERR_FAILED


__all__ = ["configure_verify_parser", "run_verify_command"]
