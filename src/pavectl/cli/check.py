from __future__ import annotations

import argparse

from ..checks import check_document, list_rules
from ..core.context import RunContext
from ..core.exit_codes import ERR_FAILED, OK
from ..reporting import aggregate, gradual_active, reclassify
from ..reporting.render import check_payload, render_check_github, render_check_text, render_json
from ._shared import emit, load_documents, load_run_config


def configure_check_parser(sub: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    p = sub.add_parser("check", help="check documents against the PAVED structure rules")
    p.add_argument("paths", nargs="*", help="files or directories (default: docs root from config)")
    p.add_argument("--strict", action="store_true", help="treat warnings as errors")
    p.add_argument("--gradual", action="store_true", help="report errors as warnings while migrating")
    p.add_argument("--list-rules", action="store_true", help="print the active rules and exit")


def _gradual(ctx: RunContext, ns: argparse.Namespace, configured: bool, until: str | None) -> bool:
    if ns.gradual:
        return True
    return configured and gradual_active(until, ctx=ctx)


def run_check_command(ctx: RunContext, ns: argparse.Namespace) -> int:
    config = load_run_config(ctx, ns)
    if ns.list_rules:
        for rule in list_rules(config.rules):
            emit(f"{rule.rule_id}: {rule.description}")
        return OK
    docs = load_documents(ctx, config, ns.paths)
    entries = [check_document(doc, config.rules) for doc in docs]
    entries = reclassify(
        entries,
        strict=ns.strict,
        gradual=_gradual(ctx, ns, config.gradual, config.gradual_until),
    )
    report = aggregate(entries)
    if ctx.output_format == "json":
        emit(render_json(check_payload(report, run_id=ctx.run_id, strict=ns.strict)))
    elif ctx.output_format == "github":
        emit(render_check_github(report))
    else:
        emit(render_check_text(report, quiet=ctx.quiet))
    return OK if report.checks_ok(ns.strict) else ERR_FAILED


__all__ = ["configure_check_parser", "run_check_command"]
