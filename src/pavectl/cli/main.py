from __future__ import annotations

import argparse
import json
import sys

from .. import __version__
from ..core.context import RunContext
from ..core.errors import ScriptError
from ..core.exit_codes import ERR_INTERNAL, ERR_USAGE, OK
from ..core.logging import log_event
from .check import configure_check_parser, run_check_command
from .verify import configure_verify_parser, run_verify_command


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="pavectl", description="check and verify PAVED documentation")
    p.add_argument("--version", action="version", version=f"pavectl {__version__}")
    p.add_argument("--format", choices=["text", "json", "github"], default="text", help="output format")
    p.add_argument("--config", help="path to .pavectl.yaml (default: search upward from cwd)")
    p.add_argument("--run-id", help="run identifier attached to logs and reports")
    p.add_argument("--log-json", action="store_true", help="emit log records as JSON lines")
    vg = p.add_mutually_exclusive_group()
    vg.add_argument("--verbose", action="store_true", help="enable verbose diagnostics")
    vg.add_argument("--quiet", action="store_true", help="only emit errors")
    sub = p.add_subparsers(dest="cmd", required=True)

    configure_check_parser(sub)
    configure_verify_parser(sub)
    sub.add_parser("version", help="print the pavectl version")
    return p


def _emit_error(ctx: RunContext, message: str, code: int, kind: str) -> None:
    if ctx.output_format == "json":
        print(
            json.dumps(
                {
                    "schema_version": 1,
                    "tool": "pavectl",
                    "status": "fail",
                    "error": {"message": message, "code": code, "kind": kind},
                },
                sort_keys=True,
            ),
            file=sys.stderr,
        )
    else:
        print(f"error: {message}", file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    ns = build_parser().parse_args(argv)
    ctx = RunContext.from_args(
        ns.run_id,
        output_format=ns.format,
        verbose=ns.verbose,
        quiet=ns.quiet,
        log_json=ns.log_json,
    )
    log_event(ctx, "info", "cli", "start", cmd=ns.cmd, fmt=ctx.output_format)
    code = ERR_USAGE
    try:
        if ns.cmd == "version":
            if ctx.output_format == "json":
                print(json.dumps({"schema_version": 1, "tool": "pavectl", "version": __version__}, sort_keys=True))
            else:
                print(f"pavectl {__version__}")
            code = OK
        elif ns.cmd == "check":
            code = run_check_command(ctx, ns)
        elif ns.cmd == "verify":
            code = run_verify_command(ctx, ns)
        return code
    except ScriptError as exc:
        code = exc.code
        _emit_error(ctx, exc.message, exc.code, exc.kind)
        return code
    except Exception as exc:  # pragma: no cover
        code = ERR_INTERNAL
        _emit_error(ctx, f"internal error: {exc}", ERR_INTERNAL, "internal_error")
        return code
    finally:
        log_event(ctx, "info", "cli", "finish", cmd=ns.cmd, code=code)


def run() -> int:
    return main(sys.argv[1:])


if __name__ == "__main__":
    raise SystemExit(run())
