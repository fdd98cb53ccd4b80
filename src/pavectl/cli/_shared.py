from __future__ import annotations

import argparse
from pathlib import Path

from ..config import PaveConfig, load_config
from ..core.context import RunContext
from ..core.logging import log_event
from ..discovery import discover_documents
from ..docs import Document, parse_file


def load_run_config(ctx: RunContext, ns: argparse.Namespace) -> PaveConfig:
    explicit = Path(ns.config) if getattr(ns, "config", None) else None
    config = load_config(explicit, start=ctx.cwd)
    log_event(
        ctx,
        "info",
        "config",
        "loaded",
        path=str(config.path) if config.path else "<defaults>",
        docs_root=str(config.docs_root),
    )
    return config


def _display_path(path: Path, cwd: Path) -> Path:
    if not path.is_absolute():
        return path
    try:
        return path.relative_to(cwd)
    except ValueError:
        return path


def load_documents(ctx: RunContext, config: PaveConfig, raw_paths: list[str] | None) -> list[Document]:
    roots = [Path(item) for item in raw_paths] if raw_paths else [config.docs_root]
    roots = [_display_path(root, ctx.cwd) for root in roots]
    files = discover_documents(roots, config.docs.exclude)
    log_event(ctx, "debug", "discovery", "documents", count=len(files))
    return [parse_file(path) for path in files]


def emit(text: str) -> None:
    if text:
        print(text)
