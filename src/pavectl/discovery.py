from __future__ import annotations

from fnmatch import fnmatch
from pathlib import Path
from typing import Iterable

from .core.errors import ScriptError
from .core.exit_codes import ERR_IO

SKIPPED_NAMES = frozenset({"index.md"})
SKIPPED_DIRS = frozenset({"templates"})
MARKDOWN_SUFFIX = ".md"


def _skipped(path: Path, root: Path, exclude: Iterable[str]) -> bool:
    if path.name in SKIPPED_NAMES:
        return True
    try:
        rel = path.relative_to(root)
    except ValueError:
        rel = path
    if SKIPPED_DIRS.intersection(rel.parts[:-1]):
        return True
    rel_posix = rel.as_posix()
    return any(fnmatch(rel_posix, pattern) for pattern in exclude)


def discover_documents(paths: Iterable[Path], exclude: Iterable[str] = ()) -> list[Path]:
    """Expand files and directories into a sorted, de-duplicated list of markdown documents.

    Explicit files that are not ``.md`` are dropped, same as inside directories.
    """
    patterns = tuple(exclude)
    found: dict[Path, None] = {}
    for raw in paths:
        path = Path(raw)
        if path.is_file():
            if path.suffix == MARKDOWN_SUFFIX:
                found.setdefault(path, None)
            continue
        if not path.is_dir():
            raise ScriptError(f"path not found: {path}", ERR_IO, "io_error")
        for md in sorted(path.rglob("*.md")):
            if md.is_file() and not _skipped(md, path, patterns):
                found.setdefault(md, None)
    return list(found)


__all__ = ["discover_documents"]
