"""Markdown parsing for PAVED documents.

``parse`` is total: malformed markdown degrades to fewer sections or blocks,
never to an exception. Only second-level headings open sections; fenced code
blocks are tracked so headings inside them stay content.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from ..core.errors import ScriptError
from ..core.exit_codes import ERR_IO
from .model import BlockDirectives, CodeBlock, Document, Frontmatter, Section, split_lines

_FENCE_CHAR = "`"
_MIN_FENCE = 3
_WORKING_DIR_RE = re.compile(r"^<!--\s*pave:working_dir\s+(.+?)\s*-->$")
_ENV_RE = re.compile(r"^<!--\s*pave:env\s+([^=\s]+)\s*=(.*?)\s*-->$")


@dataclass
class _PendingDirectives:
    working_dir: str | None = None
    env: list[tuple[str, str]] = field(default_factory=list)

    def take(self) -> BlockDirectives:
        directives = BlockDirectives(working_dir=self.working_dir, env=tuple(self.env))
        self.working_dir = None
        self.env = []
        return directives


@dataclass
class _OpenFence:
    length: int
    language_hint: str
    start_line: int
    directives: BlockDirectives
    content: list[str] = field(default_factory=list)

    def close(self, end_line: int) -> CodeBlock:
        return CodeBlock(
            language_hint=self.language_hint,
            content="\n".join(self.content),
            start_line=self.start_line,
            end_line=end_line,
            directives=self.directives,
        )


def _fence_length(stripped: str) -> int:
    return len(stripped) - len(stripped.lstrip(_FENCE_CHAR))


def _opening_fence(stripped: str) -> tuple[int, str] | None:
    length = _fence_length(stripped)
    if length < _MIN_FENCE:
        return None
    info = stripped[length:].split()
    return length, (info[0] if info else "")


def _is_closing_fence(stripped: str, opening_length: int) -> bool:
    length = _fence_length(stripped)
    return length >= max(_MIN_FENCE, opening_length) and length == len(stripped)


def _heading(stripped: str) -> tuple[int, str] | None:
    level = len(stripped) - len(stripped.lstrip("#"))
    if level == 0 or not stripped[level:].startswith(" "):
        return None
    return level, stripped[level:].strip()


def _read_directive(stripped: str, pending: _PendingDirectives) -> bool:
    match = _WORKING_DIR_RE.match(stripped)
    if match:
        pending.working_dir = match.group(1)
        return True
    match = _ENV_RE.match(stripped)
    if match:
        pending.env.append((match.group(1), match.group(2).strip()))
        return True
    return False


def _read_frontmatter(lines: list[str]) -> tuple[Frontmatter | None, int]:
    # only a YAML mapping counts; a leading horizontal rule stays body
    if not lines or lines[0].strip() != "---":
        return None, 0
    for idx in range(1, len(lines)):
        if lines[idx].strip() == "---":
            data = _load_yaml_mapping("\n".join(lines[1:idx]))
            if data is None:
                return None, 0
            return _frontmatter_from_mapping(data), idx + 1
    return None, 0


def _load_yaml_mapping(text: str) -> dict | None:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError:
        return None
    return data if isinstance(data, dict) else None


def _frontmatter_from_mapping(data: dict) -> Frontmatter | None:
    pave = data.get("pave")
    if not isinstance(pave, dict):
        return None
    raw_paths = pave.get("paths") or []
    paths = tuple(str(item) for item in raw_paths) if isinstance(raw_paths, list) else ()
    working_dir = pave.get("working_dir")
    return Frontmatter(paths=paths, working_dir=str(working_dir) if working_dir else None)


def parse(raw_text: str, path: str = "") -> Document:
    lines = split_lines(raw_text)
    frontmatter, body_start = _read_frontmatter(lines)

    title: str | None = None
    headings: list[tuple[int, str]] = []
    blocks: list[CodeBlock] = []
    pending = _PendingDirectives()
    fence: _OpenFence | None = None

    for idx in range(body_start, len(lines)):
        number = idx + 1
        stripped = lines[idx].strip()
        if fence is not None:
            if _is_closing_fence(stripped, fence.length):
                blocks.append(fence.close(number))
                fence = None
            else:
                fence.content.append(lines[idx])
            continue
        opening = _opening_fence(stripped)
        if opening is not None:
            fence = _OpenFence(opening[0], opening[1], number, pending.take())
            continue
        if _read_directive(stripped, pending):
            continue
        heading = _heading(stripped)
        if heading is None:
            continue
        level, text = heading
        if level == 2:
            pending.take()
            headings.append((number, text))
        elif level == 1 and title is None and not headings:
            title = text

    if fence is not None:
        # unterminated fence runs to end of document
        blocks.append(fence.close(len(lines)))

    sections: list[Section] = []
    for position, (start, text) in enumerate(headings):
        end = headings[position + 1][0] - 1 if position + 1 < len(headings) else len(lines)
        sections.append(
            Section(
                name=text.casefold(),
                heading=text,
                start_line=start,
                end_line=end,
                content="\n".join(lines[start:end]),
                code_blocks=tuple(block for block in blocks if start <= block.start_line <= end),
            )
        )

    return Document(
        path=path,
        raw_text=raw_text,
        title=title,
        sections=tuple(sections),
        code_blocks=tuple(blocks),
        frontmatter=frontmatter,
    )


def parse_file(path: Path) -> Document:
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise ScriptError(f"failed to read {path}: {exc}", ERR_IO, "io_error") from exc
    return parse(text, path.as_posix())


__all__ = ["parse", "parse_file"]
