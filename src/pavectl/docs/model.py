from __future__ import annotations

import re
from dataclasses import dataclass, field

_LIST_ITEM_RE = re.compile(r"^\s*[-*+]\s+(.*\S)\s*$")


def split_lines(text: str) -> list[str]:
    """Split on ``\\n`` only, dropping a trailing ``\\r`` per line and the empty tail after a final newline."""
    lines = [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]
    if lines and lines[-1] == "":
        lines.pop()
    return lines


@dataclass(frozen=True)
class Frontmatter:
    paths: tuple[str, ...] = ()
    working_dir: str | None = None


@dataclass(frozen=True)
class BlockDirectives:
    working_dir: str | None = None
    env: tuple[tuple[str, str], ...] = ()


@dataclass(frozen=True)
class CodeBlock:
    language_hint: str
    content: str
    start_line: int
    end_line: int
    directives: BlockDirectives = field(default_factory=BlockDirectives)


@dataclass(frozen=True)
class Section:
    name: str
    heading: str
    start_line: int
    end_line: int
    content: str
    code_blocks: tuple[CodeBlock, ...] = ()

    def list_items(self) -> list[str]:
        items: list[str] = []
        for raw in split_lines(self.content):
            match = _LIST_ITEM_RE.match(raw)
            if match:
                items.append(match.group(1).strip("`"))
        return items


@dataclass(frozen=True)
class Document:
    path: str
    raw_text: str
    title: str | None
    sections: tuple[Section, ...]
    code_blocks: tuple[CodeBlock, ...] = ()
    frontmatter: Frontmatter | None = None

    @property
    def lines(self) -> list[str]:
        return split_lines(self.raw_text)

    @property
    def line_count(self) -> int:
        return len(self.lines)

    def line(self, number: int) -> str:
        if number < 1 or number > self.line_count:
            raise IndexError(f"line {number} outside 1..{self.line_count}")
        return self.lines[number - 1]

    def sections_named(self, name: str) -> list[Section]:
        wanted = name.strip().casefold()
        return [section for section in self.sections if section.name == wanted]

    def section(self, name: str) -> Section | None:
        matches = self.sections_named(name)
        return matches[0] if matches else None

    def has_section(self, name: str) -> bool:
        return self.section(name) is not None


__all__ = ["BlockDirectives", "CodeBlock", "Document", "Frontmatter", "Section", "split_lines"]
