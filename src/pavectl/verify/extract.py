"""Turn the Verification section of a document into shell commands.

Only fenced blocks tagged with a shell language count. Each block becomes one
command string: prompts and comments are stripped and the remaining lines are
chained with ``&&`` so a later line only runs when the earlier one succeeded.
"""

from __future__ import annotations

import re

from ..docs.model import CodeBlock, Document, split_lines
from .model import VerificationItem, VerificationPlan

SHELL_LANGUAGES = frozenset({"bash", "sh", "shell", "console"})
VERIFICATION_SECTION = "verification"

_PROMPT_RE = re.compile(r"^[$>]\s+")
_COMPOUND_KEYWORDS = frozenset({"for", "while", "until", "if", "case", "select", "function"})
_FUNCTION_DEF_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_-]*\s*\(\)\s*(\{|$)")


def is_shell_block(block: CodeBlock) -> bool:
    return block.language_hint.lower() in SHELL_LANGUAGES


def _is_comment(line: str) -> bool:
    return line.startswith("#")


def command_lines(content: str) -> list[str]:
    lines: list[str] = []
    carry = ""
    for raw in split_lines(content):
        line = raw.strip()
        if not line or _is_comment(line):
            continue
        line = _PROMPT_RE.sub("", line, count=1)
        if line in {"$", ">"} or _is_comment(line):
            continue
        if carry:
            line = f"{carry} {line}"
            carry = ""
        if line.endswith("\\"):
            carry = line[:-1].rstrip()
            continue
        lines.append(line)
    if carry:
        lines.append(carry)
    return lines


def _is_compound(lines: list[str]) -> bool:
    return any(line.split()[0] in _COMPOUND_KEYWORDS or _FUNCTION_DEF_RE.match(line) for line in lines)


def normalize_block(content: str) -> str:
    lines = command_lines(content)
    if not lines:
        return ""
    if _is_compound(lines):
        return "\n".join(["set -e", *lines])
    return " && ".join(lines)


def extract_verification(doc: Document) -> VerificationPlan | None:
    section = doc.section(VERIFICATION_SECTION)
    if section is None:
        return None
    default_dir = doc.frontmatter.working_dir if doc.frontmatter else None
    items: list[VerificationItem] = []
    for block in section.code_blocks:
        if not is_shell_block(block):
            continue
        command = normalize_block(block.content)
        if not command:
            continue
        items.append(
            VerificationItem(
                command=command,
                line=block.start_line,
                working_dir=block.directives.working_dir or default_dir,
                env=block.directives.env,
            )
        )
    return VerificationPlan(path=doc.path, section_line=section.start_line, items=tuple(items))


def extract_commands(doc: Document) -> list[str]:
    plan = extract_verification(doc)
    return plan.commands if plan is not None else []


__all__ = [
    "SHELL_LANGUAGES",
    "command_lines",
    "extract_commands",
    "extract_verification",
    "is_shell_block",
    "normalize_block",
]
