from __future__ import annotations

from .model import BlockDirectives, CodeBlock, Document, Frontmatter, Section
from .parser import parse, parse_file

__all__ = ["BlockDirectives", "CodeBlock", "Document", "Frontmatter", "Section", "parse", "parse_file"]
