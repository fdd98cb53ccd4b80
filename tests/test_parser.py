from __future__ import annotations

from pathlib import Path

import pytest

from pavectl.core.errors import ScriptError
from pavectl.core.exit_codes import ERR_IO
from pavectl.docs import parse, parse_file


def test_scenario_document_sections_and_blocks(scenario_text: str) -> None:
    doc = parse(scenario_text, "docs/t.md")
    assert doc.path == "docs/t.md"
    assert doc.title == "T"
    assert [section.heading for section in doc.sections] == ["Purpose", "Verification", "Examples"]
    purpose, verification, examples = doc.sections
    assert (purpose.start_line, purpose.end_line) == (3, 5)
    assert (verification.start_line, verification.end_line) == (6, 10)
    assert examples.end_line == doc.line_count
    assert len(doc.code_blocks) == 2
    assert verification.code_blocks[0].language_hint == "bash"
    assert verification.code_blocks[0].content == "$ true"
    assert (verification.code_blocks[0].start_line, verification.code_blocks[0].end_line) == (7, 9)


def test_section_names_are_case_insensitive() -> None:
    doc = parse("## VERIFICATION\ntext\n")
    assert doc.has_section("Verification")
    assert doc.section("verification").heading == "VERIFICATION"


def test_headings_inside_fences_do_not_open_sections() -> None:
    text = "## Purpose\n```markdown\n## Not A Section\n```\n"
    doc = parse(text)
    assert [section.name for section in doc.sections] == ["purpose"]
    assert doc.code_blocks[0].content == "## Not A Section"


def test_deeper_headings_stay_inside_section() -> None:
    doc = parse("## API\n### Details\nbody\n")
    assert len(doc.sections) == 1
    assert "### Details" in doc.sections[0].content


def test_hash_without_space_is_not_a_heading() -> None:
    doc = parse("##Purpose\n#hashtag\n")
    assert doc.sections == ()
    assert doc.title is None


def test_longer_fence_needs_matching_close() -> None:
    text = "## Examples\n````md\n```bash\necho nested\n```\n````\n"
    doc = parse(text)
    assert len(doc.code_blocks) == 1
    block = doc.code_blocks[0]
    assert block.language_hint == "md"
    assert block.content.splitlines() == ["```bash", "echo nested", "```"]


def test_unterminated_fence_runs_to_end() -> None:
    doc = parse("## Examples\n```bash\necho hi\n## Hidden\n")
    assert [section.name for section in doc.sections] == ["examples"]
    assert doc.code_blocks[0].end_line == 4


def test_language_hint_is_first_word_of_info_string() -> None:
    doc = parse("```bash title=demo\necho\n```\n")
    assert doc.code_blocks[0].language_hint == "bash"


def test_block_directives_attach_to_next_fence() -> None:
    text = (
        "## Verification\n"
        "<!-- pave:working_dir tools -->\n"
        "<!--pave:env GREETING=hello world-->\n"
        "```bash\n"
        "echo $GREETING\n"
        "```\n"
        "```bash\n"
        "true\n"
        "```\n"
    )
    first, second = parse(text).code_blocks
    assert first.directives.working_dir == "tools"
    assert first.directives.env == (("GREETING", "hello world"),)
    assert second.directives.working_dir is None
    assert second.directives.env == ()


def test_frontmatter_is_read_and_skipped() -> None:
    text = "---\npave:\n  paths: [src/a.py]\n  working_dir: app\n---\n# Title\n## Purpose\n"
    doc = parse(text)
    assert doc.frontmatter is not None
    assert doc.frontmatter.paths == ("src/a.py",)
    assert doc.frontmatter.working_dir == "app"
    assert doc.title == "Title"
    assert doc.sections[0].start_line == 7


def test_invalid_frontmatter_yaml_is_ignored() -> None:
    doc = parse("---\npave: [unclosed\n---\n## Purpose\n")
    assert doc.frontmatter is None
    assert doc.has_section("purpose")


def test_paths_section_list_items() -> None:
    doc = parse("## Paths\n- `src/pavectl/docs`\n* tests/test_parser.py\nprose\n")
    assert doc.section("paths").list_items() == ["src/pavectl/docs", "tests/test_parser.py"]


def test_empty_input() -> None:
    doc = parse("")
    assert doc.sections == ()
    assert doc.code_blocks == ()
    assert doc.line_count == 0


def test_line_accessor_bounds() -> None:
    doc = parse("a\nb\n")
    assert doc.line(2) == "b"
    with pytest.raises(IndexError):
        doc.line(3)


def test_parse_file_reads_utf8(tmp_path: Path) -> None:
    path = tmp_path / "doc.md"
    path.write_text("## Purpose\ncafé\n", encoding="utf-8")
    doc = parse_file(path)
    assert doc.path == path.as_posix()
    assert "café" in doc.section("purpose").content


def test_parse_file_missing_raises_io_error(tmp_path: Path) -> None:
    with pytest.raises(ScriptError) as excinfo:
        parse_file(tmp_path / "missing.md")
    assert excinfo.value.code == ERR_IO
    assert excinfo.value.kind == "io_error"


def test_leading_horizontal_rule_is_body() -> None:
    text = "---\n## Purpose\nx\n## Verification\n```bash\ntrue\n```\n---\n## Examples\n```sh\nls\n```\n"
    doc = parse(text)
    assert doc.frontmatter is None
    assert [section.name for section in doc.sections] == ["purpose", "verification", "examples"]
    assert doc.sections[0].start_line == 2


def test_scalar_frontmatter_block_is_body() -> None:
    doc = parse("---\njust a sentence\n---\n## Purpose\n")
    assert doc.frontmatter is None
    assert doc.sections[0].start_line == 4


def test_mapping_frontmatter_without_pave_key_is_skipped() -> None:
    doc = parse("---\ntitle: Guide\n---\n## Purpose\n")
    assert doc.frontmatter is None
    assert doc.sections[0].start_line == 4


def test_only_newlines_split_lines() -> None:
    text = "## Purpose\nsee\u2028this\x0cpage\n## Verification\n```bash\ntrue\n```\n"
    doc = parse(text)
    assert doc.line_count == 6
    assert doc.section("verification").start_line == 3
    assert doc.code_blocks[0].start_line == 4
    assert doc.line(2) == "see\u2028this\x0cpage"


def test_crlf_line_endings() -> None:
    doc = parse("## Purpose\r\nx\r\n## Examples\r\n```bash\r\necho hi\r\n```\r\n")
    assert doc.line_count == 6
    assert doc.line(1) == "## Purpose"
    assert doc.section("examples").start_line == 3
    assert doc.code_blocks[0].content == "echo hi"
