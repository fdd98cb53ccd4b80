from __future__ import annotations

from pathlib import Path

import pytest
from hypothesis import settings

_ALLOWED_MARKERS = {"unit", "integration", "slow"}

settings.register_profile("pavectl", deadline=None, max_examples=60)
settings.load_profile("pavectl")

SCENARIO_DOC = (
    "# T\n\n## Purpose\nx\n\n## Verification\n```bash\n$ true\n```\n\n## Examples\n```bash\necho hi\n```\n"
)


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        names = {mark.name for mark in item.iter_markers()}
        if not names.intersection(_ALLOWED_MARKERS):
            item.add_marker("unit")


@pytest.fixture
def scenario_text() -> str:
    return SCENARIO_DOC


@pytest.fixture
def docs_repo(tmp_path: Path) -> Path:
    repo = tmp_path / "repo"
    docs = repo / "docs"
    (docs / "guides").mkdir(parents=True)
    (docs / "templates").mkdir()
    (docs / "guides" / "good.md").write_text(SCENARIO_DOC, encoding="utf-8")
    (docs / "index.md").write_text("# Index\n", encoding="utf-8")
    (docs / "templates" / "skeleton.md").write_text("# Template\n", encoding="utf-8")
    return repo
