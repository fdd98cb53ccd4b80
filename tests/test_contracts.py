from __future__ import annotations

import json
from pathlib import Path

import pytest

from pavectl.contracts import CHECK_REPORT, CONFIG, VERIFY_REPORT, schema_errors, validate_file
from pavectl.contracts.ids import SCHEMA_FILES
from pavectl.contracts.validate import load_schema, schema_path
from pavectl.core.errors import ScriptError


@pytest.mark.parametrize("name", [CHECK_REPORT, VERIFY_REPORT, CONFIG])
def test_bundled_schemas_load(name: str) -> None:
    assert schema_path(name).is_file()
    assert load_schema(name)["$id"] == name


def test_schema_registry_is_complete() -> None:
    assert set(SCHEMA_FILES) == {CHECK_REPORT, VERIFY_REPORT, CONFIG}


def test_unknown_schema() -> None:
    with pytest.raises(ScriptError, match="unknown schema"):
        schema_path("pavectl.nope.v1")


def test_schema_errors_point_at_field() -> None:
    errors = schema_errors(CONFIG, {"verify": {"jobs": "two"}})
    assert len(errors) == 1
    assert errors[0].startswith("verify/jobs: ")


def test_validate_file(tmp_path: Path) -> None:
    path = tmp_path / "report.json"
    path.write_text(json.dumps({"schema_name": CHECK_REPORT}), encoding="utf-8")
    with pytest.raises(ScriptError):
        validate_file(CHECK_REPORT, path)
