from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

import jsonschema

from ..core.errors import ScriptError
from ..core.exit_codes import ERR_VALIDATION
from .ids import SCHEMA_FILES


def schemas_root() -> Path:
    return Path(__file__).resolve().parent / "schemas"


def schema_path(schema_name: str) -> Path:
    file_name = SCHEMA_FILES.get(schema_name)
    if file_name is None:
        raise ScriptError(f"unknown schema: {schema_name}", ERR_VALIDATION)
    return schemas_root() / file_name


@lru_cache(maxsize=None)
def load_schema(schema_name: str) -> dict[str, Any]:
    return json.loads(schema_path(schema_name).read_text(encoding="utf-8"))


def schema_errors(schema_name: str, payload: Any) -> list[str]:
    validator = jsonschema.Draft202012Validator(load_schema(schema_name))
    errors: list[str] = []
    for error in sorted(validator.iter_errors(payload), key=lambda item: [str(part) for part in item.absolute_path]):
        pointer = "/".join(str(part) for part in error.absolute_path) or "<root>"
        errors.append(f"{pointer}: {error.message}")
    return errors


def validate(schema_name: str, payload: Any) -> None:
    try:
        jsonschema.validate(payload, load_schema(schema_name))
    except jsonschema.ValidationError as exc:
        pointer = "/".join(str(p) for p in exc.absolute_path)
        loc = pointer or "<root>"
        raise ScriptError(f"schema validation failed for {schema_name} at {loc}: {exc.message}", ERR_VALIDATION) from exc


def validate_self(schema_name: str, payload: dict[str, Any]) -> dict[str, Any]:
    validate(schema_name, payload)
    return payload


def validate_file(schema_name: str, file_path: str | Path) -> None:
    payload = json.loads(Path(file_path).read_text(encoding="utf-8"))
    validate(schema_name, payload)
