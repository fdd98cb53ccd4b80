from __future__ import annotations

from .ids import CHECK_REPORT, CONFIG, VERIFY_REPORT
from .validate import schema_errors, validate, validate_file, validate_self

__all__ = ["CHECK_REPORT", "CONFIG", "VERIFY_REPORT", "schema_errors", "validate", "validate_file", "validate_self"]
