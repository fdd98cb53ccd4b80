from __future__ import annotations

CHECK_REPORT = "pavectl.check-report.v1"
VERIFY_REPORT = "pavectl.verify-report.v1"
CONFIG = "pavectl.config.v1"

SCHEMA_FILES = {
    CHECK_REPORT: "check-report.schema.json",
    VERIFY_REPORT: "verify-report.schema.json",
    CONFIG: "config.schema.json",
}
