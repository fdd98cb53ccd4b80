from __future__ import annotations

from .aggregate import BatchReport, aggregate
from .policy import apply_gradual, apply_strict, gradual_active, reclassify

__all__ = ["BatchReport", "aggregate", "apply_gradual", "apply_strict", "gradual_active", "reclassify"]
