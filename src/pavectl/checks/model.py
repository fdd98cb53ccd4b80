from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, Callable

from ..core.errors import ConfigurationError

if TYPE_CHECKING:
    from ..docs.model import Document


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class RuleSet:
    max_lines: int = 300
    require_verification: bool = True
    require_examples: bool = True
    require_verification_commands: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.max_lines, bool) or not isinstance(self.max_lines, int):
            raise ConfigurationError(f"rules.max_lines must be an integer, got {self.max_lines!r}")
        if self.max_lines <= 0:
            raise ConfigurationError(f"rules.max_lines must be greater than 0, got {self.max_lines}")
        for name in ("require_verification", "require_examples", "require_verification_commands"):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise ConfigurationError(f"rules.{name} must be a boolean, got {value!r}")


@dataclass(frozen=True)
class Finding:
    rule: str
    severity: Severity
    line: int
    message: str
    hint: str = ""
    converted_from_error: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "line", max(1, int(self.line or 1)))
        object.__setattr__(self, "message", str(self.message).strip())
        object.__setattr__(self, "hint", str(self.hint or "").strip())

    def with_severity(self, severity: Severity, *, converted: bool = False) -> "Finding":
        return replace(self, severity=severity, converted_from_error=converted)


@dataclass(frozen=True)
class DocumentFindings:
    path: str
    findings: tuple[Finding, ...] = ()

    @property
    def errors(self) -> tuple[Finding, ...]:
        return tuple(item for item in self.findings if item.severity == Severity.ERROR)

    @property
    def warnings(self) -> tuple[Finding, ...]:
        return tuple(item for item in self.findings if item.severity == Severity.WARNING)


RuleFn = Callable[["Document", RuleSet], list[Finding]]


@dataclass(frozen=True)
class RuleDef:
    rule_id: str
    description: str
    enabled: Callable[[RuleSet], bool]
    fn: RuleFn


__all__ = ["DocumentFindings", "Finding", "RuleDef", "RuleFn", "RuleSet", "Severity"]
