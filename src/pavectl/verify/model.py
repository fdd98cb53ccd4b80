from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from ..core.errors import ConfigurationError

DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_OUTPUT_LIMIT_BYTES = 1024 * 1024
DEFAULT_KILL_GRACE_SECONDS = 0.5


class CommandOutcome(str, Enum):
    PASS = "pass"
    FAIL = "fail"
    TIMEOUT = "timeout"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class RunnerConfig:
    working_directory: Path = field(default_factory=Path.cwd)
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    fail_fast: bool = True
    output_limit_bytes: int = DEFAULT_OUTPUT_LIMIT_BYTES
    shell: str = "sh"
    kill_grace_seconds: float = DEFAULT_KILL_GRACE_SECONDS

    def __post_init__(self) -> None:
        object.__setattr__(self, "working_directory", Path(self.working_directory))
        if isinstance(self.timeout_seconds, bool) or not isinstance(self.timeout_seconds, (int, float)):
            raise ConfigurationError(f"verify.timeout_seconds must be a number, got {self.timeout_seconds!r}")
        if self.timeout_seconds <= 0:
            raise ConfigurationError(f"verify.timeout_seconds must be greater than 0, got {self.timeout_seconds}")
        if int(self.output_limit_bytes) <= 0:
            raise ConfigurationError(f"verify.output_limit_bytes must be greater than 0, got {self.output_limit_bytes}")
        if self.kill_grace_seconds < 0:
            raise ConfigurationError("verify.kill_grace_seconds cannot be negative")


@dataclass(frozen=True)
class VerificationItem:
    command: str
    line: int = 0
    working_dir: str | None = None
    env: tuple[tuple[str, str], ...] = ()


@dataclass(frozen=True)
class VerificationPlan:
    path: str
    section_line: int
    items: tuple[VerificationItem, ...] = ()

    @property
    def commands(self) -> list[str]:
        return [item.command for item in self.items]


@dataclass(frozen=True)
class CommandResult:
    command: str
    outcome: CommandOutcome
    exit_status: int | None
    stdout: str = ""
    stderr: str = ""
    duration_ms: int = 0
    working_dir: str = ""
    truncated: bool = False

    @property
    def passed(self) -> bool:
        return self.outcome == CommandOutcome.PASS


@dataclass(frozen=True)
class DocumentVerification:
    path: str
    section_line: int
    planned: int
    results: tuple[CommandResult, ...] = ()

    @property
    def status(self) -> CommandOutcome:
        if all(result.passed for result in self.results):
            return CommandOutcome.PASS
        return CommandOutcome.FAIL

    @property
    def skipped(self) -> int:
        return max(0, self.planned - len(self.results))


__all__ = [
    "CommandOutcome",
    "CommandResult",
    "DEFAULT_OUTPUT_LIMIT_BYTES",
    "DEFAULT_TIMEOUT_SECONDS",
    "DocumentVerification",
    "RunnerConfig",
    "VerificationItem",
    "VerificationPlan",
]
