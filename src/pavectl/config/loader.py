"""Load ``.pavectl.yaml`` into validated, immutable run settings.

The file is optional; every key has a default. Structure is checked against
the bundled JSON schema first, then value ranges are checked while building
``RuleSet`` and ``RunnerConfig`` so a bad config fails before any document is
read.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from ..checks.model import RuleSet
from ..contracts import CONFIG, schema_errors
from ..core.errors import ConfigurationError
from ..verify.model import DEFAULT_OUTPUT_LIMIT_BYTES, DEFAULT_TIMEOUT_SECONDS, RunnerConfig

CONFIG_FILENAME = ".pavectl.yaml"


@dataclass(frozen=True)
class DocsConfig:
    root: str = "docs"
    exclude: tuple[str, ...] = ()


@dataclass(frozen=True)
class VerifyConfig:
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    keep_going: bool = False
    jobs: int = 1
    output_limit_bytes: int = DEFAULT_OUTPUT_LIMIT_BYTES
    shell: str = "sh"


@dataclass(frozen=True)
class PaveConfig:
    root_dir: Path
    path: Path | None = None
    docs: DocsConfig = field(default_factory=DocsConfig)
    rules: RuleSet = field(default_factory=RuleSet)
    gradual: bool = False
    gradual_until: str | None = None
    verify: VerifyConfig = field(default_factory=VerifyConfig)

    @property
    def docs_root(self) -> Path:
        return self.root_dir / self.docs.root

    def runner_config(
        self,
        *,
        timeout_seconds: float | None = None,
        keep_going: bool | None = None,
        working_directory: Path | None = None,
    ) -> RunnerConfig:
        going = self.verify.keep_going if keep_going is None else keep_going
        return RunnerConfig(
            working_directory=working_directory or self.root_dir,
            timeout_seconds=self.verify.timeout_seconds if timeout_seconds is None else timeout_seconds,
            fail_fast=not going,
            output_limit_bytes=self.verify.output_limit_bytes,
            shell=self.verify.shell,
        )


def find_config(start: Path) -> Path | None:
    current = start.resolve()
    for candidate in (current, *current.parents):
        path = candidate / CONFIG_FILENAME
        if path.is_file():
            return path
    return None


def parse_config(data: Any, *, root_dir: Path, path: Path | None = None) -> PaveConfig:
    where = str(path) if path else "configuration"
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"{where}: root must be a mapping")
    problems = schema_errors(CONFIG, data)
    if problems:
        raise ConfigurationError(f"{where}: invalid configuration: " + "; ".join(problems))

    docs_raw = data.get("docs", {})
    rules_raw = dict(data.get("rules", {}))
    verify_raw = data.get("verify", {})
    gradual = bool(rules_raw.pop("gradual", False))
    gradual_until = rules_raw.pop("gradual_until", None)

    config = PaveConfig(
        root_dir=root_dir.resolve(),
        path=path,
        docs=DocsConfig(root=docs_raw.get("root", "docs"), exclude=tuple(docs_raw.get("exclude", ()))),
        rules=RuleSet(**rules_raw),
        gradual=gradual,
        gradual_until=gradual_until,
        verify=VerifyConfig(**verify_raw),
    )
    config.runner_config()
    return config


def load_config(path: Path | None = None, *, start: Path | None = None) -> PaveConfig:
    resolved = path if path is not None else find_config(start or Path.cwd())
    if resolved is None:
        return parse_config({}, root_dir=(start or Path.cwd()))
    if not resolved.is_file():
        raise ConfigurationError(f"config file not found: {resolved}")
    try:
        data = yaml.safe_load(resolved.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"failed to parse {resolved}: {exc}") from exc
    return parse_config(data, root_dir=resolved.parent, path=resolved)


__all__ = ["CONFIG_FILENAME", "DocsConfig", "PaveConfig", "VerifyConfig", "find_config", "load_config", "parse_config"]
