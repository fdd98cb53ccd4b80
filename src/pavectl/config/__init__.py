from __future__ import annotations

from .loader import CONFIG_FILENAME, DocsConfig, PaveConfig, VerifyConfig, find_config, load_config, parse_config

__all__ = ["CONFIG_FILENAME", "DocsConfig", "PaveConfig", "VerifyConfig", "find_config", "load_config", "parse_config"]
