"""Configuration errors: reported before any resolution begins."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from lade.errors.base import LadeError


class ConfigError(LadeError):
    """Raised when rule files or settings are invalid."""

    default_code = "config_error"


class RuleFileError(ConfigError):
    """A rule file could not be read or has an unexpected shape."""

    default_code = "rule_file_error"

    def __init__(self, path: Path, reason: str, **kwargs: Any) -> None:
        super().__init__(f"Invalid rule file {path}: {reason}", **kwargs)
        self.path = path
        self.reason = reason


class InvalidPatternError(ConfigError):
    """A command pattern is not a valid regular expression."""

    default_code = "invalid_pattern"

    def __init__(self, pattern: str, path: Path, reason: str, **kwargs: Any) -> None:
        super().__init__(f"Invalid command pattern {pattern!r} in {path}: {reason}", **kwargs)
        self.pattern = pattern
        self.path = path


class SettingsError(ConfigError):
    """A process setting is missing or cannot be coerced."""

    default_code = "settings_error"


__all__ = ["ConfigError", "InvalidPatternError", "RuleFileError", "SettingsError"]
