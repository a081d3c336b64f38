"""Settings – LadeSettings, the process-level configuration."""
from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import ClassVar

from lade.errors import SettingsError


def _default_config_dir() -> str:
    return str(Path("~/.config/lade").expanduser())


@dataclasses.dataclass
class Settings:
    """Base class for 12-factor settings."""

    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""


@dataclasses.dataclass
class LadeSettings(Settings):
    """Settings read from ``LADE_*`` environment variables."""

    _prefix: ClassVar[str] = "LADE"

    config_dir: str = dataclasses.field(default_factory=_default_config_dir)
    shell: str | None = None
    log_json: bool = False
    error_wait: float = 5.0

    def _validate(self) -> None:
        if self.error_wait < 0:
            raise SettingsError(f"LADE_ERROR_WAIT must be positive, got {self.error_wait}")

    @property
    def global_config_path(self) -> Path:
        return Path(self.config_dir).expanduser() / "config.json"


__all__ = ["LadeSettings", "Settings"]
