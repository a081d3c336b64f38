"""Settings – GlobalConfig, the small record persisted between invocations."""
from __future__ import annotations

import dataclasses
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from lade.errors import ConfigError
from lade.observability import get_logger

logger = get_logger(__name__)


@dataclasses.dataclass
class GlobalConfig:
    """Saved user and last update check, stored as JSON."""

    update_check: datetime = dataclasses.field(default_factory=lambda: datetime.now(timezone.utc))
    user: str | None = None

    @classmethod
    def load(cls, path: Path) -> "GlobalConfig":
        """Read *path*, creating it with defaults when absent."""
        if not path.exists():
            config = cls()
            config.save(path)
            return config
        try:
            raw: dict[str, Any] = json.loads(path.read_text())
            return cls(
                update_check=datetime.fromisoformat(raw["update_check"]),
                user=raw.get("user"),
            )
        except (ValueError, KeyError, TypeError) as exc:
            raise ConfigError(f"Invalid global config {path}: {exc}", cause=exc) from exc

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        payload = {"update_check": self.update_check.isoformat(), "user": self.user}
        path.write_text(json.dumps(payload, indent=2))
        logger.debug("global_config.saved", path=str(path))


__all__ = ["GlobalConfig"]
