"""Settings – EnvSettingsLoader."""
from __future__ import annotations

import abc
import dataclasses
import os
from typing import Any, Mapping, TypeVar

from lade.errors import SettingsError
from lade.settings.base import Settings

T = TypeVar("T", bound=Settings)


class SettingsLoader(abc.ABC):
    """Port: load settings from an external source."""

    @abc.abstractmethod
    def load(self, settings_class: type[T]) -> T: ...


class EnvSettingsLoader(SettingsLoader):
    """Load settings from environment variables.

    The environment is injectable so that callers (and tests) never have to
    mutate ``os.environ``.
    """

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = os.environ if environ is None else environ

    def load(self, settings_class: type[T]) -> T:
        prefix = getattr(settings_class, "_prefix", "").upper()
        kwargs: dict[str, Any] = {}

        for field in dataclasses.fields(settings_class):  # type: ignore[arg-type]
            env_key = f"{prefix}_{field.name}".upper().lstrip("_")
            raw = self._environ.get(env_key)
            if raw is None:
                if (
                    field.default is dataclasses.MISSING
                    and field.default_factory is dataclasses.MISSING  # type: ignore[misc]
                ):
                    raise SettingsError(f"Required setting '{env_key}' is missing")
                continue
            try:
                kwargs[field.name] = self._coerce(raw, field.type)
            except ValueError as exc:
                raise SettingsError(f"Setting '{env_key}' has invalid value {raw!r}", cause=exc) from exc

        return settings_class(**kwargs)

    def _coerce(self, value: str, type_hint: Any) -> Any:
        if type_hint is bool or type_hint == "bool":
            return value.lower() in ("1", "true", "yes", "on")
        if type_hint is int or type_hint == "int":
            return int(value)
        if type_hint is float or type_hint == "float":
            return float(value)
        return value


__all__ = ["EnvSettingsLoader", "SettingsLoader"]
