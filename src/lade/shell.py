"""Shell – formatting of set/unset statements for the supported shells."""
from __future__ import annotations

import os
from enum import Enum
from pathlib import PurePath
from typing import Iterable, Mapping

from lade.errors import ConfigError


class Shell(str, Enum):
    BASH = "bash"
    ZSH = "zsh"
    FISH = "fish"
    SH = "sh"

    @classmethod
    def from_name(cls, name: str) -> "Shell":
        """Accept a plain name (``bash``) or a path (``/bin/bash``)."""
        binary = PurePath(name.strip()).name.lower()
        binary = binary.removesuffix(".exe")
        try:
            return cls(binary)
        except ValueError as exc:
            raise ConfigError(f"Unsupported shell: {binary}", cause=exc) from exc

    @classmethod
    def detect(cls, override: str | None = None, environ: Mapping[str, str] | None = None) -> "Shell":
        environ = os.environ if environ is None else environ
        name = override or environ.get("SHELL")
        if not name:
            raise ConfigError("Cannot detect shell: set LADE_SHELL or SHELL")
        return cls.from_name(name)

    def quote(self, value: str) -> str:
        """Single-quote *value* with the escaping rules of this shell."""
        if self is Shell.FISH:
            return "'" + value.replace("\\", "\\\\").replace("'", "\\'") + "'"
        return "'" + value.replace("'", "'\\''") + "'"

    def set(self, env: Mapping[str, str]) -> str:
        if self is Shell.FISH:
            return ";".join(f"set --global --export {k} {self.quote(v)}" for k, v in env.items())
        return ";".join(f"export {k}={self.quote(v)}" for k, v in env.items())

    def unset(self, keys: Iterable[str]) -> str:
        if self is Shell.FISH:
            return ";".join(f"set --global --erase {k}" for k in keys)
        return ";".join(f"unset -v {k}" for k in keys)


__all__ = ["Shell"]
