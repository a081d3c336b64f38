"""Rules – acting identity for per-user secret selection."""
from __future__ import annotations

import getpass
from typing import Mapping


def os_user() -> str | None:
    """Login name from the password database, ``None`` when unavailable."""
    try:
        return getpass.getuser() or None
    except (OSError, KeyError):
        return None


def resolve_identity(saved_user: str | None, environ: Mapping[str, str]) -> str | None:
    """Saved user first, then the OS-reported username, else ``None``."""
    if saved_user:
        return saved_user
    return environ.get("USER") or environ.get("USERNAME") or os_user()


__all__ = ["os_user", "resolve_identity"]
