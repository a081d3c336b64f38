"""SDK providers – Raw, the literal fallback."""
from __future__ import annotations

from pathlib import Path
from typing import Mapping

from lade.sdk.providers.base import Hydration, Provider

ESCAPE = "!"


class Raw(Provider):
    """Claims everything; the value is the reference itself.

    A single leading ``!`` is stripped so that a literal which looks like
    another provider's URI can be forced through as-is.
    """

    name = "Raw"

    def __init__(self) -> None:
        self._values: Hydration = {}

    def accept(self, reference: str) -> bool:
        return True

    def _store(self, reference: str) -> None:
        self._values[reference] = reference[1:] if reference.startswith(ESCAPE) else reference

    async def resolve(self, cwd: Path, extra_env: Mapping[str, str]) -> Hydration:
        return dict(self._values)


__all__ = ["ESCAPE", "Raw"]
