"""SDK – concurrent resolution engine.

All providers run concurrently and, inside a provider, all groups run
concurrently. The first failure becomes the result; siblings already in
flight are not cancelled by the engine, they finish on their own and their
results are discarded. Resources owned by a sibling (temporary directories,
child processes) are released by that sibling's own context managers.
"""
from __future__ import annotations

import asyncio
from enum import Enum
from typing import Awaitable, Iterable

from lade.observability import get_logger
from lade.sdk.types import Hydration

logger = get_logger(__name__)


class ResolutionState(str, Enum):
    IDLE = "IDLE"
    DISPATCHED = "DISPATCHED"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


class Resolution:
    """One fan-out/fan-in over independent hydration tasks.

    Usage::

        run = Resolution("vault")
        hydration = await run.join(fetch(group) for group in groups)
    """

    def __init__(self, label: str) -> None:
        self.label = label
        self.state = ResolutionState.IDLE
        self.error: BaseException | None = None

    async def join(self, tasks: Iterable[Awaitable[Hydration]]) -> Hydration:
        if self.state is not ResolutionState.IDLE:
            raise RuntimeError(f"Resolution {self.label!r} already {self.state.value}")
        awaitables = list(tasks)
        self.state = ResolutionState.DISPATCHED
        logger.debug("resolution.dispatched", label=self.label, tasks=len(awaitables))
        try:
            results = await asyncio.gather(*awaitables)
        except Exception as exc:
            self.state = ResolutionState.FAILED
            self.error = exc
            logger.debug("resolution.failed", label=self.label, error=repr(exc))
            raise
        self.state = ResolutionState.COMPLETED
        merged: Hydration = {}
        for result in results:
            merged.update(result)
        return merged


async def join_all(label: str, tasks: Iterable[Awaitable[Hydration]]) -> Hydration:
    """Run *tasks* concurrently and union their hydrations, failing fast."""
    return await Resolution(label).join(tasks)


__all__ = ["Resolution", "ResolutionState", "join_all"]
