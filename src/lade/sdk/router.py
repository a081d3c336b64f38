"""SDK – ProviderRouter: first acceptor wins."""
from __future__ import annotations

from pathlib import Path
from typing import Mapping, Sequence

from lade.errors import NoProviderError
from lade.observability import get_logger
from lade.sdk.engine import join_all
from lade.sdk.providers import Provider, default_providers
from lade.sdk.types import Hydration

logger = get_logger(__name__)


class ProviderRouter:
    """Owns one ordered set of providers for a single resolution."""

    def __init__(self, providers: Sequence[Provider] | None = None) -> None:
        self._providers = list(providers) if providers is not None else default_providers()

    @property
    def providers(self) -> list[Provider]:
        return list(self._providers)

    def route(self, reference: str) -> Provider:
        """Return the provider that would claim *reference* without claiming it."""
        for provider in self._providers:
            if provider.accept(reference):
                return provider
        raise NoProviderError(reference)

    def add(self, reference: str) -> bool:
        for provider in self._providers:
            if provider.add(reference):
                logger.debug("router.claimed", provider=provider.name)
                return True
        raise NoProviderError(reference)

    async def resolve(self, cwd: Path, extra_env: Mapping[str, str]) -> Hydration:
        return await join_all(
            "router",
            (provider.resolve(cwd, extra_env) for provider in self._providers),
        )


__all__ = ["ProviderRouter"]
