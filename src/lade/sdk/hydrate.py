"""SDK – hydration entry points."""
from __future__ import annotations

from pathlib import Path
from typing import Mapping, Sequence

from lade.errors import LadeError
from lade.observability import get_logger
from lade.sdk.providers import Provider
from lade.sdk.router import ProviderRouter

logger = get_logger(__name__)


async def hydrate(
    env: Mapping[str, str],
    cwd: Path,
    extra_env: Mapping[str, str] | None = None,
    *,
    providers: Sequence[Provider] | None = None,
) -> dict[str, str]:
    """Resolve ``{NAME: reference}`` into ``{NAME: plaintext}``.

    Parameters
    ----------
    env:
        Variable name to secret reference (URI or literal).
    cwd:
        Working directory for relative file references, usually the rule's
        origin directory.
    extra_env:
        Ambient environment merged over the process environment of every
        external call.
    providers:
        Override of the provider set, in routing order.

    Raises
    ------
    LadeError
        On the first routing, backend or missing-secret failure. No partial
        hydration is ever returned.
    """
    router = ProviderRouter(providers)
    for reference in env.values():
        router.add(reference)

    hydration = await router.resolve(cwd, extra_env or {})
    missing = [reference for reference in env.values() if reference not in hydration]
    if missing:
        raise LadeError(f"Unresolved references: {', '.join(sorted(set(missing)))}")

    logger.info("hydrate.completed", variables=sorted(env), cwd=str(cwd))
    return {key: hydration[reference] for key, reference in env.items()}


async def hydrate_one(
    reference: str,
    cwd: Path,
    extra_env: Mapping[str, str] | None = None,
    *,
    providers: Sequence[Provider] | None = None,
) -> str:
    """Resolve a single reference."""
    hydration = await hydrate({"_": reference}, cwd, extra_env, providers=providers)
    return hydration["_"]


__all__ = ["hydrate", "hydrate_one"]
