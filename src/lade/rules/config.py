"""Rules – Config: the ordered rule cascade and per-rule hydration."""
from __future__ import annotations

import asyncio
import dataclasses
import os
import re
from pathlib import Path
from typing import Callable, Mapping, Sequence

from lade.observability import get_logger
from lade.rules.secret import Rule, select_secret, select_secrets
from lade.sdk import hydrate, hydrate_one, resolve
from lade.sdk.providers import Provider

logger = get_logger(__name__)

Output = Path | None
"""``None`` for inline environment, otherwise the file to write."""

SERVICE_ACCOUNT_VAR = "OP_SERVICE_ACCOUNT_TOKEN"


@dataclasses.dataclass(frozen=True)
class HydrationContext:
    """Ambient inputs of a hydration, passed explicitly.

    Attributes
    ----------
    user:
        Acting identity for per-user secrets.
    environ:
        Ambient process environment, used for interpolation of bootstrap
        values.
    extra_env:
        Environment overrides applied to every external call.
    providers:
        Factory returning a fresh provider set; ``None`` for the default set.
    """

    user: str | None = None
    environ: Mapping[str, str] = dataclasses.field(default_factory=lambda: dict(os.environ))
    extra_env: Mapping[str, str] = dataclasses.field(default_factory=dict)
    providers: Callable[[], Sequence[Provider]] | None = None

    def provider_set(self) -> Sequence[Provider] | None:
        return self.providers() if self.providers is not None else None


class Config:
    """Rules ordered root directory first, closest directory last."""

    def __init__(self, matches: Sequence[tuple[re.Pattern[str], Rule]]) -> None:
        self._matches = list(matches)

    def __len__(self) -> int:
        return len(self._matches)

    def collect(self, command: str) -> list[tuple[Path, Rule]]:
        """Every rule whose pattern is found anywhere in *command*, root first."""
        return [(rule.origin, rule) for regex, rule in self._matches if regex.search(command)]

    def collect_keys(self, command: str) -> dict[Output, list[str]]:
        """Output target → variable names, without contacting any backend."""
        keys: dict[Output, list[str]] = {}
        for _, rule in self.collect(command):
            names = keys.setdefault(rule.output, [])
            names.extend(name for name in rule.secrets if name not in names)
        return keys

    async def bootstrap_env(self, rule: Rule, context: HydrationContext) -> dict[str, str]:
        """Resolve the rule's service-account token into extra environment."""
        spec = rule.config.onepassword_service_account if rule.config else None
        reference = select_secret(spec, context.user) if spec is not None else None
        if reference is None:
            return {}
        token = await hydrate_one(reference, rule.origin, context.extra_env, providers=context.provider_set())
        logger.debug("config.bootstrapped", origin=str(rule.origin), variable=SERVICE_ACCOUNT_VAR)
        return resolve({SERVICE_ACCOUNT_VAR: token}, context.environ)

    async def hydrate_rule(self, rule: Rule, context: HydrationContext) -> tuple[Output, dict[str, str]]:
        secrets = select_secrets(rule, context.user)
        extra_env = {**context.extra_env, **await self.bootstrap_env(rule, context)}
        hydration = await hydrate(secrets, rule.origin, extra_env, providers=context.provider_set())
        return rule.output, hydration

    async def collect_hydrate(self, command: str, context: HydrationContext) -> dict[Output, dict[str, str]]:
        """Hydrate every matching rule concurrently and merge by output.

        Results are merged in root-first order so the closest rule wins on
        a variable collision.
        """
        rules = [rule for _, rule in self.collect(command)]
        results = await asyncio.gather(*(self.hydrate_rule(rule, context) for rule in rules))
        merged: dict[Output, dict[str, str]] = {}
        for output, hydration in results:
            merged.setdefault(output, {}).update(hydration)
        logger.info("config.hydrated", command=command, rules=len(rules))
        return merged


__all__ = ["Config", "HydrationContext", "Output", "SERVICE_ACCOUNT_VAR"]
