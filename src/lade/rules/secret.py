"""Rules – Rule, RuleConfig, SecretSpec and the secret selector."""
from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import Any, Mapping, Union

DEFAULT_USER = "."
"""Key of the fallback entry in a per-user secret map."""

CONFIG_KEY = "."
"""Key of the output configuration inside a rule."""


@dataclasses.dataclass(frozen=True)
class PlainSecret:
    """A literal or URI, identical for every user."""

    value: str


@dataclasses.dataclass(frozen=True)
class PerUserSecret:
    """Username (or ``"."``) → reference; ``None`` means explicitly absent."""

    values: Mapping[str, str | None]


SecretSpec = Union[PlainSecret, PerUserSecret]


@dataclasses.dataclass(frozen=True)
class RuleConfig:
    """The optional ``"."`` entry of a rule."""

    file: Path | None = None
    onepassword_service_account: SecretSpec | None = None


@dataclasses.dataclass(frozen=True)
class Rule:
    """One command pattern's secret specs, loaded from one directory."""

    pattern: str
    origin: Path
    secrets: Mapping[str, SecretSpec]
    config: RuleConfig | None = None

    @property
    def output(self) -> Path | None:
        """Absolute file output target, ``None`` for inline environment."""
        if self.config is None or self.config.file is None:
            return None
        return self.origin / self.config.file


def select_secret(spec: SecretSpec, user: str | None) -> str | None:
    """Pick the reference that applies to *user*.

    ``PlainSecret`` always resolves. ``PerUserSecret`` looks up *user*, then
    falls back to ``"."``; a missing entry or an explicit ``None`` yields
    ``None`` and the variable is simply left out.
    """
    if isinstance(spec, PlainSecret):
        return spec.value
    if user is not None and user in spec.values:
        return spec.values[user]
    return spec.values.get(DEFAULT_USER)


def select_secrets(rule: Rule, user: str | None) -> dict[str, str]:
    """Flatten *rule* into ``{NAME: reference}`` for *user*."""
    selected: dict[str, str] = {}
    for name, spec in rule.secrets.items():
        reference = select_secret(spec, user)
        if reference is not None:
            selected[name] = reference
    return selected


def parse_secret_spec(raw: Any) -> SecretSpec:
    """Decode a YAML value into a :data:`SecretSpec`.

    Raises :class:`TypeError` on shapes that are neither a scalar nor a map
    of scalars.
    """
    if isinstance(raw, str):
        return PlainSecret(raw)
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return PlainSecret(str(raw))
    if isinstance(raw, dict):
        values: dict[str, str | None] = {}
        for user, value in raw.items():
            if value is not None and not isinstance(value, str):
                raise TypeError(f"value for user {user!r} must be a string or null")
            values[str(user)] = value
        return PerUserSecret(values)
    raise TypeError(f"expected a string or a per-user map, got {type(raw).__name__}")


def parse_rule_config(raw: Any) -> RuleConfig:
    if not isinstance(raw, dict):
        raise TypeError(
            f"the '{CONFIG_KEY}' entry must be a map like {{ file: <path> }}, got {type(raw).__name__}"
        )
    unknown = set(raw) - {"file", "1password_service_account"}
    if unknown:
        raise TypeError(f"unknown '{CONFIG_KEY}' options: {', '.join(sorted(map(str, unknown)))}")
    file = raw.get("file")
    if file is not None and not isinstance(file, str):
        raise TypeError("'file' must be a path string")
    account = raw.get("1password_service_account")
    return RuleConfig(
        file=Path(file) if file is not None else None,
        onepassword_service_account=parse_secret_spec(account) if account is not None else None,
    )


def parse_rule(pattern: str, origin: Path, raw: Any) -> Rule:
    if not isinstance(raw, dict):
        raise TypeError(f"rule {pattern!r} must be a map of variables, got {type(raw).__name__}")
    config = None
    secrets: dict[str, SecretSpec] = {}
    for key, value in raw.items():
        if key == CONFIG_KEY:
            config = parse_rule_config(value)
        else:
            secrets[str(key)] = parse_secret_spec(value)
    return Rule(pattern=pattern, origin=origin, secrets=secrets, config=config)


__all__ = [
    "CONFIG_KEY",
    "DEFAULT_USER",
    "PerUserSecret",
    "PlainSecret",
    "Rule",
    "RuleConfig",
    "SecretSpec",
    "parse_rule",
    "parse_rule_config",
    "parse_secret_spec",
    "select_secret",
    "select_secrets",
]
