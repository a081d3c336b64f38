"""SDK – ``$VAR`` / ``${VAR}`` substitution over already-resolved values.

Single pass: substituted text is never rescanned. Unknown names become the
empty string.
"""
from __future__ import annotations

import re
from typing import Mapping

VAR = re.compile(r"\$\{(?P<braced>\w+)\}|\$(?P<bare>\w+)")


def resolve_one(value: str, existing_vars: Mapping[str, str]) -> str:
    def _substitute(match: re.Match[str]) -> str:
        name = match.group("braced") or match.group("bare")
        return existing_vars.get(name, "")

    return VAR.sub(_substitute, value)


def resolve(kvs: Mapping[str, str], existing_vars: Mapping[str, str]) -> dict[str, str]:
    return {key: resolve_one(value, existing_vars) for key, value in kvs.items()}


__all__ = ["resolve", "resolve_one"]
