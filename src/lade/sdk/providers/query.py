"""SDK providers – structured query over decoded documents.

Grammar (a subset of jq paths)::

    query   := step+ | "."
    step    := "." name | "." "[" index "]" | "[" index "]" | "." '"' text '"' | '["' text '"]'

Examples: ``.key``, ``.db.password``, ``.hosts[0].name``, ``."dotted.key"``.
"""
from __future__ import annotations

import json
import re
from typing import Any

from lade.errors import ConfigError

_TOKEN = re.compile(
    r"""
    \.?\[(?P<index>-?\d+)\]        # [0] or .[0]
  | \.?\["(?P<bracketed>[^"]*)"\]  # ["key"] or .["key"]
  | \."(?P<quoted>[^"]*)"          # ."key"
  | \.(?P<name>[^.\[\]"]+)         # .key
    """,
    re.VERBOSE,
)

MISSING = object()
"""Result of a query that matches nothing, distinct from a JSON null."""


class QueryError(ConfigError):
    """The query string cannot be parsed."""

    default_code = "invalid_query"


def parse_query(query: str) -> list[str | int]:
    """Split *query* into object keys (``str``) and list indices (``int``)."""
    if query in (".", ""):
        return []
    steps: list[str | int] = []
    position = 0
    while position < len(query):
        match = _TOKEN.match(query, position)
        if match is None:
            raise QueryError(f"Cannot parse query {query!r} at position {position}")
        if match.group("index") is not None:
            steps.append(int(match.group("index")))
        else:
            steps.append(next(g for g in (match.group("bracketed"), match.group("quoted"), match.group("name")) if g is not None))
        position = match.end()
    return steps


def execute_query(query: str, document: Any) -> Any:
    """Evaluate *query* against *document*; :data:`MISSING` when nothing matches."""
    current = document
    for step in parse_query(query):
        if isinstance(step, int) and isinstance(current, list):
            current = current[step] if -len(current) <= step < len(current) else MISSING
        elif isinstance(step, str) and isinstance(current, dict):
            current = current.get(step, MISSING)
        else:
            current = MISSING
        if current is MISSING:
            return MISSING
    return current


def render(value: Any) -> str:
    """Strings pass through; anything else is serialised as compact JSON."""
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"))


__all__ = ["MISSING", "QueryError", "execute_query", "parse_query", "render"]
