"""SDK – SecretUri, the parsed form of a scheme-qualified reference.

A reference is either a literal or ``scheme://host[:port]/seg/seg...?query``.
The original string is kept by providers as the stable key; a
:class:`SecretUri` is only the canonical lookup form used for grouping.
"""
from __future__ import annotations

import dataclasses
import re
from urllib.parse import parse_qs, unquote, urlsplit

from lade.errors import InvalidReferenceError

_SCHEME = re.compile(r"^(?P<scheme>[A-Za-z][A-Za-z0-9+.\-]*)://")

DEFAULT_PORTS: dict[str, int] = {"http": 80, "https": 443}


def scheme_of(reference: str) -> str | None:
    """Return the lower-cased scheme of *reference*, or ``None`` for literals."""
    match = _SCHEME.match(reference)
    return match.group("scheme").lower() if match else None


@dataclasses.dataclass(frozen=True, eq=False)
class SecretUri:
    """Scheme, authority, path segments and query of a reference."""

    reference: str
    scheme: str
    host: str
    port: int | None
    segments: tuple[str, ...]
    query: tuple[tuple[str, str], ...] = ()

    @classmethod
    def parse(cls, reference: str) -> "SecretUri":
        scheme = scheme_of(reference)
        if scheme is None:
            raise InvalidReferenceError(reference, "scheme")
        parts = urlsplit(reference)
        if scheme == "file":
            # local paths keep their spelling: the authority is the first path part
            host, port = parts.netloc, None
        else:
            host = parts.hostname or ""
            try:
                port = parts.port
            except ValueError as exc:
                raise InvalidReferenceError(reference, "valid port", cause=exc) from exc
        segments = tuple(parts.path.split("/")[1:]) if parts.path else ()
        query = tuple(
            (key, value)
            for key, values in parse_qs(parts.query, keep_blank_values=True).items()
            for value in values
        )
        return cls(
            reference=reference,
            scheme=scheme,
            host=host,
            port=port,
            segments=segments,
            query=query,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SecretUri):
            return NotImplemented
        return self.canonical == other.canonical

    def __hash__(self) -> int:
        return hash(self.canonical)

    @property
    def canonical(self) -> tuple[object, ...]:
        """Identity of the locator, independent of the original spelling."""
        return (self.scheme, self.host_with_port, self.segments, self.query)

    @property
    def host_with_port(self) -> str:
        """``host[:port]``; default ports are dropped."""
        if self.port is None or DEFAULT_PORTS.get("https") == self.port:
            return self.host
        return f"{self.host}:{self.port}"

    def segment(self, index: int, name: str) -> str:
        """Return path segment *index* or fail naming the missing part."""
        if index >= len(self.segments) or not self.segments[index]:
            raise InvalidReferenceError(self.reference, name)
        return self.segments[index]

    def decoded_segment(self, index: int, name: str) -> str:
        return unquote(self.segment(index, name))

    def query_param(self, key: str) -> str | None:
        for k, v in self.query:
            if k == key:
                return v
        return None


__all__ = ["DEFAULT_PORTS", "SecretUri", "scheme_of"]
