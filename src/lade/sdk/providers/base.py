"""SDK providers – Provider port and the shared grouping helpers.

Every backend follows the same shape: :meth:`Provider.add` claims references
by scheme, :meth:`Provider.resolve` groups the claimed references by a
provider-specific locality key and resolves each group with one external call.
"""
from __future__ import annotations

import abc
from pathlib import Path
from typing import Callable, Hashable, Iterable, Mapping, TypeVar

from lade.errors import SecretNotFoundError
from lade.sdk.types import Hydration
from lade.sdk.uri import SecretUri, scheme_of

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)


def group_by(items: Iterable[T], key: Callable[[T], K]) -> dict[K, list[T]]:
    """Group *items* by *key*, keeping first-seen order of keys and items."""
    groups: dict[K, list[T]] = {}
    for item in items:
        groups.setdefault(key(item), []).append(item)
    return groups


class Provider(abc.ABC):
    """Port: claim references and resolve them to plaintext."""

    name: str = "provider"

    @abc.abstractmethod
    def accept(self, reference: str) -> bool:
        """Return ``True`` when this provider is responsible for *reference*."""

    @abc.abstractmethod
    def _store(self, reference: str) -> None: ...

    def add(self, reference: str) -> bool:
        """Claim *reference* if accepted; return whether it was claimed."""
        if not self.accept(reference):
            return False
        self._store(reference)
        return True

    @abc.abstractmethod
    async def resolve(self, cwd: Path, extra_env: Mapping[str, str]) -> Hydration:
        """Resolve every claimed reference, or raise on the first failure."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class UriProvider(Provider):
    """Provider claiming ``<scheme>://`` references.

    Claimed references are keyed by their parsed :class:`SecretUri`;
    spellings that parse to the same locator share one lookup while each
    original string still receives the value.
    """

    scheme: str = ""
    install_url: str = ""

    def __init__(self) -> None:
        self._uris: dict[SecretUri, list[str]] = {}

    def accept(self, reference: str) -> bool:
        return scheme_of(reference) == self.scheme

    def _store(self, reference: str) -> None:
        uri = SecretUri.parse(reference)
        self._validate(uri)
        originals = self._uris.setdefault(uri, [])
        if reference not in originals:
            originals.append(reference)

    def _validate(self, uri: SecretUri) -> None:
        """Check mandatory URI parts at claim time. Override per provider."""

    @property
    def uris(self) -> list[SecretUri]:
        return list(self._uris)

    def __len__(self) -> int:
        return len(self._uris)

    def _hydrate_group(
        self,
        group: Iterable[tuple[SecretUri, str]],
        loaded: Mapping[str, str],
        location: str,
    ) -> Hydration:
        """Map each ``(uri, field)`` of *group* to ``loaded[field]``.

        The mapping is total: any absent field fails the whole group.
        """
        hydration: Hydration = {}
        missing: list[str] = []
        for uri, field in group:
            if field not in loaded:
                missing.append(field)
                continue
            for original in self._uris[uri]:
                hydration[original] = loaded[field]
        if missing:
            raise SecretNotFoundError(self.name, missing, location)
        return hydration


__all__ = ["Hydration", "Provider", "UriProvider", "group_by"]
