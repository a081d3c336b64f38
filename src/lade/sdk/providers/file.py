"""SDK providers – local structured files.

``file://<path>?query=<query>``: *path* may start with ``~/`` or ``$HOME/``;
relative paths are joined to the working directory. Each distinct path is
read and decoded once, then every query of the group is evaluated against
the decoded document.
"""
from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Mapping

from lade.errors import BackendError, SecretNotFoundError
from lade.observability import get_logger
from lade.sdk.engine import join_all
from lade.sdk.providers.base import Hydration, UriProvider, group_by
from lade.sdk.providers.formats import LOADERS
from lade.sdk.providers.query import MISSING, execute_query, parse_query, render
from lade.sdk.uri import SecretUri

logger = get_logger(__name__)

PREFIX = "file://"
HOME_PREFIXES = ("~/", "$HOME/")


class File(UriProvider):
    name = "File"
    scheme = "file"

    def __init__(self, home: Path | None = None) -> None:
        super().__init__()
        self._home = home

    @property
    def home(self) -> Path:
        return self._home or Path.home()

    def accept(self, reference: str) -> bool:
        if not super().accept(reference):
            return False
        return SecretUri.parse(reference).query_param("query") is not None

    def _validate(self, uri: SecretUri) -> None:
        parse_query(uri.query_param("query") or ".")

    def path_of(self, uri: SecretUri, cwd: Path) -> Path:
        """Local path of *uri*, from its original spelling rather than its authority."""
        raw = uri.reference[len(PREFIX):].split("?", 1)[0]
        for prefix in HOME_PREFIXES:
            if raw.startswith(prefix):
                return self.home / raw[len(prefix):]
        path = Path(raw)
        return path if path.is_absolute() else cwd / path

    async def resolve(self, cwd: Path, extra_env: Mapping[str, str]) -> Hydration:
        groups = group_by(self.uris, lambda u: self.path_of(u, cwd))
        return await join_all(self.name, (self._fetch(path, uris) for path, uris in groups.items()))

    async def _fetch(self, path: Path, uris: list[SecretUri]) -> Hydration:
        document = await self._load(path)
        hydration: Hydration = {}
        missing: list[str] = []
        for uri in uris:
            query = uri.query_param("query") or "."
            result = execute_query(query, document)
            if result is MISSING:
                missing.append(query)
                continue
            for original in self._uris[uri]:
                hydration[original] = render(result)
        if missing:
            raise SecretNotFoundError(self.name, missing, f"file {path}")
        logger.debug("provider.resolved", provider=self.name, path=str(path), count=len(hydration))
        return hydration

    async def _load(self, path: Path) -> Any:
        fmt = path.suffix.lstrip(".").lower()
        loader = LOADERS.get(fmt)
        if loader is None:
            raise BackendError(self.name, f"Unsupported file format {fmt!r} for {path}")
        loop = asyncio.get_running_loop()
        try:
            text = await loop.run_in_executor(None, path.read_text)
        except OSError as exc:
            raise BackendError(self.name, f"Cannot read file {path}: {exc}", cause=exc) from exc
        try:
            return loader(text)
        except Exception as exc:  # noqa: BLE001 – every decoder has its own error type
            raise BackendError(self.name, f"Cannot parse {fmt} file {path}: {exc}", cause=exc) from exc


__all__ = ["File"]
