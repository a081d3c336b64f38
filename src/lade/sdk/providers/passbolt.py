"""SDK providers – Passbolt.

``passbolt://host/resourceId/FIELD``: one ``passbolt get resource`` call per
(host, resource id).
"""
from __future__ import annotations

from pathlib import Path
from typing import Mapping

from lade.observability import get_logger
from lade.sdk.engine import join_all
from lade.sdk.providers.base import Hydration, UriProvider, group_by
from lade.sdk.providers.process import deserialize_output, run_cli, str_mapping
from lade.sdk.uri import SecretUri

logger = get_logger(__name__)


class Passbolt(UriProvider):
    name = "Passbolt"
    scheme = "passbolt"
    install_url = "https://github.com/passbolt/go-passbolt-cli"

    def _validate(self, uri: SecretUri) -> None:
        uri.segment(0, "resource id")
        uri.segment(1, "field")

    async def resolve(self, cwd: Path, extra_env: Mapping[str, str]) -> Hydration:
        groups = group_by(self.uris, lambda u: (u.host, u.segment(0, "resource id")))
        return await join_all(
            self.name,
            (self._fetch(host, resource, uris, extra_env) for (host, resource), uris in groups.items()),
        )

    async def _fetch(
        self,
        host: str,
        resource: str,
        uris: list[SecretUri],
        extra_env: Mapping[str, str],
    ) -> Hydration:
        cmd = [
            "passbolt",
            "get",
            "resource",
            f"--serverAddress=https://{host}",
            f"--id={resource}",
            "--json",
        ]
        output = await run_cli(cmd, extra_env, self.name, self.install_url)
        loaded = deserialize_output(output, self.name, str_mapping)
        hydration = self._hydrate_group(
            ((uri, uri.segment(1, "field")) for uri in uris),
            loaded,
            f"resource {resource} on {host}",
        )
        logger.debug("provider.resolved", provider=self.name, host=host, count=len(hydration))
        return hydration


__all__ = ["Passbolt"]
