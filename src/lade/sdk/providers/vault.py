"""SDK providers – HashiCorp Vault (KV).

``vault://host[:port]/mount/keypath/FIELD``: one ``vault kv get`` call per
(host, mount, key path). Key path and field are URL-decoded.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from lade.observability import get_logger
from lade.sdk.engine import join_all
from lade.sdk.providers.base import Hydration, UriProvider, group_by
from lade.sdk.providers.process import deserialize_output, run_cli, str_mapping
from lade.sdk.uri import SecretUri

logger = get_logger(__name__)


def _kv_data(data: Any) -> dict[str, str]:
    return str_mapping(data["data"]["data"])


class Vault(UriProvider):
    name = "Vault"
    scheme = "vault"
    install_url = "https://developer.hashicorp.com/vault/docs/commands"

    def _validate(self, uri: SecretUri) -> None:
        uri.segment(0, "mount")
        uri.segment(1, "key")
        uri.segment(2, "field")

    async def resolve(self, cwd: Path, extra_env: Mapping[str, str]) -> Hydration:
        groups = group_by(
            self.uris,
            lambda u: (u.host_with_port, u.segment(0, "mount"), u.decoded_segment(1, "key")),
        )
        return await join_all(
            self.name,
            (self._fetch(host, mount, key, uris, extra_env) for (host, mount, key), uris in groups.items()),
        )

    async def _fetch(
        self,
        host: str,
        mount: str,
        key: str,
        uris: list[SecretUri],
        extra_env: Mapping[str, str],
    ) -> Hydration:
        cmd = [
            "vault",
            "kv",
            "get",
            f"-address=https://{host}",
            f"-mount={mount}",
            "-format=json",
            key,
        ]
        output = await run_cli(cmd, extra_env, self.name, self.install_url)
        loaded = deserialize_output(output, self.name, _kv_data)
        hydration = self._hydrate_group(
            ((uri, uri.decoded_segment(2, "field")) for uri in uris),
            loaded,
            f"key {key} of mount {mount} on {host}",
        )
        logger.debug("provider.resolved", provider=self.name, host=host, count=len(hydration))
        return hydration


__all__ = ["Vault"]
