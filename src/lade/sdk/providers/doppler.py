"""SDK providers – Doppler.

``doppler://host[:port]/project/config/NAME``: one ``doppler secrets`` call
per (host, project, config).
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from lade.observability import get_logger
from lade.sdk.engine import join_all
from lade.sdk.providers.base import Hydration, UriProvider, group_by
from lade.sdk.providers.process import deserialize_output, run_cli
from lade.sdk.uri import SecretUri

logger = get_logger(__name__)


def _computed(data: Any) -> dict[str, str]:
    if not isinstance(data, dict):
        raise TypeError(f"expected an object, got {type(data).__name__}")
    return {key: record["computed"] for key, record in data.items()}


class Doppler(UriProvider):
    name = "Doppler"
    scheme = "doppler"
    install_url = "https://docs.doppler.com/docs/install-cli"

    def _validate(self, uri: SecretUri) -> None:
        uri.segment(0, "project")
        uri.segment(1, "config")
        uri.segment(2, "variable")

    async def resolve(self, cwd: Path, extra_env: Mapping[str, str]) -> Hydration:
        groups = group_by(
            self.uris,
            lambda u: (u.host_with_port, u.segment(0, "project"), u.segment(1, "config")),
        )
        return await join_all(
            self.name,
            (self._fetch(host, project, config, uris, extra_env) for (host, project, config), uris in groups.items()),
        )

    async def _fetch(
        self,
        host: str,
        project: str,
        config: str,
        uris: list[SecretUri],
        extra_env: Mapping[str, str],
    ) -> Hydration:
        cmd = [
            "doppler",
            "--api-host",
            f"https://{host}",
            "secrets",
            "--project",
            project,
            "--config",
            config,
            "--json",
        ]
        output = await run_cli(cmd, extra_env, self.name, self.install_url)
        loaded = deserialize_output(output, self.name, _computed)
        hydration = self._hydrate_group(
            ((uri, uri.segment(2, "variable")) for uri in uris),
            loaded,
            f"config {config} of project {project} on {host}",
        )
        logger.debug("provider.resolved", provider=self.name, host=host, count=len(hydration))
        return hydration


__all__ = ["Doppler"]
