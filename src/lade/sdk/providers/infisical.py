"""SDK providers – Infisical.

``infisical://host[:port]/project/env/[sub/path/]NAME``: one ``infisical
export`` call per (host, project, env, secret path). The CLI reads its
workspace from ``.infisical.json`` in the working directory, so each call
runs inside its own throwaway directory.
"""
from __future__ import annotations

import json
import tempfile
from pathlib import Path
from typing import Any, Mapping

from lade.errors import BackendError
from lade.observability import get_logger
from lade.sdk.engine import join_all
from lade.sdk.providers.base import Hydration, UriProvider, group_by
from lade.sdk.providers.process import CliOutput, run_cli
from lade.sdk.uri import SecretUri

logger = get_logger(__name__)

WORKSPACE_FILE = ".infisical.json"


def secret_path(uri: SecretUri) -> str:
    """Folder between the environment and the variable name, ``/`` at root."""
    folders = uri.segments[2:-1]
    return "/" + "/".join(folders) if folders else "/"


def _records(data: Any) -> dict[str, str]:
    if not isinstance(data, list):
        raise TypeError(f"expected a list, got {type(data).__name__}")
    return {record["key"]: record["value"] for record in data}


class Infisical(UriProvider):
    name = "Infisical"
    scheme = "infisical"
    install_url = "https://infisical.com/docs/cli/overview"

    def _validate(self, uri: SecretUri) -> None:
        uri.segment(0, "project")
        uri.segment(1, "environment")
        uri.segment(max(2, len(uri.segments) - 1), "variable")

    async def resolve(self, cwd: Path, extra_env: Mapping[str, str]) -> Hydration:
        groups = group_by(
            self.uris,
            lambda u: (u.host_with_port, u.segment(0, "project"), u.segment(1, "environment"), secret_path(u)),
        )
        return await join_all(
            self.name,
            (self._fetch(*key, uris, extra_env) for key, uris in groups.items()),
        )

    async def _fetch(
        self,
        host: str,
        project: str,
        env: str,
        path: str,
        uris: list[SecretUri],
        extra_env: Mapping[str, str],
    ) -> Hydration:
        cmd = [
            "infisical",
            "--domain",
            f"https://{host}/api",
            "export",
            "--path",
            path,
            "--env",
            env,
            "--projectId",
            project,
            "--format",
            "json",
        ]
        with tempfile.TemporaryDirectory(prefix="lade-infisical-") as workspace:
            workspace_dir = Path(workspace)
            (workspace_dir / WORKSPACE_FILE).write_text(
                json.dumps({"workspaceId": project, "defaultEnvironment": ""})
            )
            output = await run_cli(cmd, extra_env, self.name, self.install_url, cwd=workspace_dir)

        loaded = self._parse(output, host)
        hydration = self._hydrate_group(
            ((uri, uri.segments[-1]) for uri in uris),
            loaded,
            f"path {path} of Infisical project {project} ({env}) on {host}",
        )
        logger.debug("provider.resolved", provider=self.name, host=host, count=len(hydration))
        return hydration

    def _parse(self, output: CliOutput, host: str) -> dict[str, str]:
        try:
            return _records(json.loads(output.stdout))
        except (ValueError, TypeError, KeyError) as exc:
            stderr = output.stderr_text
            if "login expired" in stderr:
                message = f"Login expired for Infisical instance {host}: {stderr}"
            elif "unable to validate environment" in stderr:
                message = f"Workspace seems not accessible from logged account on {host}: {stderr}"
            else:
                message = f"Infisical error: {exc} (stderr: {stderr})"
            raise BackendError(self.name, message, stderr=stderr, cause=exc) from exc


__all__ = ["Infisical", "secret_path"]
