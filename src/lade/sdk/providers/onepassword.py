"""SDK providers – 1Password.

``op://account/vault/item/field``: the host selects the account; all fields
of one account are resolved with a single ``op inject`` call. The template
written to the process input is every ``{{ op://vault/item/field }}`` joined
by :data:`BATCH_DELIMITER`, and the injected output is split back
positionally.

The delimiter is assumed never to appear in a secret value. A value that
contains it shifts the split; the mismatch is detected only when the number
of parts changes.
"""
from __future__ import annotations

from pathlib import Path
from typing import Mapping

from lade.errors import BackendError
from lade.observability import get_logger
from lade.sdk.engine import join_all
from lade.sdk.providers.base import Hydration, UriProvider, group_by
from lade.sdk.providers.process import run_cli
from lade.sdk.uri import SecretUri

logger = get_logger(__name__)

BATCH_DELIMITER = "\n----LADE-DELIMITER----\n"


def inject_reference(uri: SecretUri) -> str:
    """The account-less ``op://`` reference understood by ``op inject``."""
    return "op://" + "/".join(uri.segments)


class OnePassword(UriProvider):
    name = "1Password"
    scheme = "op"
    install_url = "https://developer.1password.com/docs/cli/get-started/"

    def _validate(self, uri: SecretUri) -> None:
        uri.segment(0, "vault")
        uri.segment(1, "item")

    async def resolve(self, cwd: Path, extra_env: Mapping[str, str]) -> Hydration:
        groups = group_by(self.uris, lambda u: u.host)
        return await join_all(
            self.name,
            (self._fetch(account, uris, extra_env) for account, uris in groups.items()),
        )

    async def _fetch(self, account: str, uris: list[SecretUri], extra_env: Mapping[str, str]) -> Hydration:
        template = BATCH_DELIMITER.join("{{ " + inject_reference(uri) + " }}" for uri in uris)
        cmd = ["op", "inject", "--account", account]
        output = await run_cli(
            cmd,
            extra_env,
            self.name,
            self.install_url,
            stdin=template.encode(),
        )
        stderr = output.stderr_text
        if output.returncode != 0:
            raise BackendError(self.name, f"1Password error: {stderr}", stderr=stderr)

        values = output.stdout.decode().split(BATCH_DELIMITER)
        if len(values) != len(uris):
            raise BackendError(
                self.name,
                f"1Password error: expected {len(uris)} values from account {account}, "
                f"got {len(values)} (stderr: {stderr})",
                stderr=stderr,
            )
        hydration: Hydration = {}
        for uri, value in zip(uris, values):
            for original in self._uris[uri]:
                hydration[original] = value
        logger.debug("provider.resolved", provider=self.name, account=account, count=len(hydration))
        return hydration


__all__ = ["BATCH_DELIMITER", "OnePassword", "inject_reference"]
