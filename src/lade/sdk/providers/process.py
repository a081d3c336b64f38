"""SDK providers – external secret-manager process boundary.

Each backend CLI is spawned with the ambient extra-environment merged over
the current process environment. Standard output is parsed as JSON;
standard error is only kept for diagnostics.
"""
from __future__ import annotations

import asyncio
import dataclasses
import json
import os
import shutil
from pathlib import Path
from typing import Any, Callable, Mapping, Sequence, TypeVar

from lade.errors import BackendError, BackendUnavailableError
from lade.observability import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


@dataclasses.dataclass(frozen=True)
class CliOutput:
    """Captured result of one external call."""

    returncode: int
    stdout: bytes
    stderr: bytes

    @property
    def stderr_text(self) -> str:
        return self.stderr.decode(errors="replace").strip()


def process_env(extra_env: Mapping[str, str]) -> dict[str, str]:
    """Current environment with *extra_env* taking precedence."""
    return {**os.environ, **extra_env}


async def run_cli(
    cmd: Sequence[str],
    extra_env: Mapping[str, str],
    name: str,
    install_url: str,
    *,
    cwd: Path | None = None,
    stdin: bytes | None = None,
) -> CliOutput:
    """Run *cmd* and capture its output.

    Raises
    ------
    BackendUnavailableError
        When ``cmd[0]`` cannot be found on the ``PATH`` of the merged env.
    BackendError
        On any other spawn failure.
    """
    env = process_env(extra_env)
    if shutil.which(cmd[0], path=env.get("PATH", os.defpath)) is None:
        raise BackendUnavailableError(name, install_url)

    logger.debug("provider.run", provider=name, cmd=" ".join(cmd), cwd=str(cwd) if cwd else None)
    try:
        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdin=asyncio.subprocess.PIPE if stdin is not None else asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            env=env,
            cwd=str(cwd) if cwd else None,
        )
    except FileNotFoundError as exc:
        if exc.filename in (cmd[0], None):
            raise BackendUnavailableError(name, install_url, cause=exc) from exc
        raise BackendError(name, f"{name} error: {exc}", cause=exc) from exc
    except OSError as exc:
        raise BackendError(name, f"{name} error: {exc}", cause=exc) from exc

    stdout, stderr = await process.communicate(stdin)
    result = CliOutput(returncode=process.returncode or 0, stdout=stdout, stderr=stderr)
    logger.debug("provider.exited", provider=name, returncode=result.returncode)
    return result


def deserialize_output(output: CliOutput, name: str, shape: Callable[[Any], T]) -> T:
    """Decode JSON stdout and coerce it with *shape*.

    Both decoding and shape errors are reported with the captured stderr.
    """
    try:
        return shape(json.loads(output.stdout))
    except (ValueError, TypeError, KeyError, AttributeError) as exc:
        stderr = output.stderr_text
        raise BackendError(
            name,
            f"{name} error: {exc} (stderr: {stderr})",
            stderr=stderr,
            cause=exc,
        ) from exc


def str_mapping(data: Any) -> dict[str, str]:
    """Shape check for a flat ``{str: str}`` JSON object."""
    if not isinstance(data, dict):
        raise TypeError(f"expected an object, got {type(data).__name__}")
    return {str(k): v if isinstance(v, str) else json.dumps(v) for k, v in data.items()}


__all__ = ["CliOutput", "deserialize_output", "process_env", "run_cli", "str_mapping"]
