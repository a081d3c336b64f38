"""Outputs – split a hydration by target and manage secret files.

A secrets file is never overwritten: writing fails when the target already
exists, and removal fails when it has unexpectedly disappeared.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable, Mapping, TypeVar

import yaml

from lade.errors import OutputFileError
from lade.observability import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

SERIALIZERS = {
    ".json": lambda data: json.dumps(data, indent=2),
    ".yaml": lambda data: yaml.safe_dump(data, default_flow_style=False),
    ".yml": lambda data: yaml.safe_dump(data, default_flow_style=False),
}


def split_env_files(hydration: Mapping[Path | None, T], default: T) -> tuple[T, dict[Path, T]]:
    """Separate the inline environment (``None`` key) from file outputs."""
    env = hydration.get(None, default)
    files = {path: value for path, value in hydration.items() if path is not None}
    return env, files


def serialize(path: Path, variables: Mapping[str, str]) -> str:
    serializer = SERIALIZERS.get(path.suffix.lower())
    if serializer is None:
        raise OutputFileError(f"Unsupported file extension for {path}: expected .json, .yaml or .yml")
    return serializer(dict(variables))


def write_files(files: Mapping[Path, Mapping[str, str]]) -> list[str]:
    """Write each file exclusively and return the variable names written.

    On failure, files already written by this call are removed again so no
    secret is left behind on disk.
    """
    names: list[str] = []
    written: list[Path] = []
    for path, variables in files.items():
        try:
            content = serialize(path, variables)
            with path.open("x") as handle:
                written.append(path)
                handle.write(content)
        except FileExistsError as exc:
            _discard(written)
            raise OutputFileError(f"File already exists: {path}", cause=exc) from exc
        except OSError as exc:
            _discard(written)
            raise OutputFileError(f"Cannot write {path}: {exc}", cause=exc) from exc
        except OutputFileError:
            _discard(written)
            raise
        logger.debug("outputs.written", path=str(path), variables=sorted(variables))
        names.extend(variables)
    return names


def _discard(paths: Iterable[Path]) -> None:
    for path in paths:
        path.unlink(missing_ok=True)
        logger.debug("outputs.discarded", path=str(path))


def remove_files(paths: Iterable[Path]) -> None:
    for path in paths:
        try:
            path.unlink()
        except FileNotFoundError as exc:
            raise OutputFileError(f"File should have existed: {path}", cause=exc) from exc
        logger.debug("outputs.removed", path=str(path))


__all__ = ["remove_files", "serialize", "split_env_files", "write_files"]
