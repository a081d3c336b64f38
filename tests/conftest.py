"""Shared fixtures: fake secret-manager CLIs installed on a private PATH.

Each fake is a ``/bin/sh`` script. Every invocation appends its arguments
to ``calls.log`` next to the script so tests can assert on batching.
"""

from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest


class FakeCli:
    def __init__(self, root: Path) -> None:
        self.bin = root / "bin"
        self.bin.mkdir()
        self.log = root / "calls.log"

    @property
    def env(self) -> dict[str, str]:
        """Extra environment putting the fakes first on PATH."""
        return {"PATH": f"{self.bin}{os.pathsep}/usr/bin{os.pathsep}/bin"}

    @property
    def empty_env(self) -> dict[str, str]:
        """PATH without any fake, for the missing-binary case."""
        empty = self.bin.parent / "empty"
        empty.mkdir(exist_ok=True)
        return {"PATH": str(empty)}

    def install(self, name: str, body: str) -> Path:
        script = self.bin / name
        script.write_text(f'#!/bin/sh\necho "$@" >> "{self.log}"\n{body}\n')
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return script

    def stdout(self, name: str, text: str, *, stderr: str = "", code: int = 0) -> Path:
        """Fake printing *text* verbatim on stdout."""
        payload = self.bin / f"{name}.out"
        payload.write_text(text)
        body = f'cat "{payload}"'
        if stderr:
            body += f"\necho '{stderr}' >&2"
        body += f"\nexit {code}"
        return self.install(name, body)

    @property
    def calls(self) -> list[str]:
        if not self.log.exists():
            return []
        return self.log.read_text().splitlines()


@pytest.fixture()
def fake_cli(tmp_path: Path) -> FakeCli:
    return FakeCli(tmp_path)
