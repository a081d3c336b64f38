"""Unit tests for the click command line surface."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from lade.cli import cli, render_failure
from lade.errors import BackendError


@pytest.fixture()
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    (tmp_path / "lade.yaml").write_text(
        "'^echo':\n  A: '1'\n  B: \"it's\"\n"
        "'^sh':\n  '.':\n    file: secrets.json\n  F: file-value\n  SKIPPED:\n    '.': ~\n"
        "'^sh -c':\n  A: inline\n"
        "'^fail':\n  X: vault://vault.example.com/secret/db/password\n"
    )
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture()
def env(tmp_path: Path) -> dict[str, str]:
    return {
        "LADE_CONFIG_DIR": str(tmp_path / "config"),
        "LADE_SHELL": "bash",
        "LADE_ERROR_WAIT": "0",
        "USER": "tester",
    }


class TestSet:
    def test_prints_exports(self, project: Path, env: dict[str, str]) -> None:
        result = CliRunner().invoke(cli, ["set", "echo", "hello"], env=env)
        assert result.exit_code == 0, result.output
        assert result.output.strip() == "export A='1';export B='it'\\''s'"

    def test_fish(self, project: Path, env: dict[str, str]) -> None:
        result = CliRunner().invoke(cli, ["set", "echo"], env={**env, "LADE_SHELL": "fish"})
        assert result.output.strip() == "set --global --export A '1';set --global --export B 'it\\'s'"

    def test_writes_file_outputs(self, project: Path, env: dict[str, str]) -> None:
        result = CliRunner().invoke(cli, ["set", "sh", "run.sh"], env=env)
        assert result.exit_code == 0, result.output
        assert json.loads((project / "secrets.json").read_text()) == {"F": "file-value"}
        assert result.output.strip() == ""

    def test_no_match(self, project: Path, env: dict[str, str]) -> None:
        result = CliRunner().invoke(cli, ["set", "ls", "-la"], env=env)
        assert result.exit_code == 0
        assert result.output.strip() == ""

    def test_hydration_failure(self, project: Path, env: dict[str, str]) -> None:
        result = CliRunner().invoke(cli, ["set", "fail"], env={**env, "PATH": str(project / "nothing")})
        assert result.exit_code == 1
        assert "Vault CLI not found" in result.output
        assert "correct vault" in result.output
        assert "export" not in result.output

    def test_unsupported_shell(self, project: Path, env: dict[str, str]) -> None:
        result = CliRunner().invoke(cli, ["set", "echo"], env={**env, "LADE_SHELL": "tcsh"})
        assert result.exit_code == 1
        assert "Unsupported shell" in result.output

    def test_invalid_rule_file(self, project: Path, env: dict[str, str]) -> None:
        (project / "lade.yaml").write_text("- not a map\n")
        result = CliRunner().invoke(cli, ["set", "echo"], env=env)
        assert result.exit_code == 1
        assert "Invalid rule file" in result.output


class TestUnset:
    def test_prints_unsets_and_removes_files(self, project: Path, env: dict[str, str]) -> None:
        (project / "secrets.json").write_text("{}")
        result = CliRunner().invoke(cli, ["unset", "sh", "-c", "true"], env=env)
        assert result.exit_code == 0, result.output
        assert result.output.strip() == "unset -v A"
        assert not (project / "secrets.json").exists()

    def test_missing_file_is_reported(self, project: Path, env: dict[str, str]) -> None:
        result = CliRunner().invoke(cli, ["unset", "sh"], env=env)
        assert result.exit_code == 1
        assert "File should have existed" in result.output


class TestInject:
    def test_runs_with_environment_and_cleans_up(self, project: Path, env: dict[str, str]) -> None:
        script = 'test "$A" = inline && test -f secrets.json'
        result = CliRunner().invoke(cli, ["inject", "sh", "-c", script], env=env)
        assert result.exit_code == 0, result.output
        assert not (project / "secrets.json").exists()

    def test_propagates_exit_code(self, project: Path, env: dict[str, str]) -> None:
        result = CliRunner().invoke(cli, ["inject", "sh", "-c", "exit 3"], env=env)
        assert result.exit_code == 3
        assert not (project / "secrets.json").exists()


class TestUser:
    def test_defaults_to_os_user(self, project: Path, env: dict[str, str]) -> None:
        result = CliRunner().invoke(cli, ["user"], env=env)
        assert result.output.strip() == "tester (OS)"

    def test_set_and_reset(self, project: Path, env: dict[str, str], tmp_path: Path) -> None:
        runner = CliRunner()
        assert runner.invoke(cli, ["user", "zifeo"], env=env).exit_code == 0
        assert runner.invoke(cli, ["user"], env=env).output.strip() == "zifeo (saved)"
        saved = json.loads((tmp_path / "config" / "config.json").read_text())
        assert saved["user"] == "zifeo"
        assert runner.invoke(cli, ["user", "--reset"], env=env).exit_code == 0
        assert runner.invoke(cli, ["user"], env=env).output.strip() == "tester (OS)"


class TestRenderFailure:
    def test_box(self) -> None:
        lines = render_failure(BackendError("Vault", "Vault error: " + "x" * 200)).splitlines()
        assert lines[0] == lines[-1]
        assert len({len(line) for line in lines}) == 1
        assert any("correct vault" in line for line in lines)
