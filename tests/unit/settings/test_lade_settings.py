"""Unit tests for LadeSettings, EnvSettingsLoader and GlobalConfig."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

import pytest

from lade.errors import ConfigError, SettingsError
from lade.settings import EnvSettingsLoader, GlobalConfig, LadeSettings


class TestEnvSettingsLoader:
    def test_defaults(self) -> None:
        settings = EnvSettingsLoader({}).load(LadeSettings)
        assert settings.shell is None
        assert settings.log_json is False
        assert settings.error_wait == 5.0
        assert settings.config_dir.endswith("lade")

    def test_reads_prefixed_variables(self, tmp_path: Path) -> None:
        environ = {
            "LADE_CONFIG_DIR": str(tmp_path),
            "LADE_SHELL": "fish",
            "LADE_LOG_JSON": "true",
            "LADE_ERROR_WAIT": "0.5",
        }
        settings = EnvSettingsLoader(environ).load(LadeSettings)
        assert settings.config_dir == str(tmp_path)
        assert settings.shell == "fish"
        assert settings.log_json is True
        assert settings.error_wait == 0.5
        assert settings.global_config_path == tmp_path / "config.json"

    def test_invalid_float(self) -> None:
        with pytest.raises(SettingsError, match="LADE_ERROR_WAIT"):
            EnvSettingsLoader({"LADE_ERROR_WAIT": "soon"}).load(LadeSettings)

    def test_negative_wait_rejected(self) -> None:
        with pytest.raises(SettingsError):
            EnvSettingsLoader({"LADE_ERROR_WAIT": "-1"}).load(LadeSettings)

    def test_reads_process_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LADE_SHELL", "zsh")
        assert EnvSettingsLoader().load(LadeSettings).shell == "zsh"


class TestGlobalConfig:
    def test_load_creates_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "config.json"
        config = GlobalConfig.load(path)
        assert config.user is None
        assert path.exists()
        assert json.loads(path.read_text())["user"] is None

    def test_save_and_reload(self, tmp_path: Path) -> None:
        path = tmp_path / "config.json"
        stamp = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        GlobalConfig(update_check=stamp, user="zifeo").save(path)
        loaded = GlobalConfig.load(path)
        assert loaded.user == "zifeo"
        assert loaded.update_check == stamp

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "config.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError, match="Invalid global config"):
            GlobalConfig.load(path)

    def test_missing_field(self, tmp_path: Path) -> None:
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"user": "a"}))
        with pytest.raises(ConfigError):
            GlobalConfig.load(path)
