"""Settings – process settings and the persisted global config."""
from lade.settings.base import LadeSettings, Settings
from lade.settings.global_config import GlobalConfig
from lade.settings.loaders import EnvSettingsLoader, SettingsLoader

__all__ = ["EnvSettingsLoader", "GlobalConfig", "LadeSettings", "Settings", "SettingsLoader"]
