"""SDK providers – decoding of local secret files into JSON-like documents."""
from __future__ import annotations

import configparser
import datetime
import json
import tomllib
from typing import Any, Callable

import yaml


def _toml_value(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _toml_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_toml_value(v) for v in value]
    if isinstance(value, (datetime.date, datetime.time)):
        return value.isoformat()
    return value


_INI_GLOBAL = "__lade_global__"
_INI_UNUSED = "__lade_defaults__"


def load_toml(text: str) -> Any:
    return _toml_value(tomllib.loads(text))


def load_ini(text: str) -> Any:
    """Sections become nested objects; keys before any section stay top level."""
    parser = configparser.ConfigParser(interpolation=None, default_section=_INI_UNUSED)
    parser.optionxform = str  # type: ignore[assignment,method-assign]
    parser.read_string(f"[{_INI_GLOBAL}]\n{text}")
    document: dict[str, Any] = dict(parser.items(_INI_GLOBAL))
    for section in parser.sections():
        if section != _INI_GLOBAL:
            document[section] = dict(parser.items(section))
    return document


def load_yaml(text: str) -> Any:
    return yaml.safe_load(text)


LOADERS: dict[str, Callable[[str], Any]] = {
    "json": json.loads,
    "yaml": load_yaml,
    "yml": load_yaml,
    "toml": load_toml,
    "ini": load_ini,
}


__all__ = ["LOADERS", "load_ini", "load_toml", "load_yaml"]
