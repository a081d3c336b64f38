"""Rules – rule file discovery and decoding.

Walking from the starting directory up to the filesystem root, each level
contributes ``lade.yaml`` (preferred) or ``lade.yml``. Anchors and ``<<``
merge keys are expanded by the YAML loader before the rules are decoded.
"""
from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import yaml

from lade.errors import InvalidPatternError, RuleFileError
from lade.observability import get_logger
from lade.rules.config import Config
from lade.rules.secret import Rule, parse_rule

logger = get_logger(__name__)

RULE_FILE_NAMES = ("lade.yaml", "lade.yml")


def load_rule_file(path: Path) -> list[Rule]:
    """Decode one rule file into rules, in file order."""
    try:
        raw: Any = yaml.safe_load(path.read_text())
    except (OSError, yaml.YAMLError) as exc:
        raise RuleFileError(path, str(exc), cause=exc) from exc
    if raw is None:
        return []
    if not isinstance(raw, dict):
        raise RuleFileError(path, f"expected a map of command patterns, got {type(raw).__name__}")
    try:
        return [parse_rule(str(pattern), path.parent, value) for pattern, value in raw.items()]
    except TypeError as exc:
        raise RuleFileError(path, str(exc), cause=exc) from exc


def find_rule_file(directory: Path) -> Path | None:
    for name in RULE_FILE_NAMES:
        candidate = directory / name
        if candidate.is_file():
            return candidate
    return None


def build_config(start: Path) -> Config:
    """Collect the rule cascade from *start* up to the root.

    Raises
    ------
    RuleFileError
        When any rule file is unreadable or malformed.
    InvalidPatternError
        When any command pattern is not a valid regular expression.
    """
    found: list[tuple[Path, list[Rule]]] = []
    directory = start.resolve()
    while True:
        path = find_rule_file(directory)
        if path is not None:
            found.append((path, load_rule_file(path)))
        if directory.parent == directory:
            break
        directory = directory.parent

    found.reverse()
    matches: list[tuple[re.Pattern[str], Rule]] = []
    for path, rules in found:
        for rule in rules:
            try:
                matches.append((re.compile(rule.pattern), rule))
            except re.error as exc:
                raise InvalidPatternError(rule.pattern, path, str(exc), cause=exc) from exc

    logger.debug("config.loaded", start=str(start), files=[str(p) for p, _ in found], rules=len(matches))
    return Config(matches)


__all__ = ["RULE_FILE_NAMES", "build_config", "find_rule_file", "load_rule_file"]
