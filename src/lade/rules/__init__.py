"""Rules – the command-scoped rule cascade and secret selection."""
from lade.rules.config import SERVICE_ACCOUNT_VAR, Config, HydrationContext, Output
from lade.rules.identity import resolve_identity
from lade.rules.loader import RULE_FILE_NAMES, build_config, find_rule_file, load_rule_file
from lade.rules.secret import (
    PerUserSecret,
    PlainSecret,
    Rule,
    RuleConfig,
    SecretSpec,
    parse_rule,
    select_secret,
    select_secrets,
)

__all__ = [
    "Config",
    "HydrationContext",
    "Output",
    "PerUserSecret",
    "PlainSecret",
    "RULE_FILE_NAMES",
    "Rule",
    "RuleConfig",
    "SERVICE_ACCOUNT_VAR",
    "SecretSpec",
    "build_config",
    "find_rule_file",
    "load_rule_file",
    "parse_rule",
    "resolve_identity",
    "select_secret",
    "select_secrets",
]
