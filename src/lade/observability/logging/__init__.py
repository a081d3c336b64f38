"""Observability – structlog configuration and helpers."""
from lade.observability.logging.filters import DEFAULT_SENSITIVE_FIELDS, SensitiveFieldsFilter
from lade.observability.logging.factory import configure_logging, verbosity_to_level
from lade.observability.logging.processors import get_logger

__all__ = [
    "DEFAULT_SENSITIVE_FIELDS",
    "SensitiveFieldsFilter",
    "configure_logging",
    "get_logger",
    "verbosity_to_level",
]
