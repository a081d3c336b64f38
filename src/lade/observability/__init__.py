"""Observability – structured logging for the hydration pipeline."""
from lade.observability.logging import (
    SensitiveFieldsFilter,
    configure_logging,
    get_logger,
    verbosity_to_level,
)

__all__ = ["SensitiveFieldsFilter", "configure_logging", "get_logger", "verbosity_to_level"]
