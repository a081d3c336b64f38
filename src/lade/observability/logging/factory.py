"""Observability – structlog configuration for the CLI process."""
from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from lade.observability.logging.filters import SensitiveFieldsFilter


def verbosity_to_level(verbose: int = 0, quiet: int = 0) -> int:
    """Map ``-v``/``-q`` counts to a stdlib level (WARNING by default)."""
    levels = [logging.ERROR, logging.WARNING, logging.INFO, logging.DEBUG]
    index = max(0, min(len(levels) - 1, 1 + verbose - quiet))
    return levels[index]


def configure_logging(
    level: int = logging.WARNING,
    *,
    json: bool = False,
    sensitive_fields: frozenset[str] | None = None,
) -> None:
    """Route structlog through stdlib logging onto standard error.

    Standard output is left untouched: it carries the shell code that the
    calling hook evaluates.
    """
    shared_processors: list[Any] = [
        SensitiveFieldsFilter(sensitive_fields),
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    structlog.configure(
        processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    renderer: Any = (
        structlog.processors.JSONRenderer() if json else structlog.dev.ConsoleRenderer(colors=False)
    )
    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


__all__ = ["configure_logging", "verbosity_to_level"]
