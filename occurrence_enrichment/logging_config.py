"""Structured logging configuration.

Every module obtains its logger through ``get_logger(__name__)``; the
process entry point calls ``configure_logging`` once with the run level.
"""

from __future__ import annotations

import logging
from typing import Any

import structlog

from . import config


def configure_logging(level: str = config.LOG_LEVEL) -> None:
    """Configure structlog with timestamped, levelled console output.

    Args:
        level: Minimum level name (DEBUG, INFO, WARNING, ERROR).
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> Any:
    """Return a module logger instance.

    Args:
        name: Logger name, usually __name__.

    Returns:
        A structlog bound logger.
    """
    return structlog.get_logger(name)
