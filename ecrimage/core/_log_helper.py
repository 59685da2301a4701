import logging
import os
import sys
from typing import Any

import structlog

from .constants import DEFAULT_LOG_LEVEL, LOG_LEVEL_ENV, ROOT_PACKAGE_NAME


def configure_logging(level: str | None = None) -> None:
    """Configure structlog for console output on stderr.

    Args:
        level:
            Minimum level name (DEBUG, INFO, WARNING, ERROR).
            Falls back to the ECRIMAGE_LOG_LEVEL environment variable,
            then to WARNING.
    """
    level_name = (
        level or os.environ.get(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL
    ).upper()
    numeric_level = logging.getLevelName(level_name)
    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%H:%M:%S"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    return structlog.get_logger(name or ROOT_PACKAGE_NAME, **initial_values)


def warn(message: str, **kwargs: Any) -> None:
    get_logger().warning(message, **kwargs)
