"""Logging configuration for prisma-extractor.

Every module gets its logger through :func:`get_logger` so that all records
end up under the ``prisma_extractor`` namespace and share one handler.
"""

import logging
import sys
from typing import Optional

ROOT_LOGGER_NAME = "prisma_extractor"
DEFAULT_FORMAT = "%(levelname)s %(name)s: %(message)s"


def setup_logging(level: str = "WARNING", format_string: Optional[str] = None) -> None:
    """Configure the package logger.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        format_string: Optional custom format string.
    """
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(getattr(logging, level.upper()))

    # Remove existing handlers so repeated calls don't duplicate output
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
    root_logger.addHandler(handler)

    root_logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a module.

    Args:
        name: Logger name (typically ``__name__``).

    Returns:
        Logger inside the ``prisma_extractor`` namespace.
    """
    if name.startswith(ROOT_LOGGER_NAME):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
