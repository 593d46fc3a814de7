"""Logging setup for dashboard-engine entry points.

Library modules log through `logging.getLogger(__name__)`, which places
them under the `dashboard_engine` namespace. Entry points (the CLI, test
sessions, host applications) call `setup_logging` once; the level comes
from the caller or from DASHBOARD_LOG_LEVEL.
"""

import logging
import sys
from typing import IO, Optional, Union

from dashboard_engine.config import get_log_level

__all__ = ["LOG_FORMAT", "PACKAGE_LOGGER_NAME", "get_logger", "setup_logging"]

PACKAGE_LOGGER_NAME = "dashboard_engine"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    level: Union[int, str, None] = None,
    stream: Optional[IO[str]] = None,
) -> logging.Logger:
    """Configure root logging for an entry point.

    Any handlers installed earlier are replaced, so calling this again
    (e.g. after `.env` changes the level) takes effect.

    Args:
        level: Numeric level, level name, or None to read
            DASHBOARD_LOG_LEVEL. Unknown names resolve to INFO.
        stream: Output stream; defaults to stderr so command output on
            stdout stays machine-readable.

    Returns:
        The package logger.
    """
    resolved = level if isinstance(level, int) else get_log_level(level)
    logging.basicConfig(
        level=resolved,
        format=LOG_FORMAT,
        stream=stream or sys.stderr,
        force=True,
    )
    return get_logger()


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger inside the package namespace.

    Example:
        >>> get_logger("cli").name
        'dashboard_engine.cli'
    """
    if not name or name == PACKAGE_LOGGER_NAME:
        return logging.getLogger(PACKAGE_LOGGER_NAME)
    if name.startswith(PACKAGE_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{PACKAGE_LOGGER_NAME}.{name}")
