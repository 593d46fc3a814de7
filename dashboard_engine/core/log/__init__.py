"""Logging setup for dashboard-engine entry points."""

from .lib import LOG_FORMAT, PACKAGE_LOGGER_NAME, get_logger, setup_logging

__all__ = ["LOG_FORMAT", "PACKAGE_LOGGER_NAME", "get_logger", "setup_logging"]
