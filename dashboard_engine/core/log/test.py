"""Tests for entry-point logging setup."""

import logging
from io import StringIO

import pytest

from .lib import LOG_FORMAT, PACKAGE_LOGGER_NAME, get_logger, setup_logging


@pytest.fixture
def root_logging():
    """Restore root handlers and level after a test reconfigures logging."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


class TestGetLogger:
    """Tests for package logger lookup."""

    @pytest.mark.unit
    def test_default_is_package_logger(self):
        """No name returns the package logger."""
        assert get_logger().name == PACKAGE_LOGGER_NAME

    @pytest.mark.unit
    def test_short_names_are_namespaced(self):
        """Short names are placed under the package logger."""
        logger = get_logger("cli")
        assert logger.name == "dashboard_engine.cli"
        assert logger.parent is get_logger()

    @pytest.mark.unit
    def test_module_names_unchanged(self):
        """Module loggers from __name__ are returned as-is."""
        assert get_logger("dashboard_engine.pipeline.lib") is logging.getLogger(
            "dashboard_engine.pipeline.lib"
        )


class TestSetupLogging:
    """Tests for setup_logging."""

    @pytest.mark.unit
    def test_writes_formatted_records_to_stream(self, root_logging):
        """Records reach the given stream in the package format."""
        stream = StringIO()
        setup_logging(logging.DEBUG, stream=stream)
        get_logger("cli").debug("loaded schema")
        line = stream.getvalue().strip()
        assert line.endswith(" - dashboard_engine.cli - DEBUG - loaded schema")
        assert root_logging.handlers[0].formatter._fmt == LOG_FORMAT

    @pytest.mark.unit
    def test_reconfigure_replaces_handlers(self, root_logging):
        """A second call replaces the first stream and level."""
        first, second = StringIO(), StringIO()
        setup_logging(logging.DEBUG, stream=first)
        setup_logging(logging.WARNING, stream=second)
        get_logger().info("hidden")
        get_logger().warning("shown")
        assert first.getvalue() == ""
        assert "shown" in second.getvalue()
        assert "hidden" not in second.getvalue()
        assert len(root_logging.handlers) == 1

    @pytest.mark.unit
    def test_level_from_environment(self, root_logging, monkeypatch):
        """Without a level, DASHBOARD_LOG_LEVEL decides."""
        monkeypatch.setenv("DASHBOARD_LOG_LEVEL", "error")
        setup_logging(stream=StringIO())
        assert root_logging.level == logging.ERROR

    @pytest.mark.unit
    def test_level_name_accepted(self, root_logging):
        """Level names resolve like the environment variable."""
        setup_logging("debug", stream=StringIO())
        assert root_logging.level == logging.DEBUG
        setup_logging("chatty", stream=StringIO())
        assert root_logging.level == logging.INFO

    @pytest.mark.unit
    def test_returns_package_logger(self, root_logging):
        """The package logger is returned for immediate use."""
        assert setup_logging(stream=StringIO()) is get_logger()
