"""Tests for configuration management."""

import logging

import pytest

from .lib import (
    EnvConfig,
    EnvVar,
    get_default_mode,
    get_environment,
    get_environment_info,
    get_log_level,
    list_environment_variables,
)

# =============================================================================
# Tests for get_environment (main interface)
# =============================================================================


class TestGetEnvironment:
    """Tests for the unified get_environment interface."""

    @pytest.mark.unit
    def test_returns_default_when_not_set(self, monkeypatch):
        """Returns default value when env var is not set."""
        monkeypatch.delenv("DASHBOARD_DEFAULT_MODE", raising=False)
        result = get_environment(EnvVar.DASHBOARD_DEFAULT_MODE)
        assert result == "light"

    @pytest.mark.unit
    def test_override_takes_priority(self, monkeypatch):
        """Override parameter takes highest priority."""
        monkeypatch.setenv("DASHBOARD_DEFAULT_MODE", "light")
        result = get_environment(EnvVar.DASHBOARD_DEFAULT_MODE, override="dark")
        assert result == "dark"

    @pytest.mark.unit
    def test_env_var_overrides_default(self, monkeypatch):
        """Environment variable overrides default value."""
        monkeypatch.setenv("DASHBOARD_LOG_LEVEL", "DEBUG")
        result = get_environment(EnvVar.DASHBOARD_LOG_LEVEL)
        assert result == "DEBUG"

    @pytest.mark.unit
    def test_bool_type_conversion_true(self, monkeypatch):
        """Boolean type conversion for true values."""
        for value in ("true", "1", "yes", "TRUE", "Yes"):
            monkeypatch.setenv("DASHBOARD_WARN_ON_MISSING_TARGET", value)
            result = get_environment(EnvVar.DASHBOARD_WARN_ON_MISSING_TARGET)
            assert result is True

    @pytest.mark.unit
    def test_bool_type_conversion_false(self, monkeypatch):
        """Boolean type conversion for false values."""
        for value in ("false", "0", "no", "FALSE", "No"):
            monkeypatch.setenv("DASHBOARD_REPAIR_JSON", value)
            result = get_environment(EnvVar.DASHBOARD_REPAIR_JSON)
            assert result is False

    @pytest.mark.unit
    def test_invalid_bool_returns_default(self, monkeypatch):
        """Unrecognized boolean value returns default."""
        monkeypatch.setenv("DASHBOARD_REPAIR_JSON", "sometimes")
        result = get_environment(EnvVar.DASHBOARD_REPAIR_JSON)
        assert result is True

    @pytest.mark.unit
    def test_false_override_is_respected(self, monkeypatch):
        """A falsy override still bypasses the environment."""
        monkeypatch.setenv("DASHBOARD_REPAIR_JSON", "true")
        result = get_environment(EnvVar.DASHBOARD_REPAIR_JSON, override=False)
        assert result is False


class TestGetEnvironmentInfo:
    """Tests for environment variable metadata."""

    @pytest.mark.unit
    def test_returns_env_config(self):
        """Returns EnvConfig dataclass."""
        info = get_environment_info(EnvVar.DASHBOARD_WARN_ON_MISSING_TARGET)
        assert isinstance(info, EnvConfig)
        assert info.name == "DASHBOARD_WARN_ON_MISSING_TARGET"
        assert info.default is False
        assert info.var_type is bool
        assert info.category == "engine"

    @pytest.mark.unit
    def test_description_present(self):
        """Description field is populated."""
        info = get_environment_info(EnvVar.DASHBOARD_REPAIR_JSON)
        assert "JSON" in info.description

    @pytest.mark.unit
    def test_declared_types_are_convertible(self):
        """Every variable is a string or a boolean with a default of that type."""
        for var in EnvVar:
            info = get_environment_info(var)
            assert info.var_type in (str, bool)
            assert isinstance(info.default, info.var_type)


class TestListEnvironmentVariables:
    """Tests for listing environment variables."""

    @pytest.mark.unit
    def test_returns_all_variables(self):
        """Returns all EnvVar members when no category."""
        result = list_environment_variables()
        assert len(result) == len(EnvVar)
        assert all(isinstance(v, EnvVar) for v in result)

    @pytest.mark.unit
    def test_filter_by_category(self):
        """Filters by category correctly."""
        engine_vars = list_environment_variables("engine")
        assert EnvVar.DASHBOARD_WARN_ON_MISSING_TARGET in engine_vars
        assert EnvVar.DASHBOARD_LOG_LEVEL not in engine_vars


# =============================================================================
# Tests for convenience functions
# =============================================================================


class TestGetLogLevel:
    """Tests for log level resolution."""

    @pytest.mark.unit
    def test_default_is_info(self, monkeypatch):
        """INFO is used when nothing is configured."""
        monkeypatch.delenv("DASHBOARD_LOG_LEVEL", raising=False)
        assert get_log_level() == logging.INFO

    @pytest.mark.unit
    def test_case_insensitive(self, monkeypatch):
        """Level names are matched case-insensitively."""
        monkeypatch.setenv("DASHBOARD_LOG_LEVEL", "debug")
        assert get_log_level() == logging.DEBUG

    @pytest.mark.unit
    def test_unknown_name_falls_back(self):
        """Unknown level names fall back to INFO."""
        assert get_log_level(override="chatty") == logging.INFO


class TestGetDefaultMode:
    """Tests for default theme mode resolution."""

    @pytest.mark.unit
    def test_dark_from_env(self, monkeypatch):
        """Dark mode is read from the environment."""
        monkeypatch.setenv("DASHBOARD_DEFAULT_MODE", "Dark")
        assert get_default_mode() == "dark"

    @pytest.mark.unit
    def test_invalid_mode_falls_back(self):
        """Unknown modes fall back to light."""
        assert get_default_mode(override="sepia") == "light"
