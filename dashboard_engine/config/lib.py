"""Centralized environment configuration management for dashboard-engine.

Provides a unified interface for all environment variables with:
- Single `get_environment()` function for all configuration
- Type-safe enum with metadata (default, type, description)
- Consistent resolution: override > environment > default

Example:
    >>> from dashboard_engine.config import EnvVar, get_environment
    >>>
    >>> # Get values with automatic type conversion
    >>> repair = get_environment(EnvVar.DASHBOARD_REPAIR_JSON)  # Returns bool
    >>> mode = get_environment(EnvVar.DASHBOARD_DEFAULT_MODE)  # Returns str
    >>>
    >>> # Override at runtime
    >>> repair = get_environment(EnvVar.DASHBOARD_REPAIR_JSON, override=False)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Any, overload

# =============================================================================
# Environment Variable Configuration
# =============================================================================


@dataclass(frozen=True)
class EnvConfig:
    """Metadata for an environment variable.

    Attributes:
        name: Environment variable name (e.g., "DASHBOARD_LOG_LEVEL").
        default: Default value if not set in environment.
        var_type: Python type for value conversion (str or bool).
        description: Human-readable description.
        category: Grouping category for documentation.
    """

    name: str
    default: Any
    var_type: type
    description: str = ""
    category: str = "general"


class EnvVar(Enum):
    """All environment variables used by dashboard-engine.

    Each member contains an EnvConfig with name, default, type, and description.
    Use with `get_environment()` for type-safe access.

    Categories:
        - logging: Log output configuration
        - parsing: Model-output parsing behavior
        - schema: Schema factory defaults
        - engine: Operation application behavior
    """

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------
    DASHBOARD_LOG_LEVEL = EnvConfig(
        name="DASHBOARD_LOG_LEVEL",
        default="INFO",
        var_type=str,
        description="Log level name for CLI and host logging setup",
        category="logging",
    )

    # -------------------------------------------------------------------------
    # Parsing
    # -------------------------------------------------------------------------
    DASHBOARD_REPAIR_JSON = EnvConfig(
        name="DASHBOARD_REPAIR_JSON",
        default=True,
        var_type=bool,
        description="Attempt JSON repair when a model response fails to parse",
        category="parsing",
    )

    # -------------------------------------------------------------------------
    # Schema
    # -------------------------------------------------------------------------
    DASHBOARD_DEFAULT_MODE = EnvConfig(
        name="DASHBOARD_DEFAULT_MODE",
        default="light",
        var_type=str,
        description="Theme mode for newly created schemas (light, dark)",
        category="schema",
    )

    # -------------------------------------------------------------------------
    # Engine
    # -------------------------------------------------------------------------
    DASHBOARD_WARN_ON_MISSING_TARGET = EnvConfig(
        name="DASHBOARD_WARN_ON_MISSING_TARGET",
        default=False,
        var_type=bool,
        description="Record a warning when a path selector matches no component",
        category="engine",
    )


# =============================================================================
# Type Conversion Helpers
# =============================================================================


def _parse_bool(value: str) -> bool | None:
    """Parse string to boolean.

    Recognizes: true/false, 1/0, yes/no (case-insensitive).
    Returns None for unrecognized values.
    """
    normalized = value.lower().strip()
    if normalized in ("true", "1", "yes"):
        return True
    if normalized in ("false", "0", "no"):
        return False
    return None


def _convert_value(value: str | None, var_type: type, default: Any) -> Any:
    """Convert string value to target type.

    Args:
        value: Raw string value from environment (or None).
        var_type: Target Python type.
        default: Default value if conversion fails or value is None.

    Returns:
        Converted value or default.
    """
    if value is None:
        return default

    if var_type is str:
        return value

    if var_type is bool:
        result = _parse_bool(value)
        return result if result is not None else default

    # Unknown type, return as-is
    return value


# =============================================================================
# Main Interface
# =============================================================================


@overload
def get_environment(env_var: EnvVar, override: str) -> str: ...
@overload
def get_environment(env_var: EnvVar, override: bool) -> bool: ...
@overload
def get_environment(env_var: EnvVar, override: None = None) -> Any: ...


def get_environment(env_var: EnvVar, override: Any = None) -> Any:
    """Get environment variable value with type conversion.

    Resolution priority:
        1. Explicit override parameter (highest)
        2. Environment variable value
        3. Default from EnvConfig (lowest)

    Args:
        env_var: Environment variable enum member.
        override: Optional override value (bypasses env lookup).

    Returns:
        Value converted to the variable's type (str or bool).

    Example:
        >>> get_environment(EnvVar.DASHBOARD_DEFAULT_MODE)
        'light'
        >>> get_environment(EnvVar.DASHBOARD_DEFAULT_MODE, override="dark")
        'dark'
    """
    config: EnvConfig = env_var.value

    if override is not None:
        return override

    raw_value = os.environ.get(config.name)
    return _convert_value(raw_value, config.var_type, config.default)


def get_environment_info(env_var: EnvVar) -> EnvConfig:
    """Get metadata for an environment variable.

    Args:
        env_var: Environment variable enum member.

    Returns:
        EnvConfig with name, default, type, and description.
    """
    return env_var.value


# =============================================================================
# Convenience Functions
# =============================================================================


def get_log_level(override: str | None = None) -> int:
    """Get the numeric log level.

    Resolution: override > DASHBOARD_LOG_LEVEL > INFO. Unknown level
    names resolve to INFO.
    """
    name = str(get_environment(EnvVar.DASHBOARD_LOG_LEVEL, override=override))
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def get_default_mode(override: str | None = None) -> str:
    """Get the theme mode for new schemas, falling back to light."""
    mode = str(get_environment(EnvVar.DASHBOARD_DEFAULT_MODE, override=override))
    mode = mode.strip().lower()
    return mode if mode in ("light", "dark") else "light"


def list_environment_variables(category: str | None = None) -> list[EnvVar]:
    """List all environment variables, optionally filtered by category.

    Args:
        category: Filter by category (logging, parsing, schema, engine).
                 None returns all variables.

    Returns:
        List of EnvVar enum members.
    """
    if category is None:
        return list(EnvVar)

    return [var for var in EnvVar if var.value.category == category]


__all__ = [
    # Core types
    "EnvConfig",
    "EnvVar",
    # Main interface
    "get_environment",
    "get_environment_info",
    # Convenience functions
    "get_log_level",
    "get_default_mode",
    # Introspection
    "list_environment_variables",
]
