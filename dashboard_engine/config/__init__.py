"""Centralized configuration management for dashboard-engine.

Provides unified access to all configuration via the `get_environment()` function.

Example:
    >>> from dashboard_engine.config import EnvVar, get_environment
    >>>
    >>> # Get any environment variable with automatic type conversion
    >>> repair = get_environment(EnvVar.DASHBOARD_REPAIR_JSON)  # Returns bool
    >>>
    >>> # Override at runtime
    >>> mode = get_environment(EnvVar.DASHBOARD_DEFAULT_MODE, override="dark")

Environment Variable Categories:
    logging: Log output configuration
    parsing: Model-output parsing behavior
    schema: Schema factory defaults
    engine: Operation application behavior
"""

from .lib import (
    # Core types
    EnvConfig,
    EnvVar,
    get_default_mode,
    # Main interface
    get_environment,
    get_environment_info,
    get_log_level,
    # Introspection
    list_environment_variables,
)

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
