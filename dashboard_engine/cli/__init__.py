"""Developer CLI command handlers."""

from .lib import (
    cmd_apply,
    cmd_new,
    cmd_parse,
    cmd_validate,
    handle_apply_command,
    handle_new_command,
    handle_parse_command,
    handle_validate_command,
)

__all__ = [
    "cmd_apply",
    "cmd_new",
    "cmd_parse",
    "cmd_validate",
    "handle_apply_command",
    "handle_new_command",
    "handle_parse_command",
    "handle_validate_command",
]
