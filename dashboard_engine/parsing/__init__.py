"""Parsing and sanitizing of model responses into operations."""

from .lib import (
    OperationParseError,
    decode_response,
    parse_and_sanitize,
    parse_operations_response,
    sanitize_operations,
)

__all__ = [
    "OperationParseError",
    "decode_response",
    "parse_and_sanitize",
    "parse_operations_response",
    "sanitize_operations",
]
