"""Ordered, failure-isolated application of operation batches."""

from .lib import ApplyResult, apply_operations

__all__ = [
    "ApplyResult",
    "apply_operations",
]
