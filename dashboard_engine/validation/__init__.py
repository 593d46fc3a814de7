"""Structural and reference validation for schemas and operation batches."""

from dashboard_engine.validation.lib import (
    ValidationIssue,
    ValidationResult,
    operation_issues,
    schema_issues,
    validate_operations,
    validate_schema,
)
from dashboard_engine.validation.references import validate_component_ids

__all__ = [
    "ValidationIssue",
    "ValidationResult",
    "operation_issues",
    "schema_issues",
    "validate_component_ids",
    "validate_operations",
    "validate_schema",
]
