"""dashboard-engine: validated mutation of dashboard design schemas."""

from dashboard_engine.applicator import ApplyResult, apply_operations
from dashboard_engine.operations import Operation, OperationKind, parse_operation
from dashboard_engine.pipeline import (
    OperationRejected,
    PipelineResult,
    process_operations,
)
from dashboard_engine.schema import (
    Component,
    ComponentType,
    DesignSchema,
    export_json_schema,
    get_blank_schema,
    get_dark_blank_schema,
    get_dark_default_schema,
    get_default_schema,
)
from dashboard_engine.validation import (
    ValidationResult,
    validate_component_ids,
    validate_operations,
    validate_schema,
)

__all__ = [
    # Schema
    "DesignSchema",
    "Component",
    "ComponentType",
    "export_json_schema",
    "get_default_schema",
    "get_dark_default_schema",
    "get_blank_schema",
    "get_dark_blank_schema",
    # Operations
    "Operation",
    "OperationKind",
    "parse_operation",
    "apply_operations",
    "ApplyResult",
    # Validation
    "ValidationResult",
    "validate_schema",
    "validate_operations",
    "validate_component_ids",
    # Pipeline
    "process_operations",
    "PipelineResult",
    "OperationRejected",
]
