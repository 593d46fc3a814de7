"""End-to-end processing of one operation batch.

Runs the full guarded flow around the applicator:

    validate input schema -> validate operations -> validate references
    -> apply -> validate result

Any hard failure raises an OperationRejected subclass before a result is
returned, so callers never see a schema that should not be persisted.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any

from dashboard_engine.applicator import apply_operations
from dashboard_engine.operations import Operation, OperationKind, parse_operation
from dashboard_engine.schema import DesignSchema
from dashboard_engine.validation import (
    ValidationResult,
    validate_component_ids,
    validate_operations,
    validate_schema,
)

logger = logging.getLogger(__name__)


class OperationRejected(Exception):
    """Base exception for batches rejected by validation.

    Attributes:
        reason: Validator summary message.
        stage: Name of the stage that rejected the batch.
        result: The failing ValidationResult.
    """

    stage = "unknown"

    def __init__(self, reason: str, result: ValidationResult | None = None):
        super().__init__(reason)
        self.reason = reason
        self.result = result


class SchemaRejected(OperationRejected):
    """Raised when the input schema is invalid."""

    stage = "schema"


class OperationsRejected(OperationRejected):
    """Raised when the operation batch is structurally invalid."""

    stage = "operations"


class ReferenceRejected(OperationRejected):
    """Raised when an identity operation names an unknown component.

    Attributes:
        component_id: The first unresolvable id.
    """

    stage = "references"

    def __init__(self, reason: str, component_id: str, result: ValidationResult | None = None):
        super().__init__(reason, result)
        self.component_id = component_id


class ResultRejected(OperationRejected):
    """Raised when the schema produced by the batch is invalid."""

    stage = "result"


@dataclass
class PipelineResult:
    """Outcome of a processed batch.

    Attributes:
        schema: The new schema document, safe to persist.
        warnings: Soft-skip warnings to surface to the end user.
        operations: The parsed operations that were applied.
        summary: Log-safe description of the batch.
    """

    schema: dict[str, Any]
    warnings: list[str] = field(default_factory=list)
    operations: list[Operation] = field(default_factory=list)
    summary: dict[str, Any] = field(default_factory=dict)


def summarize_operation(operation: Operation) -> dict[str, Any]:
    """Describe an operation without its payload values.

    Returns:
        Dict with "op" and, where relevant, "componentId",
        "componentType" and "path".
    """
    summary: dict[str, Any] = {"op": operation.op}
    kind = OperationKind(operation.op)

    if kind in (OperationKind.SET_STYLE, OperationKind.UPDATE):
        summary["path"] = operation.path
    elif kind == OperationKind.ADD_COMPONENT:
        summary["componentId"] = operation.component.id
        summary["componentType"] = operation.component.type
    elif kind == OperationKind.REPLACE_COMPONENT:
        summary["componentId"] = operation.id
        summary["componentType"] = operation.component.type
    else:
        summary["componentId"] = operation.id
    return summary


def _component_count(document: dict[str, Any]) -> int:
    components = document.get("components")
    return len(components) if isinstance(components, list) else 0


def _reject(error: OperationRejected) -> None:
    logger.warning(f"Rejected batch at {error.stage} stage: {error.reason}")
    raise error


def process_operations(
    schema: dict[str, Any] | DesignSchema,
    operations: Any,
    *,
    warn_on_missing_target: bool | None = None,
) -> PipelineResult:
    """Validate and apply an operation batch to a schema.

    Args:
        schema: The current persisted schema. Never mutated.
        operations: Loosely typed operation list.
        warn_on_missing_target: Passed to the applicator.

    Returns:
        PipelineResult with the new schema and any warnings.

    Raises:
        SchemaRejected: The input schema is invalid.
        OperationsRejected: The batch is structurally invalid.
        ReferenceRejected: An identity operation names an unknown id.
        ResultRejected: The resulting schema is invalid.
    """
    start = time.perf_counter()
    document = schema.to_document() if isinstance(schema, DesignSchema) else schema

    result = validate_schema(document)
    if not result:
        _reject(SchemaRejected(result.error, result))

    result = validate_operations(operations)
    if not result:
        _reject(OperationsRejected(result.error, result))

    parsed = [parse_operation(operation) for operation in operations]

    result = validate_component_ids(parsed, document)
    if not result:
        component_id = result.error.partition(": ")[2]
        _reject(ReferenceRejected(result.error, component_id, result))

    applied = apply_operations(
        document, parsed, warn_on_missing_target=warn_on_missing_target
    )

    result = validate_schema(applied.schema)
    if not result:
        _reject(ResultRejected(result.error, result))

    summary = {
        "operations": [summarize_operation(operation) for operation in parsed],
        "operationCount": len(parsed),
        "componentsBefore": _component_count(document),
        "componentsAfter": _component_count(applied.schema),
        "warningCount": len(applied.warnings),
        "durationMs": round((time.perf_counter() - start) * 1000, 2),
    }
    logger.info(
        f"Applied {summary['operationCount']} operation(s): "
        f"components {summary['componentsBefore']} -> {summary['componentsAfter']}, "
        f"{summary['warningCount']} warning(s), {summary['durationMs']}ms"
    )
    logger.debug(f"Operation summary: {summary['operations']}")

    return PipelineResult(
        schema=applied.schema,
        warnings=applied.warnings,
        operations=parsed,
        summary=summary,
    )
