"""Reference validation for operation batches.

Identity operations (remove, move, replace, reorder) must name a
component that exists in the schema or is added somewhere in the same
batch. Selector paths in set_style/update are exempt: those degrade to
no-ops at application time.
"""

from typing import Any, Iterable

from pydantic import ValidationError

from dashboard_engine.operations import (
    AddComponentOperation,
    parse_operation,
    referenced_component_id,
)
from dashboard_engine.schema import DesignSchema

from .lib import ValidationIssue, ValidationResult, _issues_from_pydantic


def _schema_ids(schema: dict[str, Any] | DesignSchema) -> set[str]:
    if isinstance(schema, DesignSchema):
        return set(schema.component_ids())
    components = schema.get("components") or []
    return {
        component["id"]
        for component in components
        if isinstance(component, dict) and isinstance(component.get("id"), str)
    }


def validate_component_ids(
    operations: Iterable[Any],
    schema: dict[str, Any] | DesignSchema,
) -> ValidationResult:
    """Check that every identity operation names a resolvable component.

    Operations are expected to have passed structural validation; any
    that still cannot be parsed fail the check instead of raising.

    Args:
        operations: Operation batch (models or dicts).
        schema: Schema the batch will be applied to.

    Returns:
        ValidationResult; on failure `error` reads
        "Operation references unknown component ID: <id>" for the first
        dangling reference, and `errors` lists all of them. Unparseable
        operations yield "Operation validation failed: ..." instead.
    """
    parsed = []
    invalid: list[ValidationIssue] = []
    for index, operation in enumerate(operations):
        try:
            parsed.append(parse_operation(operation))
        except ValidationError as e:
            invalid.extend(_issues_from_pydantic(e, index))
    if invalid:
        return ValidationResult.failed("Operation validation failed", invalid)

    known = _schema_ids(schema)
    known.update(
        operation.component.id
        for operation in parsed
        if isinstance(operation, AddComponentOperation)
    )

    issues: list[ValidationIssue] = []
    for index, operation in enumerate(parsed):
        component_id = referenced_component_id(operation)
        if component_id is not None and component_id not in known:
            issues.append(
                ValidationIssue(
                    path=f"{index}.id",
                    message=f"Operation references unknown component ID: {component_id}",
                    error_type="unknown_component",
                )
            )

    if issues:
        return ValidationResult(valid=False, error=issues[0].message, errors=issues)
    return ValidationResult.ok()
