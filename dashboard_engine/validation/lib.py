"""Structural validation for schema documents and operation batches.

Validators never raise on bad input. They return a ValidationResult
carrying every issue found plus a single summary string suitable for an
error response.
"""

from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from dashboard_engine.fonts import is_valid_font_name, primary_font_name
from dashboard_engine.operations import (
    AddComponentOperation,
    ReplaceComponentOperation,
    SetStyleOperation,
    UpdateOperation,
    parse_operation,
)
from dashboard_engine.path import PathError, PropertyStep, parse_path
from dashboard_engine.schema import Component, DesignSchema

FONT_FAMILY_KEY = "fontFamily"


@dataclass
class ValidationIssue:
    """A single validation problem.

    Attributes:
        path: Dotted location of the problem (e.g. "theme.mode",
            "2.component.props"). Empty for document-level issues.
        message: Human-readable description.
        error_type: Category of the error.
    """

    path: str
    message: str
    error_type: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}" if self.path else self.message


@dataclass
class ValidationResult:
    """Pass/fail outcome of a validator. Truthy iff valid."""

    valid: bool
    error: str | None = None
    errors: list[ValidationIssue] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.valid

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(valid=True)

    @classmethod
    def failed(cls, prefix: str, issues: list[ValidationIssue]) -> "ValidationResult":
        summary = ", ".join(str(issue) for issue in issues)
        return cls(valid=False, error=f"{prefix}: {summary}", errors=issues)


def _join(*parts: Any) -> str:
    return ".".join(str(part) for part in parts if part != "")


def _issues_from_pydantic(exc: ValidationError, prefix: Any = "") -> list[ValidationIssue]:
    return [
        ValidationIssue(
            path=_join(prefix, *error["loc"]),
            message=error["msg"],
            error_type=error["type"],
        )
        for error in exc.errors()
    ]


def _font_issue(family: Any, path: str) -> ValidationIssue | None:
    if isinstance(family, str) and is_valid_font_name(primary_font_name(family)):
        return None
    return ValidationIssue(
        path=path,
        message=f"Invalid font family {family!r}",
        error_type="invalid_font",
    )


def _style_font_issue(component: Component, prefix: Any) -> ValidationIssue | None:
    # An empty or null style font inherits the theme font
    family = component.style.get(FONT_FAMILY_KEY)
    if not family:
        return None
    return _font_issue(family, _join(prefix, "style", FONT_FAMILY_KEY))


def schema_issues(schema: Any) -> list[ValidationIssue]:
    """Collect every structural issue of a schema document.

    Checks:
        - Shape and field types (theme required fields, layout.columns
          in [1, 4], at most 30 components, closed component types,
          image src)
        - Font-family format on the theme and on each component style
          that sets one
        - Unique component ids
    """
    try:
        model = DesignSchema.from_document(schema)
    except ValidationError as e:
        return _issues_from_pydantic(e)

    issues: list[ValidationIssue] = []

    issue = _font_issue(model.theme.font_family, "theme.fontFamily")
    if issue:
        issues.append(issue)

    for index, component in enumerate(model.components):
        issue = _style_font_issue(component, _join("components", index))
        if issue:
            issues.append(issue)

    # Duplicate ids make selector and identity operations ambiguous
    id_counts: dict[str, int] = {}
    for component_id in model.component_ids():
        id_counts[component_id] = id_counts.get(component_id, 0) + 1
    for component_id, count in id_counts.items():
        if count > 1:
            issues.append(
                ValidationIssue(
                    path="components",
                    message=f"Duplicate ID '{component_id}' appears {count} times",
                    error_type="duplicate_id",
                )
            )

    return issues


def validate_schema(schema: Any) -> ValidationResult:
    """Validate a schema document.

    Args:
        schema: Candidate schema document (loosely typed).

    Returns:
        ValidationResult; on failure `error` reads
        "Schema validation failed: <path>: <message>, ...".

    Example:
        >>> validate_schema(get_default_schema()).valid
        True
    """
    if isinstance(schema, DesignSchema):
        schema = schema.to_document()
    issues = schema_issues(schema)
    if issues:
        return ValidationResult.failed("Schema validation failed", issues)
    return ValidationResult.ok()


def _path_writes_font(path: str) -> bool:
    try:
        steps = parse_path(path)
    except PathError:
        return False
    last = steps[-1]
    return isinstance(last, PropertyStep) and last.name == FONT_FAMILY_KEY


def operation_issues(operation: Any, index: int) -> list[ValidationIssue]:
    """Collect the issues of a single loosely typed operation."""
    try:
        parsed = parse_operation(operation)
    except ValidationError as e:
        return _issues_from_pydantic(e, index)

    issue = None
    if isinstance(parsed, (SetStyleOperation, UpdateOperation)):
        # Writing null or "" clears the font
        if parsed.value and _path_writes_font(parsed.path):
            issue = _font_issue(parsed.value, _join(index, "value"))
    elif isinstance(parsed, (AddComponentOperation, ReplaceComponentOperation)):
        issue = _style_font_issue(parsed.component, _join(index, "component"))
    return [issue] if issue else []


def validate_operations(operations: Any) -> ValidationResult:
    """Validate an operation batch.

    Every item must match exactly one of the seven operation shapes with
    correctly typed fields. Embedded components are held to the same
    rules as schema components, and non-empty font-family writes must
    name a recognizable font.

    Returns:
        ValidationResult; on failure `error` reads
        "Operation validation failed: <index>.<field>: <message>, ...".
    """
    if not isinstance(operations, list):
        issue = ValidationIssue(
            path="",
            message="Operations must be a list",
            error_type="list_type",
        )
        return ValidationResult.failed("Operation validation failed", [issue])

    issues: list[ValidationIssue] = []
    for index, operation in enumerate(operations):
        issues.extend(operation_issues(operation, index))

    if issues:
        return ValidationResult.failed("Operation validation failed", issues)
    return ValidationResult.ok()
