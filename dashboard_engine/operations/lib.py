"""Operation algebra for schema documents.

Defines the seven operation shapes as a discriminated union on `op` and
the application semantics of each kind. Every operation degrades to a
no-op on a missing reference instead of raising: operations come from a
language model that may name components that do not (or no longer)
exist.

Policy skips (component cap, duplicate id, non-numeric value for a
numeric path) raise OperationSkipped, whose message is the warning the
applicator records.
"""

import logging
import math
import re
from enum import Enum
from typing import Annotated, Any, Callable, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, TypeAdapter
from pydantic.alias_generators import to_camel

from dashboard_engine.path import PropertyStep, parse_path, resolve_path
from dashboard_engine.schema import (
    DEFAULT_THEME,
    MAX_COMPONENTS,
    MIN_COLUMNS,
    REQUIRED_THEME_FIELDS,
    Component,
    Position,
)

logger = logging.getLogger(__name__)


class OperationKind(str, Enum):
    """Discriminator values of the operation union."""

    SET_STYLE = "set_style"
    UPDATE = "update"
    ADD_COMPONENT = "add_component"
    REMOVE_COMPONENT = "remove_component"
    MOVE_COMPONENT = "move_component"
    REPLACE_COMPONENT = "replace_component"
    REORDER_COMPONENT = "reorder_component"


# Kinds whose `id` must name an existing or earlier-added component.
ID_BEARING_KINDS: frozenset[OperationKind] = frozenset(
    {
        OperationKind.REMOVE_COMPONENT,
        OperationKind.MOVE_COMPONENT,
        OperationKind.REPLACE_COMPONENT,
        OperationKind.REORDER_COMPONENT,
    }
)

# Numeric layout/filter paths and the floor applied to coerced strings.
NUMERIC_PATHS: dict[tuple[str, ...], int] = {
    ("layout", "columns"): MIN_COLUMNS,
    ("layout", "gap"): 0,
    ("filters", "limit"): 0,
}

_NUMBER_PATTERN = re.compile(r"-?\d+(?:\.\d+)?")


class OperationSkipped(Exception):
    """An operation was skipped by policy; the message is the warning."""


# === OPERATION MODELS ===


class OperationModel(BaseModel):
    """Base for operation shapes: camelCase aliases, unknown keys ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class SetStyleOperation(OperationModel):
    """Write a value at a style or theme path."""

    op: Literal["set_style"] = "set_style"
    path: StrictStr = Field(..., min_length=1)
    value: Any


class UpdateOperation(OperationModel):
    """Write a value at a layout, filter or props path."""

    op: Literal["update"] = "update"
    path: StrictStr = Field(..., min_length=1)
    value: Any


class AddComponentOperation(OperationModel):
    """Append a new component to the end of the sequence."""

    op: Literal["add_component"] = "add_component"
    component: Component


class RemoveComponentOperation(OperationModel):
    """Delete the component with the given id."""

    op: Literal["remove_component"] = "remove_component"
    id: StrictStr


class MoveComponentOperation(OperationModel):
    """Set the absolute grid position of a component."""

    op: Literal["move_component"] = "move_component"
    id: StrictStr
    position: Position


class ReplaceComponentOperation(OperationModel):
    """Replace a component in place with a new component value."""

    op: Literal["replace_component"] = "replace_component"
    id: StrictStr
    component: Component


class ReorderComponentOperation(OperationModel):
    """Move a component to a new index in the sequence."""

    op: Literal["reorder_component"] = "reorder_component"
    id: StrictStr
    new_index: StrictInt


Operation = Annotated[
    Union[
        SetStyleOperation,
        UpdateOperation,
        AddComponentOperation,
        RemoveComponentOperation,
        MoveComponentOperation,
        ReplaceComponentOperation,
        ReorderComponentOperation,
    ],
    Field(discriminator="op"),
]

OPERATION_ADAPTER: TypeAdapter[Operation] = TypeAdapter(Operation)


def parse_operation(data: Any) -> Operation:
    """Parse loosely typed data into an operation model.

    Operation models are returned unchanged.

    Raises:
        pydantic.ValidationError: If the data matches no operation shape.
    """
    if isinstance(data, OperationModel):
        return data
    return OPERATION_ADAPTER.validate_python(data)


def operation_to_dict(operation: Operation) -> dict[str, Any]:
    """Dump an operation to its JSON form (camelCase, no null fields)."""
    data = operation.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(operation, (SetStyleOperation, UpdateOperation)):
        data.setdefault("value", None)
    return data


def export_operation_schema() -> dict[str, Any]:
    """Export the JSON Schema of the operation union."""
    return OPERATION_ADAPTER.json_schema(by_alias=True)


def referenced_component_id(operation: Operation) -> str | None:
    """Return the component id an identity operation refers to."""
    if OperationKind(operation.op) in ID_BEARING_KINDS:
        return operation.id
    return None


def component_document(component: Component) -> dict[str, Any]:
    """Dump a component model to the document form stored in a schema."""
    return component.model_dump(mode="json", by_alias=True, exclude_none=True)


# === HELPERS ===


def _components(document: dict[str, Any]) -> list[dict[str, Any]]:
    components = document.get("components")
    if components is None:
        components = document["components"] = []
    if not isinstance(components, list):
        raise TypeError("components must be a list")
    return components


def _index_of(components: list[dict[str, Any]], component_id: str) -> int | None:
    for index, component in enumerate(components):
        if isinstance(component, dict) and component.get("id") == component_id:
            return index
    return None


def _round_half_up(number: float) -> int:
    return int(math.floor(number + 0.5))


def coerce_numeric(path: str, value: Any, minimum: int) -> int | float:
    """Coerce a value for a numeric path.

    Numbers are returned unchanged; range checks are left to schema
    validation. Strings contribute their first numeric substring
    ("3 columns" -> 3, "12px" -> 12), rounded half up and raised to
    `minimum`.

    Raises:
        OperationSkipped: If no finite number can be extracted.
    """
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        if math.isfinite(value):
            return value
    elif isinstance(value, str):
        match = _NUMBER_PATTERN.search(value)
        if match:
            return max(minimum, _round_half_up(float(match.group())))

    raise OperationSkipped(f"Ignored non-numeric value {value!r} for {path}")


def _property_names(steps: tuple) -> tuple[str, ...] | None:
    if all(isinstance(step, PropertyStep) for step in steps):
        return tuple(step.name for step in steps)
    return None


def _backfill_theme(document: dict[str, Any], baseline: dict[str, Any]) -> None:
    theme = document.get("theme")
    if not isinstance(theme, dict):
        raise TypeError("theme must be an object")

    previous = baseline.get("theme")
    previous = previous if isinstance(previous, dict) else {}
    for key in REQUIRED_THEME_FIELDS:
        if not theme.get(key):
            theme[key] = previous.get(key) or DEFAULT_THEME[key]
            logger.debug(f"Restored required theme field {key}")


# === APPLICATION ===


def _apply_set_value(
    document: dict[str, Any],
    operation: SetStyleOperation | UpdateOperation,
    baseline: dict[str, Any],
    warn_on_missing_target: bool,
) -> None:
    steps = parse_path(operation.path)
    value = operation.value

    names = _property_names(steps)
    if names in NUMERIC_PATHS:
        value = coerce_numeric(operation.path, value, NUMERIC_PATHS[names])

    target = resolve_path(document, steps)
    if target is None:
        if warn_on_missing_target:
            raise OperationSkipped(
                f"No component matches {operation.path}; {operation.op} ignored"
            )
        logger.debug(f"Selector matched nothing, ignoring {operation.op} {operation.path}")
        return

    target.set(value)

    first = steps[0]
    if isinstance(first, PropertyStep) and first.name == "theme":
        _backfill_theme(document, baseline)


def _apply_add(document: dict[str, Any], operation: AddComponentOperation) -> None:
    components = _components(document)
    component_id = operation.component.id

    if len(components) >= MAX_COMPONENTS:
        raise OperationSkipped(
            f"Maximum {MAX_COMPONENTS} components allowed. "
            f'Component "{component_id}" was not added.'
        )
    if _index_of(components, component_id) is not None:
        raise OperationSkipped(
            f'Component with ID "{component_id}" already exists. Skipping duplicate.'
        )

    components.append(component_document(operation.component))


def _apply_remove(document: dict[str, Any], operation: RemoveComponentOperation) -> None:
    components = _components(document)
    components[:] = [
        component
        for component in components
        if not (isinstance(component, dict) and component.get("id") == operation.id)
    ]


def _apply_move(document: dict[str, Any], operation: MoveComponentOperation) -> None:
    components = _components(document)
    index = _index_of(components, operation.id)
    if index is None:
        return

    component = components[index]
    previous = component.get("position")
    previous = previous if isinstance(previous, dict) else {}
    requested = operation.position

    component["position"] = {
        "x": requested.x,
        "y": requested.y,
        "width": requested.width or previous.get("width") or 1,
        "height": requested.height or previous.get("height") or 1,
    }


def _apply_replace(document: dict[str, Any], operation: ReplaceComponentOperation) -> None:
    components = _components(document)
    index = _index_of(components, operation.id)
    if index is None:
        return

    new_id = operation.component.id
    if new_id != operation.id and _index_of(components, new_id) is not None:
        raise OperationSkipped(
            f'Cannot replace "{operation.id}": component with ID "{new_id}" '
            f"already exists. Skipping duplicate."
        )

    components[index] = component_document(operation.component)


def _apply_reorder(document: dict[str, Any], operation: ReorderComponentOperation) -> None:
    components = _components(document)
    index = _index_of(components, operation.id)
    if index is None or not 0 <= operation.new_index < len(components):
        return

    component = components.pop(index)
    components.insert(operation.new_index, component)


_HANDLERS: dict[OperationKind, Callable[[dict[str, Any], Any], None]] = {
    OperationKind.ADD_COMPONENT: _apply_add,
    OperationKind.REMOVE_COMPONENT: _apply_remove,
    OperationKind.MOVE_COMPONENT: _apply_move,
    OperationKind.REPLACE_COMPONENT: _apply_replace,
    OperationKind.REORDER_COMPONENT: _apply_reorder,
}


def apply_operation(
    document: dict[str, Any],
    operation: Operation,
    baseline: dict[str, Any] | None = None,
    warn_on_missing_target: bool = False,
) -> None:
    """Apply one operation to a document in place.

    Args:
        document: Schema document to mutate.
        operation: Parsed operation.
        baseline: Pre-mutation schema used to restore required theme
            fields; defaults to a snapshot of the document's theme.
        warn_on_missing_target: Raise OperationSkipped when a path
            selector matches no component instead of ignoring it.

    Raises:
        OperationSkipped: For policy skips.
        PathError: For malformed paths.
        TypeError: If the document structure cannot hold the change.
    """
    kind = OperationKind(operation.op)

    if kind in (OperationKind.SET_STYLE, OperationKind.UPDATE):
        if baseline is None:
            theme = document.get("theme")
            baseline = {"theme": dict(theme) if isinstance(theme, dict) else {}}
        _apply_set_value(document, operation, baseline, warn_on_missing_target)
        return

    _HANDLERS[kind](document, operation)
