"""Operation algebra: the closed set of schema mutations."""

from .lib import (
    ID_BEARING_KINDS,
    NUMERIC_PATHS,
    AddComponentOperation,
    MoveComponentOperation,
    Operation,
    OperationKind,
    OperationSkipped,
    RemoveComponentOperation,
    ReorderComponentOperation,
    ReplaceComponentOperation,
    SetStyleOperation,
    UpdateOperation,
    apply_operation,
    coerce_numeric,
    component_document,
    export_operation_schema,
    operation_to_dict,
    parse_operation,
    referenced_component_id,
)

__all__ = [
    "ID_BEARING_KINDS",
    "NUMERIC_PATHS",
    "AddComponentOperation",
    "MoveComponentOperation",
    "Operation",
    "OperationKind",
    "OperationSkipped",
    "RemoveComponentOperation",
    "ReorderComponentOperation",
    "ReplaceComponentOperation",
    "SetStyleOperation",
    "UpdateOperation",
    "apply_operation",
    "coerce_numeric",
    "component_document",
    "export_operation_schema",
    "operation_to_dict",
    "parse_operation",
    "referenced_component_id",
]
