"""Path addressing for writes into schema documents."""

from .lib import (
    PathError,
    PathStep,
    PathTarget,
    PropertyStep,
    SelectorStep,
    component_path,
    parse_path,
    resolve_path,
    set_path_value,
)

__all__ = [
    "PathError",
    "PathStep",
    "PathTarget",
    "PropertyStep",
    "SelectorStep",
    "component_path",
    "parse_path",
    "resolve_path",
    "set_path_value",
]
