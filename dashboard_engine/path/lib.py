"""Slash-delimited path addressing into schema documents.

A path such as `theme/primaryColor` or `components[id=kpi1]/style/color`
is parsed into a sequence of steps:

- PropertyStep: descend into (or create) a named key of an object
- SelectorStep: pick the element of a named list whose key equals a value

Resolution is write-oriented: it yields the container object and the final
key so the caller can assign a value. A selector that matches nothing
resolves to None; the caller treats that as a no-op, not an error.

Example:
    >>> doc = {"components": [{"id": "kpi1", "style": {}}]}
    >>> set_path_value(doc, "components[id=kpi1]/style/color", "#ff0000")
    True
    >>> doc["components"][0]["style"]["color"]
    '#ff0000'
"""

import re
from dataclasses import dataclass
from typing import Any, Union

_SELECTOR_PATTERN = re.compile(
    r"^(?P<collection>[A-Za-z_][A-Za-z0-9_]*)"
    r"\[(?P<key>[A-Za-z_][A-Za-z0-9_]*)=(?P<value>[^\]]+)\]$"
)


class PathError(ValueError):
    """Raised when a path is malformed or cannot be written through."""


@dataclass(frozen=True)
class PropertyStep:
    """Plain property descent."""

    name: str


@dataclass(frozen=True)
class SelectorStep:
    """Element lookup in a list by key equality, e.g. `components[id=x]`."""

    collection: str
    key: str
    value: str


PathStep = Union[PropertyStep, SelectorStep]


@dataclass
class PathTarget:
    """Resolved write location: an object and the key to assign."""

    container: dict[str, Any]
    key: str

    def set(self, value: Any) -> None:
        self.container[self.key] = value


def _unquote(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def _parse_segment(segment: str) -> PathStep:
    if "[" not in segment and "]" not in segment:
        return PropertyStep(segment)

    match = _SELECTOR_PATTERN.match(segment)
    if match is None:
        raise PathError(f"Malformed selector segment: {segment!r}")

    return SelectorStep(
        collection=match.group("collection"),
        key=match.group("key"),
        value=_unquote(match.group("value")),
    )


def parse_path(path: str) -> tuple[PathStep, ...]:
    """Parse a path string into steps.

    Empty segments (leading, trailing or doubled slashes) are ignored.
    Selector values may be quoted: `components[id="kpi1"]`.

    Args:
        path: Slash-delimited path.

    Returns:
        Tuple of parsed steps.

    Raises:
        PathError: If the path is not a string, has no segments, or
            contains a malformed selector.
    """
    if not isinstance(path, str):
        raise PathError(f"Path must be a string, got {type(path).__name__}")

    segments = [segment.strip() for segment in path.split("/")]
    steps = tuple(_parse_segment(segment) for segment in segments if segment)
    if not steps:
        raise PathError(f"Empty path: {path!r}")
    return steps


def _select(current: Any, step: SelectorStep) -> dict[str, Any] | None:
    items = current.get(step.collection) if isinstance(current, dict) else None
    if not isinstance(items, list):
        return None
    for item in items:
        if isinstance(item, dict) and item.get(step.key) == step.value:
            return item
    return None


def resolve_path(
    document: dict[str, Any],
    path: str | tuple[PathStep, ...],
    create: bool = True,
) -> PathTarget | None:
    """Resolve a path to a write location inside a document.

    Args:
        document: Root object (mutated only when `create` adds
            intermediate objects).
        path: Path string or pre-parsed steps.
        create: Create missing intermediate objects; when False a missing
            intermediate resolves to None.

    Returns:
        PathTarget for the final key, or None when a selector matches
        nothing (or an intermediate is missing and `create` is False).

    Raises:
        PathError: If the path is malformed, ends in a selector, or
            descends through a value that is not an object.
    """
    steps = parse_path(path) if isinstance(path, str) else path
    if not steps:
        raise PathError("Empty path")

    final = steps[-1]
    if not isinstance(final, PropertyStep):
        raise PathError(
            f"Path must end in a property name, not a selector: "
            f"{final.collection}[{final.key}={final.value}]"
        )

    current: Any = document
    for step in steps[:-1]:
        if isinstance(step, SelectorStep):
            current = _select(current, step)
            if current is None:
                return None
            continue

        if not isinstance(current, dict):
            raise PathError(f"Cannot descend into {step.name!r}: parent is not an object")

        child = current.get(step.name)
        if child is None:
            if not create:
                return None
            child = current[step.name] = {}
        elif not isinstance(child, dict):
            raise PathError(
                f"Cannot descend through {step.name!r}: "
                f"value is {type(child).__name__}, not an object"
            )
        current = child

    if not isinstance(current, dict):
        raise PathError(f"Cannot set {final.name!r}: parent is not an object")

    return PathTarget(current, final.name)


def set_path_value(document: dict[str, Any], path: str, value: Any) -> bool:
    """Write a value at a path.

    Returns:
        True if the value was written, False if a selector missed.

    Raises:
        PathError: Propagated from resolve_path.
    """
    target = resolve_path(document, path)
    if target is None:
        return False
    target.set(value)
    return True


def component_path(component_id: str, *parts: str) -> str:
    """Build a path rooted at a component selector.

    Example:
        >>> component_path("kpi1", "style", "color")
        'components[id=kpi1]/style/color'
    """
    return "/".join((f"components[id={component_id}]", *parts))
