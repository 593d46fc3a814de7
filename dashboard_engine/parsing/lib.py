"""Best-effort parsing of model responses into operation candidates.

Language models are asked for bare JSON but regularly wrap it in
markdown fences, prose or trailing commas. parse_operations_response
recovers the operation list from such text; sanitize_operations then
normalizes the loosely typed candidates into operation shapes, dropping
the ones that cannot be salvaged.
"""

import json
import logging
import re
from typing import Any, Callable, Iterable

from dashboard_engine.config import EnvVar, get_environment
from dashboard_engine.operations import OperationKind
from dashboard_engine.schema import ComponentType

logger = logging.getLogger(__name__)

# Markdown fence cleanup (pattern, replacement)
FENCE_PATTERNS: list[tuple[str, str]] = [
    (r"^```json\s*", ""),
    (r"^```\s*", ""),
    (r"\s*```$", ""),
]

# Trailing commas before closing braces/brackets
TRAILING_COMMA_PATTERNS: list[tuple[str, str]] = [
    (r",\s*}", "}"),
    (r",\s*]", "]"),
]

_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")
_ARRAY_PATTERN = re.compile(r"\[[\s\S]*\]")

_COMPONENT_TYPES = frozenset(ct.value for ct in ComponentType)


class OperationParseError(ValueError):
    """Raised when a model response yields no usable operations."""


def _apply_patterns(content: str, patterns: list[tuple[str, str]]) -> str:
    for pattern, replacement in patterns:
        content = re.sub(pattern, replacement, content, flags=re.IGNORECASE)
    return content.strip()


def _try_load(content: str) -> Any:
    try:
        return json.loads(content)
    except json.JSONDecodeError:
        return None


def decode_response(content: str, repair: bool = True) -> Any:
    """Decode JSON from model text.

    Tries, in order: a direct parse, stripping markdown fences, removing
    trailing commas, the outermost {...} and the outermost [...].
    Only the direct parse runs when repair is False.

    Raises:
        OperationParseError: If no strategy yields JSON.
    """
    cleaned = content.strip()
    parsed = _try_load(cleaned)
    if parsed is not None:
        return parsed
    if not repair:
        raise OperationParseError("Model response is not valid JSON")

    cleaned = _apply_patterns(cleaned, FENCE_PATTERNS)
    parsed = _try_load(cleaned)
    if parsed is not None:
        logger.debug("Parsed response after removing code fences")
        return parsed

    cleaned = _apply_patterns(cleaned, TRAILING_COMMA_PATTERNS)
    parsed = _try_load(cleaned)
    if parsed is not None:
        logger.debug("Parsed response after removing trailing commas")
        return parsed

    for pattern in (_OBJECT_PATTERN, _ARRAY_PATTERN):
        match = pattern.search(cleaned)
        if match:
            parsed = _try_load(match.group())
            if parsed is not None:
                logger.debug("Parsed JSON extracted from surrounding text")
                return parsed

    raise OperationParseError(
        "Failed to parse JSON response. The model returned invalid JSON."
    )


def parse_operations_response(content: str, *, repair: bool | None = None) -> list[Any]:
    """Extract the raw operation list from a model response.

    A top-level array is the operation list. A top-level object
    contributes its "operations" key (missing means no operations).

    Args:
        content: Raw model output.
        repair: Enable repair strategies. None reads DASHBOARD_REPAIR_JSON.

    Returns:
        List of unsanitized operation candidates.

    Raises:
        OperationParseError: If the content cannot be decoded or does not
            hold an operation list.
    """
    if not isinstance(content, str) or not content.strip():
        raise OperationParseError("Empty model response")
    if repair is None:
        repair = get_environment(EnvVar.DASHBOARD_REPAIR_JSON)

    parsed = decode_response(content, repair=bool(repair))

    if isinstance(parsed, list):
        return parsed
    if isinstance(parsed, dict):
        operations = parsed.get("operations") or []
        if isinstance(operations, list):
            return operations
    raise OperationParseError(
        f"Expected an operation list, got {type(parsed).__name__}"
    )


# === SANITIZATION ===


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _sanitize_path_write(candidate: dict[str, Any]) -> dict[str, Any] | None:
    if not candidate.get("path") or "value" not in candidate:
        return None
    return {"op": candidate["op"], "path": str(candidate["path"]), "value": candidate["value"]}


def _sanitize_component(raw: Any) -> dict[str, Any] | None:
    if not isinstance(raw, dict) or not raw.get("id") or not raw.get("type"):
        return None
    component_type = str(raw["type"])
    if component_type not in _COMPONENT_TYPES:
        logger.warning(f"Invalid component type: {component_type}")
        return None
    return {
        "id": str(raw["id"]),
        "type": component_type,
        "props": raw.get("props") or {},
        "style": raw.get("style") or {},
    }


def _sanitize_add(candidate: dict[str, Any]) -> dict[str, Any] | None:
    component = _sanitize_component(candidate.get("component"))
    if component is None:
        return None
    return {"op": "add_component", "component": component}


def _sanitize_remove(candidate: dict[str, Any]) -> dict[str, Any] | None:
    if not candidate.get("id"):
        return None
    return {"op": "remove_component", "id": str(candidate["id"])}


def _sanitize_replace(candidate: dict[str, Any]) -> dict[str, Any] | None:
    component = _sanitize_component(candidate.get("component"))
    if not candidate.get("id") or component is None:
        return None
    return {"op": "replace_component", "id": str(candidate["id"]), "component": component}


def _sanitize_move(candidate: dict[str, Any]) -> dict[str, Any] | None:
    position = candidate.get("position")
    if (
        not candidate.get("id")
        or not isinstance(position, dict)
        or not _is_number(position.get("x"))
        or not _is_number(position.get("y"))
    ):
        return None

    sanitized_position = {"x": position["x"], "y": position["y"]}
    for key in ("width", "height"):
        if _is_number(position.get(key)):
            sanitized_position[key] = position[key]
    return {"op": "move_component", "id": str(candidate["id"]), "position": sanitized_position}


def _sanitize_reorder(candidate: dict[str, Any]) -> dict[str, Any] | None:
    new_index = candidate.get("newIndex")
    if isinstance(new_index, float) and new_index.is_integer():
        new_index = int(new_index)
    if not candidate.get("id") or not isinstance(new_index, int) or isinstance(new_index, bool):
        return None
    return {"op": "reorder_component", "id": str(candidate["id"]), "newIndex": new_index}


_SANITIZERS: dict[OperationKind, Callable[[dict[str, Any]], dict[str, Any] | None]] = {
    OperationKind.SET_STYLE: _sanitize_path_write,
    OperationKind.UPDATE: _sanitize_path_write,
    OperationKind.ADD_COMPONENT: _sanitize_add,
    OperationKind.REMOVE_COMPONENT: _sanitize_remove,
    OperationKind.MOVE_COMPONENT: _sanitize_move,
    OperationKind.REPLACE_COMPONENT: _sanitize_replace,
    OperationKind.REORDER_COMPONENT: _sanitize_reorder,
}


def sanitize_operations(candidates: Iterable[Any]) -> list[dict[str, Any]]:
    """Normalize loosely typed candidates into operation shapes.

    Candidates that are not mappings, carry an unknown op or lack
    required fields are dropped with a warning. Ids are stringified.

    Raises:
        OperationParseError: If candidates were given but none survived.
    """
    candidates = list(candidates)
    operations: list[dict[str, Any]] = []

    for candidate in candidates:
        if not isinstance(candidate, dict):
            logger.warning(f"Skipping invalid operation: {candidate!r}")
            continue

        try:
            kind = OperationKind(candidate.get("op"))
        except ValueError:
            logger.warning(f"Skipping operation with invalid op type: {candidate.get('op')!r}")
            continue

        sanitized = _SANITIZERS[kind](candidate)
        if sanitized is None:
            logger.warning(f"Invalid {kind.value} operation: missing or malformed fields")
            continue
        operations.append(sanitized)

    if candidates and not operations:
        raise OperationParseError("No valid operations found in model response")

    logger.debug(f"Sanitized {len(operations)} of {len(candidates)} operation(s)")
    return operations


def parse_and_sanitize(content: str, *, repair: bool | None = None) -> list[dict[str, Any]]:
    """Parse a model response and sanitize the operations it holds."""
    return sanitize_operations(parse_operations_response(content, repair=repair))
