"""Context-aware schema reduction for model prompts.

A model asked to edit a dashboard needs different parts of the current
schema depending on the request: a theme change only needs component
ids for reference, a style change needs each component's style, and so
on. optimize_schema_for_prompt returns the smallest useful view.
"""

import copy
import json
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

from dashboard_engine.schema import ComponentType, DesignSchema

# Components beyond this count are always reduced to id/type
MANY_COMPONENTS = 10

VAGUE_KEYWORDS: tuple[str, ...] = (
    "like",
    "similar",
    "make it",
    "style of",
    "look like",
    "resemble",
    "inspired by",
    "netflix",
    "uber",
    "spotify",
    "amazon",
)

_THEME_WORDS = re.compile(r"\b(dark|light|theme|color|background|mode)\b")
_STRUCTURE_WORDS = re.compile(r"\b(add|remove|delete|create|show|hide|column|chart|kpi|table|text)\b")
_COMPONENT_WORDS = re.compile(r"\b(add|remove|delete|reorder|move|replace)\b")
_SIMPLE_COMPONENT_REQUEST = re.compile(
    r"\b(add|remove)\s+(a|an|the)?\s*(chart|kpi|table|text|pie|bar|line|image)\b"
)
_STYLE_WORDS = re.compile(r"\b(style|color|size|font|bigger|smaller|padding|margin|border|shadow)\b")

# Props kept for component-structure requests, when present
COMPONENT_PROP_KEYS: tuple[str, ...] = ("columns", "chartType", "xField", "yField")

# Style keys kept for vague "make it look like X" requests
VAGUE_STYLE_KEYS: tuple[str, ...] = (
    "backgroundColor",
    "backgroundImage",
    "color",
    "fontFamily",
    "cardStyle",
)


class RequestKind(str, Enum):
    """What part of the schema a request is about."""

    THEME = "theme"
    COMPONENTS = "components"
    STYLE = "style"
    VAGUE = "vague"
    GENERAL = "general"


@dataclass
class PromptContext:
    """Schema context prepared for a prompt.

    Attributes:
        prompt: Original user request.
        request_kind: Classification that selected the reduction.
        schema: Reduced schema to embed in the prompt.
        total_tokens_estimate: Rough token count of the serialized schema.
    """

    prompt: str
    request_kind: RequestKind
    schema: dict[str, Any]
    total_tokens_estimate: int = 0


def is_vague_request(prompt: str) -> bool:
    """Check whether a request describes a look rather than an edit.

    Example:
        >>> is_vague_request("make it look like Spotify")
        True
    """
    lower = prompt.lower()
    return any(keyword in lower for keyword in VAGUE_KEYWORDS)


def classify_request(prompt: str) -> RequestKind:
    """Classify a request by the schema parts it needs."""
    lower = prompt.lower()
    if _THEME_WORDS.search(lower) and not _STRUCTURE_WORDS.search(lower):
        return RequestKind.THEME
    if _COMPONENT_WORDS.search(lower):
        return RequestKind.COMPONENTS
    if _STYLE_WORDS.search(lower):
        return RequestKind.STYLE
    if is_vague_request(prompt):
        return RequestKind.VAGUE
    return RequestKind.GENERAL


def _clean(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: _clean(item) for key, item in value.items() if item is not None}
    if isinstance(value, list):
        return [_clean(item) for item in value if item is not None]
    return copy.deepcopy(value)


def _minimal(component: dict[str, Any]) -> dict[str, Any]:
    return {"id": component.get("id"), "type": component.get("type")}


def _with_props(component: dict[str, Any]) -> dict[str, Any]:
    reduced = _minimal(component)
    props = component.get("props")
    if isinstance(props, dict):
        kept: dict[str, Any] = {}
        if "dataSource" in props:
            kept["dataSource"] = props["dataSource"]
        for key in COMPONENT_PROP_KEYS:
            if props.get(key):
                kept[key] = props[key]
        if component.get("type") == ComponentType.IMAGE.value and props.get("src"):
            kept["src"] = props["src"]
        reduced["props"] = kept
    return reduced


def _with_style(component: dict[str, Any], keys: tuple[str, ...] | None = None) -> dict[str, Any]:
    reduced = _minimal(component)
    style = component.get("style")
    if isinstance(style, dict):
        if keys is not None:
            style = {key: style[key] for key in keys if key in style}
        reduced["style"] = style
    return reduced


def _overview(cleaned: dict[str, Any], components: list[dict[str, Any]]) -> dict[str, Any]:
    reduced = {
        "theme": cleaned.get("theme"),
        "layout": cleaned.get("layout"),
        "components": components,
        "filters": cleaned.get("filters"),
    }
    return {key: value for key, value in reduced.items() if value is not None}


def optimize_schema_for_prompt(
    schema: dict[str, Any] | DesignSchema, prompt: str
) -> dict[str, Any]:
    """Reduce a schema to the parts a request needs.

    Args:
        schema: Current schema. Never mutated.
        prompt: The user's request.

    Returns:
        A reduced copy of the schema with null values removed.
    """
    if isinstance(schema, DesignSchema):
        schema = schema.to_document()
    cleaned = _clean(schema)
    components = [c for c in cleaned.get("components") or [] if isinstance(c, dict)]
    kind = classify_request(prompt)
    lower = prompt.lower()

    if kind == RequestKind.THEME:
        return _overview(cleaned, [_minimal(c) for c in components])

    if kind == RequestKind.COMPONENTS:
        if (
            not components
            or len(components) > MANY_COMPONENTS
            or _SIMPLE_COMPONENT_REQUEST.search(lower)
        ):
            return _overview(cleaned, [_minimal(c) for c in components])
        return {**cleaned, "components": [_with_props(c) for c in components]}

    if kind == RequestKind.STYLE:
        return {**cleaned, "components": [_with_style(c) for c in components]}

    if kind == RequestKind.VAGUE:
        return _overview(cleaned, [_with_style(c, VAGUE_STYLE_KEYS) for c in components])

    return cleaned


def build_prompt_context(
    schema: dict[str, Any] | DesignSchema, prompt: str
) -> PromptContext:
    """Prepare the reduced schema for a prompt along with its metadata."""
    reduced = optimize_schema_for_prompt(schema, prompt)
    serialized = json.dumps(reduced, separators=(",", ":"))
    return PromptContext(
        prompt=prompt,
        request_kind=classify_request(prompt),
        schema=reduced,
        total_tokens_estimate=len(serialized) // 4,  # Rough estimate
    )
