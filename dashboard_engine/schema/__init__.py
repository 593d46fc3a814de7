"""Schema module - authoritative source for dashboard design documents.

This module provides:
- Pydantic models for DesignSchema and its parts
- Component type definitions with rich metadata
- The recognized style vocabulary
- Factory functions for the known starting states

Example usage:
    >>> from dashboard_engine.schema import DesignSchema, get_default_schema
    >>> document = get_default_schema()
    >>> DesignSchema.from_document(document).component_ids()
    ['table1', 'chart1']
"""

from .lib import (
    COMPONENT_REGISTRY,
    DEFAULT_THEME,
    MAX_COLUMNS,
    MAX_COMPONENTS,
    MIN_COLUMNS,
    REQUIRED_THEME_FIELDS,
    STYLE_KEYS,
    AlignItems,
    Component,
    ComponentCategory,
    ComponentMeta,
    ComponentType,
    DateRange,
    DesignSchema,
    Filters,
    JustifyContent,
    Layout,
    Position,
    SchemaModel,
    SortOrder,
    Theme,
    ThemeMode,
    build_schema,
    export_component_enum_schema,
    export_json_schema,
    get_blank_schema,
    get_component_meta,
    get_components_by_category,
    get_dark_blank_schema,
    get_dark_default_schema,
    get_default_schema,
    is_chart_type,
    is_known_style_key,
    resolve_alias,
)

__all__ = [
    # Limits
    "MAX_COMPONENTS",
    "MIN_COLUMNS",
    "MAX_COLUMNS",
    "REQUIRED_THEME_FIELDS",
    "DEFAULT_THEME",
    # Enums
    "ThemeMode",
    "ComponentCategory",
    "ComponentType",
    "SortOrder",
    "AlignItems",
    "JustifyContent",
    # Metadata
    "ComponentMeta",
    "COMPONENT_REGISTRY",
    "STYLE_KEYS",
    "get_component_meta",
    "get_components_by_category",
    "is_chart_type",
    "is_known_style_key",
    "resolve_alias",
    # Models
    "SchemaModel",
    "Position",
    "Component",
    "Theme",
    "Layout",
    "DateRange",
    "Filters",
    "DesignSchema",
    # Factories
    "build_schema",
    "get_default_schema",
    "get_dark_default_schema",
    "get_blank_schema",
    "get_dark_blank_schema",
    # Schema export
    "export_json_schema",
    "export_component_enum_schema",
]
