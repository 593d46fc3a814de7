"""Authoritative Schema Module for dashboard design documents.

This module serves as the single source of truth for the shape of a
DesignSchema, the per-user dashboard description. It provides:
- Pydantic models for theme, layout, components and filters
- Rich component metadata (descriptions, categories, aliases)
- The recognized style vocabulary for open style maps
- Factory functions for the known starting states

Schemas travel through the engine as JSON documents (plain dicts with
camelCase keys). The models below are the typed view of such a document
and the contract the structural validator checks against.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated, Any, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    StrictStr,
    model_validator,
)
from pydantic.alias_generators import to_camel

# === LIMITS ===

MAX_COMPONENTS = 30
MIN_COLUMNS = 1
MAX_COLUMNS = 4

REQUIRED_THEME_FIELDS: tuple[str, ...] = (
    "mode",
    "primaryColor",
    "fontSize",
    "fontFamily",
)

DEFAULT_THEME: dict[str, str] = {
    "mode": "light",
    "primaryColor": "#3b82f6",
    "fontSize": "16px",
    "fontFamily": "system-ui, sans-serif",
}

DARK_BACKGROUND_COLOR = "#1a1a1a"
DARK_TEXT_COLOR = "#ffffff"


# === ENUMS ===


class ThemeMode(str, Enum):
    """Global color mode."""

    LIGHT = "light"
    DARK = "dark"


class ComponentCategory(str, Enum):
    """High-level component groupings."""

    DATA = "data"
    CHART = "chart"
    CONTENT = "content"


class ComponentType(str, Enum):
    """Closed set of dashboard widget types.

    The generic `chart` type picks its rendering from `props.chartType`;
    the named variants fix the chart kind in the type itself.
    """

    # Data views
    TABLE = "table"
    KPI = "kpi"

    # Charts
    CHART = "chart"
    PIE_CHART = "pie_chart"
    BAR_CHART = "bar_chart"
    LINE_CHART = "line_chart"
    AREA_CHART = "area_chart"
    SCATTER_CHART = "scatter_chart"
    RADAR_CHART = "radar_chart"
    HISTOGRAM = "histogram"
    COMPOSED_CHART = "composed_chart"

    # Content
    TEXT = "text"
    IMAGE = "image"


class SortOrder(str, Enum):
    """Sort direction for global filters."""

    ASC = "asc"
    DESC = "desc"


class AlignItems(str, Enum):
    """Cross-axis alignment of grid items (CSS align-items)."""

    FLEX_START = "flex-start"
    FLEX_END = "flex-end"
    CENTER = "center"
    STRETCH = "stretch"


class JustifyContent(str, Enum):
    """Main-axis distribution of grid items (CSS justify-content)."""

    FLEX_START = "flex-start"
    FLEX_END = "flex-end"
    CENTER = "center"
    SPACE_BETWEEN = "space-between"
    SPACE_AROUND = "space-around"
    SPACE_EVENLY = "space-evenly"


# === COMPONENT METADATA ===


@dataclass(frozen=True)
class ComponentMeta:
    """Rich metadata definition for a dashboard component type.

    `required_props` lists props the structural validator enforces;
    every other prop is advisory and consumers degrade gracefully
    when it is missing.
    """

    type: ComponentType
    category: ComponentCategory
    description: str
    aliases: tuple[str, ...] = field(default_factory=tuple)
    required_props: tuple[str, ...] = field(default_factory=tuple)
    common_props: tuple[str, ...] = field(default_factory=tuple)
    examples: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        """Convert metadata to dictionary for schema export."""
        return {
            "type": self.type.value,
            "category": self.category.value,
            "description": self.description,
            "aliases": list(self.aliases),
            "required_props": list(self.required_props),
            "common_props": list(self.common_props),
            "examples": list(self.examples),
        }


_CHART_PROPS = ("dataSource", "xField", "yField", "title", "colors")


def _chart(
    component_type: ComponentType,
    description: str,
    aliases: tuple[str, ...],
    examples: tuple[str, ...],
) -> ComponentMeta:
    return ComponentMeta(
        type=component_type,
        category=ComponentCategory.CHART,
        description=description,
        aliases=aliases,
        common_props=_CHART_PROPS,
        examples=examples,
    )


COMPONENT_REGISTRY: dict[ComponentType, ComponentMeta] = {
    # === DATA VIEWS ===
    ComponentType.TABLE: ComponentMeta(
        type=ComponentType.TABLE,
        category=ComponentCategory.DATA,
        description="Tabular view of dataset rows with sortable columns",
        aliases=("grid", "data_table", "datagrid", "spreadsheet"),
        common_props=("dataSource", "columns", "dataColumns", "pageSize"),
        examples=("Item listing", "Recent orders", "Price table"),
    ),
    ComponentType.KPI: ComponentMeta(
        type=ComponentType.KPI,
        category=ComponentCategory.DATA,
        description="Single headline metric computed over a data field",
        aliases=("metric", "stat", "counter", "scorecard", "kpi_card"),
        common_props=("dataSource", "field", "calculation", "label", "format"),
        examples=("Total items", "Average price", "Revenue this month"),
    ),
    # === CHARTS ===
    ComponentType.CHART: _chart(
        ComponentType.CHART,
        "Generic chart whose kind is chosen by props.chartType",
        ("graph", "plot", "visualization"),
        ("Monthly totals", "Trend overview"),
    ),
    ComponentType.PIE_CHART: _chart(
        ComponentType.PIE_CHART,
        "Pie chart showing each category's share of a whole",
        ("pie", "donut", "doughnut", "donut_chart"),
        ("Sales by category", "Traffic sources"),
    ),
    ComponentType.BAR_CHART: _chart(
        ComponentType.BAR_CHART,
        "Bar chart comparing values across categories",
        ("bar", "bars", "column_chart"),
        ("Items per category", "Quarterly comparison"),
    ),
    ComponentType.LINE_CHART: _chart(
        ComponentType.LINE_CHART,
        "Line chart showing change of a value over an ordered axis",
        ("line", "trend", "time_series"),
        ("Monthly revenue", "Daily signups"),
    ),
    ComponentType.AREA_CHART: _chart(
        ComponentType.AREA_CHART,
        "Area chart emphasizing cumulative magnitude over time",
        ("area", "stacked_area"),
        ("Cumulative sales", "Volume over time"),
    ),
    ComponentType.SCATTER_CHART: _chart(
        ComponentType.SCATTER_CHART,
        "Scatter plot correlating two numeric fields",
        ("scatter", "scatter_plot", "bubble"),
        ("Price versus rating", "Size versus duration"),
    ),
    ComponentType.RADAR_CHART: _chart(
        ComponentType.RADAR_CHART,
        "Radar chart comparing several measures on radial axes",
        ("radar", "spider", "spider_chart"),
        ("Category profile", "Skill comparison"),
    ),
    ComponentType.HISTOGRAM: _chart(
        ComponentType.HISTOGRAM,
        "Histogram showing the distribution of a numeric field",
        ("distribution", "frequency_chart"),
        ("Price distribution", "Order size buckets"),
    ),
    ComponentType.COMPOSED_CHART: _chart(
        ComponentType.COMPOSED_CHART,
        "Composed chart layering bars, lines and areas on shared axes",
        ("combo", "combo_chart", "mixed_chart"),
        ("Revenue bars with margin line",),
    ),
    # === CONTENT ===
    ComponentType.TEXT: ComponentMeta(
        type=ComponentType.TEXT,
        category=ComponentCategory.CONTENT,
        description="Static text block such as a heading or note",
        aliases=("heading", "title", "label", "paragraph", "note"),
        common_props=("content", "variant"),
        examples=("Dashboard title", "Section note"),
    ),
    ComponentType.IMAGE: ComponentMeta(
        type=ComponentType.IMAGE,
        category=ComponentCategory.CONTENT,
        description="Image or logo loaded from a URL",
        aliases=("picture", "logo", "photo", "banner"),
        required_props=("src",),
        common_props=("src", "alt"),
        examples=("Company logo", "Header banner"),
    ),
}


def get_component_meta(component_type: ComponentType | str) -> ComponentMeta:
    """Get metadata for a component type.

    Args:
        component_type: The component type (enum member or value).

    Returns:
        ComponentMeta with full metadata.

    Raises:
        ValueError: If the value is not a known component type.
    """
    return COMPONENT_REGISTRY[ComponentType(component_type)]


def get_components_by_category(category: ComponentCategory) -> list[ComponentType]:
    """Get all component types in a category."""
    return [ct for ct, meta in COMPONENT_REGISTRY.items() if meta.category == category]


def is_chart_type(component_type: ComponentType | str) -> bool:
    """Check whether a component type renders as a chart."""
    try:
        return get_component_meta(component_type).category == ComponentCategory.CHART
    except ValueError:
        return False


def resolve_alias(alias: str) -> ComponentType | None:
    """Resolve a component alias to its canonical type.

    Args:
        alias: Alias string (e.g., "pie", "metric", "logo").

    Returns:
        ComponentType if the alias is recognized, None otherwise.
    """
    normalized = alias.lower().strip().replace("-", "_").replace(" ", "_")

    try:
        return ComponentType(normalized)
    except ValueError:
        pass

    for ct, meta in COMPONENT_REGISTRY.items():
        if normalized in meta.aliases:
            return ct

    return None


# === STYLE VOCABULARY ===

# Keys the renderer is known to understand, grouped for prompt and
# documentation purposes. Style maps are open: unknown keys pass through.
STYLE_KEYS: dict[str, tuple[str, ...]] = {
    "color": (
        "color",
        "backgroundColor",
        "borderColor",
        "textColor",
        "headerBackgroundColor",
        "headerTextColor",
        "valueColor",
        "labelColor",
        "rowHoverColor",
    ),
    "typography": (
        "fontSize",
        "fontFamily",
        "fontWeight",
        "fontStyle",
        "textAlign",
        "textDecoration",
        "letterSpacing",
        "lineHeight",
        "wordSpacing",
        "textTransform",
        "whiteSpace",
    ),
    "spacing": ("padding", "margin", "gap"),
    "border": ("border", "borderWidth", "borderRadius", "borderStyle"),
    "shadow": ("boxShadow", "textShadow"),
    "size": ("width", "height", "minWidth", "minHeight", "maxWidth", "maxHeight"),
    "display": (
        "display",
        "flexDirection",
        "alignItems",
        "justifyContent",
        "cardStyle",
        "opacity",
        "zIndex",
    ),
    "effect": (
        "transform",
        "backdropFilter",
        "filter",
        "blur",
        "brightness",
        "contrast",
        "saturate",
    ),
    "background": (
        "backgroundImage",
        "backgroundSize",
        "backgroundPosition",
        "backgroundRepeat",
        "objectFit",
        "objectPosition",
    ),
    "text_flow": ("overflowWrap", "wordBreak"),
    "transition": ("transition", "transitionDuration", "transitionTimingFunction"),
    "interaction": (
        "cursor",
        "pointerEvents",
        "userSelect",
        "outline",
        "outlineOffset",
    ),
}


def is_known_style_key(key: str) -> bool:
    """Check whether a style key belongs to the recognized vocabulary."""
    return any(key in keys for keys in STYLE_KEYS.values())


# === MODELS ===

Number = Union[StrictInt, StrictFloat]
NonNegativeNumber = Union[
    Annotated[StrictInt, Field(ge=0)],
    Annotated[StrictFloat, Field(ge=0)],
]


class SchemaModel(BaseModel):
    """Base for document models: camelCase aliases, open extra keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        use_enum_values=True,
    )


class Position(SchemaModel):
    """Explicit grid placement of a component."""

    x: Number
    y: Number
    width: Number | None = None
    height: Number | None = None


class Component(SchemaModel):
    """A single dashboard widget.

    `props` and `style` are open string-keyed maps passed through to the
    renderer; only `props.src` on images is enforced here.
    """

    id: StrictStr = Field(
        ...,
        min_length=1,
        description="Unique identifier within the schema (e.g., 'table1', 'kpi2')",
        examples=["table1", "chart1", "kpi1"],
    )
    type: ComponentType = Field(..., description="Widget type")
    props: dict[str, Any] = Field(
        default_factory=dict,
        description="Type-specific configuration (dataSource, fields, labels)",
    )
    style: dict[str, Any] = Field(
        default_factory=dict,
        description="CSS-like presentation overrides",
    )
    position: Position | None = Field(
        default=None,
        description="Explicit grid placement; omitted means auto-flow",
    )

    @model_validator(mode="after")
    def _image_requires_src(self) -> "Component":
        if self.type == ComponentType.IMAGE:
            src = self.props.get("src")
            if not isinstance(src, str) or not src:
                raise ValueError("Image components must have a src prop")
        return self


class Theme(SchemaModel):
    """Global presentation state."""

    mode: ThemeMode
    primary_color: StrictStr
    font_size: StrictStr
    font_family: StrictStr
    secondary_color: StrictStr | None = None
    accent_color: StrictStr | None = None
    background_color: StrictStr | None = None
    text_color: StrictStr | None = None
    border_color: StrictStr | None = None
    card_background_color: StrictStr | None = None
    shadow_color: StrictStr | None = None
    border_radius: StrictStr | Number | None = None
    spacing: Number | None = None
    transition: StrictStr | None = None


class Layout(SchemaModel):
    """Grid arrangement of the component sequence."""

    columns: StrictInt = Field(
        default=1,
        ge=MIN_COLUMNS,
        le=MAX_COLUMNS,
        description="Number of grid columns (1-4)",
    )
    gap: NonNegativeNumber = Field(default=16, description="Grid gap in pixels")
    padding: Number | StrictStr | None = None
    max_width: StrictStr | Number | None = None
    align_items: AlignItems | None = None
    justify_content: JustifyContent | None = None


class DateRange(SchemaModel):
    """Inclusive date bounds for filtered data views."""

    start: StrictStr | None = None
    end: StrictStr | None = None


class Filters(SchemaModel):
    """Global sort/limit/search state applied to data views."""

    sort_by: StrictStr | None = None
    sort_order: SortOrder | None = None
    limit: NonNegativeNumber | None = None
    search: StrictStr | None = None
    category: StrictStr | None = None
    date_range: DateRange | None = None


class DesignSchema(SchemaModel):
    """Root aggregate: one per user, the unit of persistence.

    Component order is render order and is significant.
    """

    theme: Theme
    layout: Layout
    components: list[Component] = Field(
        default_factory=list,
        max_length=MAX_COMPONENTS,
        description="Ordered widgets; order is render order",
    )
    filters: Filters | None = None

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "DesignSchema":
        """Build the typed view of a JSON document.

        Raises:
            pydantic.ValidationError: If the document does not match.
        """
        return cls.model_validate(document)

    def to_document(self) -> dict[str, Any]:
        """Dump to a JSON document with camelCase keys and no null fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def component_ids(self) -> list[str]:
        """Component ids in render order."""
        return [component.id for component in self.components]


# === FACTORIES ===


def _theme(mode: ThemeMode) -> Theme:
    theme = Theme(
        mode=mode,
        primary_color=DEFAULT_THEME["primaryColor"],
        font_size=DEFAULT_THEME["fontSize"],
        font_family=DEFAULT_THEME["fontFamily"],
    )
    if mode == ThemeMode.DARK:
        theme.background_color = DARK_BACKGROUND_COLOR
        theme.text_color = DARK_TEXT_COLOR
    return theme


def _starter_components() -> list[Component]:
    return [
        Component(
            id="table1",
            type=ComponentType.TABLE,
            props={
                "dataSource": "/api/data",
                "columns": ["id", "title", "category", "price", "date"],
            },
            style={"width": "100%"},
        ),
        Component(
            id="chart1",
            type=ComponentType.CHART,
            props={
                "chartType": "line",
                "dataSource": "/api/data/summary",
                "xField": "month",
                "yField": "total",
            },
            style={"width": "100%", "height": "400px"},
        ),
    ]


def build_schema(mode: ThemeMode | str = ThemeMode.LIGHT, blank: bool = False) -> DesignSchema:
    """Build a starting DesignSchema.

    Args:
        mode: Theme mode of the new schema.
        blank: When True the schema has no components.

    Returns:
        A valid DesignSchema model.
    """
    return DesignSchema(
        theme=_theme(ThemeMode(mode)),
        layout=Layout(columns=1, gap=16),
        components=[] if blank else _starter_components(),
        filters=Filters(sort_by="date", sort_order=SortOrder.DESC),
    )


def get_default_schema() -> dict[str, Any]:
    """Populated light schema with a table and a line chart."""
    return build_schema(ThemeMode.LIGHT).to_document()


def get_dark_default_schema() -> dict[str, Any]:
    """Populated dark schema with a table and a line chart."""
    return build_schema(ThemeMode.DARK).to_document()


def get_blank_schema() -> dict[str, Any]:
    """Light schema with no components."""
    return build_schema(ThemeMode.LIGHT, blank=True).to_document()


def get_dark_blank_schema() -> dict[str, Any]:
    """Dark schema with no components."""
    return build_schema(ThemeMode.DARK, blank=True).to_document()


# === SCHEMA EXPORT ===


def export_json_schema() -> dict[str, Any]:
    """Export the DesignSchema JSON Schema (camelCase keys).

    Returns:
        JSON Schema dict suitable for validation or model prompts.
    """
    return DesignSchema.model_json_schema(by_alias=True)


def export_component_enum_schema() -> dict[str, str]:
    """Map each component type value to its description."""
    return {ct.value: COMPONENT_REGISTRY[ct].description for ct in ComponentType}


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
