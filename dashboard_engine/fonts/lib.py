"""Font-name recognition.

A font-family value such as `"Open Sans", Arial, sans-serif` is judged by
its primary family (the first comma-separated entry, unquoted). Names are
accepted when they look like a font name; unknown families are allowed
since users may reference custom fonts.
"""

import re
from typing import Any, Mapping

MAX_FONT_NAME_LENGTH = 100

SYSTEM_FONTS: frozenset[str] = frozenset(
    {
        "system-ui",
        "sans-serif",
        "serif",
        "monospace",
        "cursive",
        "fantasy",
        "arial",
        "helvetica",
        "times",
        "courier",
    }
)

POPULAR_WEB_FONTS: tuple[str, ...] = (
    "Roboto",
    "Open Sans",
    "Lato",
    "Montserrat",
    "Oswald",
    "Raleway",
    "Poppins",
    "Source Sans Pro",
    "Playfair Display",
    "Merriweather",
    "Ubuntu",
    "Nunito",
    "PT Sans",
    "Dancing Script",
    "Crimson Text",
    "Lora",
    "Bebas Neue",
    "Fira Sans",
    "Arimo",
    "Noto Sans",
    "Work Sans",
    "Inter",
    "Comfortaa",
    "Quicksand",
    "Josefin Sans",
)

_KNOWN_WEB_FONTS = frozenset(name.lower() for name in POPULAR_WEB_FONTS)

# Anything but quotes, CSS delimiters and control characters.
_FONT_NAME_PATTERN = re.compile(r"^[^\"';{}<>\x00-\x1f\x7f]+$")


def primary_font_name(family: str) -> str:
    """Return the first family of a font-family list, unquoted and trimmed.

    Example:
        >>> primary_font_name('"Open Sans", Arial, sans-serif')
        'Open Sans'
    """
    first = family.split(",")[0]
    return first.strip().replace('"', "").replace("'", "").strip()


def is_valid_font_name(name: Any) -> bool:
    """Check whether a value is an acceptable font name.

    Args:
        name: Candidate font name (a single family, not a list).

    Returns:
        True for non-empty strings under the length limit made of
        font-name characters.
    """
    if not isinstance(name, str):
        return False

    normalized = name.strip()
    if not normalized or len(normalized) >= MAX_FONT_NAME_LENGTH:
        return False

    return bool(_FONT_NAME_PATTERN.match(normalized))


def is_known_font(name: str) -> bool:
    """Check whether a font is a system family or a popular web font."""
    normalized = name.strip().lower()
    return normalized in SYSTEM_FONTS or normalized in _KNOWN_WEB_FONTS


def extract_font_names(schema: Mapping[str, Any]) -> list[str]:
    """Collect the distinct primary font names used by a schema document.

    The theme font comes first, followed by component fonts in render
    order.
    """
    fonts: list[str] = []

    def _add(family: Any) -> None:
        if isinstance(family, str):
            name = primary_font_name(family)
            if name and name not in fonts:
                fonts.append(name)

    theme = schema.get("theme")
    if isinstance(theme, Mapping):
        _add(theme.get("fontFamily"))

    components = schema.get("components")
    if isinstance(components, list):
        for component in components:
            if isinstance(component, Mapping):
                style = component.get("style")
                if isinstance(style, Mapping):
                    _add(style.get("fontFamily"))

    return fonts
