"""Font-name recognition for theme and component typography."""

from .lib import (
    MAX_FONT_NAME_LENGTH,
    POPULAR_WEB_FONTS,
    SYSTEM_FONTS,
    extract_font_names,
    is_known_font,
    is_valid_font_name,
    primary_font_name,
)

__all__ = [
    "MAX_FONT_NAME_LENGTH",
    "POPULAR_WEB_FONTS",
    "SYSTEM_FONTS",
    "extract_font_names",
    "is_known_font",
    "is_valid_font_name",
    "primary_font_name",
]
