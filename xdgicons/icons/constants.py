"""Icon theme lookup constants."""

from __future__ import annotations

from datetime import timedelta

DESCRIPTOR_FILENAME = "index.theme"
THEME_SECTION = "Icon Theme"

ICON_EXTENSIONS: tuple[str, ...] = ("png", "svg", "xpm")

DEFAULT_THEME_NAME = "Adwaita"
HICOLOR_THEME_NAMES: tuple[str, ...] = ("hicolor", "Hicolor")

FALLBACK_ICON_DIRS: tuple[str, ...] = (
    "/usr/share/icons",
    "/usr/share/pixmaps",
)

CACHE_FILENAME = "libxdg-icons.json"
CACHE_MAX_AGE = timedelta(hours=4)

TYPE_FIXED = "Fixed"
TYPE_SCALED = "Scaled"
TYPE_THRESHOLD = "Threshold"
