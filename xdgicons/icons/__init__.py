"""Icon theme parsing, caching and lookup exports."""

from xdgicons.icons.builder import ThemeMapBuilder
from xdgicons.icons.cache import ThemeMapCache
from xdgicons.icons.constants import DEFAULT_THEME_NAME
from xdgicons.icons.lookup import find_icon, find_icon_helper, lookup_fallback_icon, lookup_icon
from xdgicons.icons.models import DirectoryRule, ThemeMap, ThemeRecord
from xdgicons.icons.parser import parse_index_theme
from xdgicons.icons.service import IconService, find_icon_defaults

__all__ = [
    "DEFAULT_THEME_NAME",
    "DirectoryRule",
    "IconService",
    "ThemeMap",
    "ThemeMapBuilder",
    "ThemeMapCache",
    "ThemeRecord",
    "find_icon",
    "find_icon_defaults",
    "find_icon_helper",
    "lookup_fallback_icon",
    "lookup_icon",
    "parse_index_theme",
]
