"""Icon name resolution across themes, their parents, hicolor and fallback dirs."""

from __future__ import annotations

import logging
import os
from typing import Iterable

from xdgicons.icons.constants import FALLBACK_ICON_DIRS, HICOLOR_THEME_NAMES, ICON_EXTENSIONS
from xdgicons.icons.models import ThemeMap, ThemeRecord

logger = logging.getLogger(__name__)


def lookup_icon(icon: str, size: int, scale: int, theme: ThemeRecord) -> str | None:
    """Find ``icon`` in the directories of a single theme.

    Only directories whose scale equals the request are considered. The first
    file in a directory that matches the requested size is returned; otherwise
    the closest candidate by size distance, first found winning ties.
    """
    closest: str | None = None
    min_distance = 0
    for rule in theme.directories:
        if rule.scale != scale:
            continue
        for ext in ICON_EXTENSIONS:
            filename = os.path.join(theme.base_path, rule.path_name, f"{icon}.{ext}")
            if not _file_exists(filename):
                continue
            if rule.matches_size(size, scale):
                return filename
            distance = rule.size_distance(size, scale)
            if closest is None or distance < min_distance:
                closest = filename
                min_distance = distance
    return closest


def find_icon_helper(
    icon: str,
    size: int,
    scale: int,
    theme: ThemeRecord,
    theme_map: ThemeMap,
    _visited: set[str] | None = None,
) -> str | None:
    """Search ``theme`` and then its parents depth-first, in declaration order."""
    visited = _visited if _visited is not None else set()
    if theme.name in visited:
        logger.debug("inheritance cycle at theme %r; skipping", theme.name)
        return None
    visited.add(theme.name)

    filename = lookup_icon(icon, size, scale, theme)
    if filename is not None:
        return filename
    for parent_name in theme.parents:
        parent = theme_map.resolve(parent_name)
        if parent is None:
            logger.warning("theme %r inherits unknown theme %r", theme.name, parent_name)
            continue
        filename = find_icon_helper(icon, size, scale, parent, theme_map, visited)
        if filename is not None:
            return filename
    return None


def find_icon(
    icon: str,
    size: int,
    scale: int,
    theme: ThemeRecord | None,
    theme_map: ThemeMap,
    fallback_dirs: Iterable[str] = FALLBACK_ICON_DIRS,
) -> str | None:
    """Resolve ``icon`` through the requested theme, hicolor, then the fallback dirs.

    ``theme`` may be None when the requested theme is not installed, in which
    case resolution starts at hicolor.
    """
    if theme is not None:
        filename = find_icon_helper(icon, size, scale, theme, theme_map)
        if filename is not None:
            return filename
        logger.debug("icon %r not in theme %r or its parents", icon, theme.name)

    hicolor = _hicolor_theme(theme_map)
    if hicolor is not None and hicolor is not theme:
        filename = find_icon_helper(icon, size, scale, hicolor, theme_map)
        if filename is not None:
            return filename
        logger.debug("icon %r not in hicolor", icon)
    elif hicolor is None:
        logger.debug("no hicolor theme installed")

    return lookup_fallback_icon(icon, fallback_dirs)


def lookup_fallback_icon(icon: str, fallback_dirs: Iterable[str] = FALLBACK_ICON_DIRS) -> str | None:
    """Look for ``icon.<ext>`` directly inside each fallback directory."""
    for directory in fallback_dirs:
        for ext in ICON_EXTENSIONS:
            filename = os.path.join(directory, f"{icon}.{ext}")
            if _file_exists(filename):
                return filename
    return None


def _hicolor_theme(theme_map: ThemeMap) -> ThemeRecord | None:
    for name in HICOLOR_THEME_NAMES:
        theme = theme_map.get(name)
        if theme is not None:
            return theme
    return None


def _file_exists(filename: str) -> bool:
    return os.path.isfile(filename)
