"""Icon resolution bound to the persisted settings and the on-disk theme cache."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from xdgicons.icons.cache import ThemeMapCache
from xdgicons.icons.lookup import find_icon
from xdgicons.icons.models import ThemeMap

if TYPE_CHECKING:
    from xdgicons.config.settings import IconSettings

logger = logging.getLogger(__name__)


class IconService:
    """Resolve icon names against the configured default theme."""

    def __init__(self, settings: IconSettings, cache: ThemeMapCache | None = None) -> None:
        self._settings = settings
        self._cache = cache or ThemeMapCache(
            settings.cache_file_path,
            max_age=settings.cache_max_age,
        )

    @property
    def cache(self) -> ThemeMapCache:
        return self._cache

    def theme_map(self) -> ThemeMap:
        return self._cache.load()

    def find_icon(
        self,
        icon: str,
        size: int,
        scale: int,
        fallback: str = "",
        *,
        theme_name: str | None = None,
    ) -> str | None:
        """Return the path of ``icon``, retrying once with ``fallback`` if given.

        Cache failures propagate as IconThemeError; a missing icon is None.
        """
        theme_map = self._cache.load()
        name = theme_name or self._settings.default_theme
        theme = theme_map.resolve(name)
        if theme is None:
            logger.debug("theme %r is not installed; starting at hicolor", name)

        path = find_icon(icon, size, scale, theme, theme_map, self._settings.fallback_dirs)
        if path is not None:
            return path
        if fallback:
            logger.debug("icon %r not found; retrying with %r", icon, fallback)
            return self.find_icon(fallback, size, scale, "", theme_name=theme_name)
        logger.debug("icon %r not found (size=%d scale=%d)", icon, size, scale)
        return None


def find_icon_defaults(icon: str, size: int, scale: int, fallback: str = "") -> str | None:
    """Resolve ``icon`` with the user's persisted settings and default cache."""
    from xdgicons.config.settings import IconSettings

    return IconService(IconSettings()).find_icon(icon, size, scale, fallback)
