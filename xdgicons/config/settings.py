"""Icon lookup settings via QSettings."""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path

from PySide6.QtCore import QSettings

from xdgicons import basedir
from xdgicons.icons.constants import (
    CACHE_FILENAME,
    CACHE_MAX_AGE,
    DEFAULT_THEME_NAME,
    FALLBACK_ICON_DIRS,
)

_DEFAULT_MAX_AGE_HOURS = CACHE_MAX_AGE.total_seconds() / 3600


class IconSettings:
    """Wraps QSettings for persistent icon lookup configuration."""

    def __init__(self, qsettings: QSettings | None = None) -> None:
        self._qs = qsettings if qsettings is not None else QSettings("xdgicons", "xdgicons")

    # -- theme --

    @property
    def default_theme(self) -> str:
        raw = self._qs.value("icons/default_theme", DEFAULT_THEME_NAME, type=str)
        value = (raw or "").strip()
        return value or DEFAULT_THEME_NAME

    @default_theme.setter
    def default_theme(self, value: str) -> None:
        cleaned = (value or "").strip() or DEFAULT_THEME_NAME
        self._qs.setValue("icons/default_theme", cleaned)

    # -- fallback directories --

    @property
    def fallback_dirs(self) -> list[str]:
        raw = self._qs.value("icons/fallback_dirs", list(FALLBACK_ICON_DIRS))
        if isinstance(raw, str):
            raw = [raw]
        if not isinstance(raw, list):
            return list(FALLBACK_ICON_DIRS)
        cleaned = [item.strip() for item in raw if isinstance(item, str) and item.strip()]
        return cleaned or list(FALLBACK_ICON_DIRS)

    @fallback_dirs.setter
    def fallback_dirs(self, value: list[str]) -> None:
        cleaned = [item.strip() for item in value if isinstance(item, str) and item.strip()]
        self._qs.setValue("icons/fallback_dirs", cleaned or list(FALLBACK_ICON_DIRS))

    # -- cache --

    @property
    def cache_max_age_hours(self) -> float:
        value = self._qs.value("cache/max_age_hours", _DEFAULT_MAX_AGE_HOURS, type=float)
        if not value or value <= 0:
            return _DEFAULT_MAX_AGE_HOURS
        return float(value)

    @cache_max_age_hours.setter
    def cache_max_age_hours(self, value: float) -> None:
        if value <= 0:
            value = _DEFAULT_MAX_AGE_HOURS
        self._qs.setValue("cache/max_age_hours", float(value))

    @property
    def cache_max_age(self) -> timedelta:
        return timedelta(hours=self.cache_max_age_hours)

    @property
    def cache_file_path(self) -> Path:
        return basedir.cache_home() / CACHE_FILENAME

    # -- helpers --

    @property
    def log_dir(self) -> Path:
        path = basedir.cache_home() / "xdgicons" / "logs"
        path.mkdir(parents=True, exist_ok=True)
        return path

    def sync(self) -> None:
        self._qs.sync()
