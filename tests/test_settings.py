"""Tests for xdgicons.config.settings."""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path

import pytest
from PySide6.QtCore import QSettings

from xdgicons.config.settings import IconSettings


@pytest.fixture
def settings(tmp_path: Path) -> IconSettings:
    qs = QSettings(str(tmp_path / "xdgicons.ini"), QSettings.Format.IniFormat)
    return IconSettings(qs)


def test_defaults(settings: IconSettings) -> None:
    assert settings.default_theme == "Adwaita"
    assert settings.fallback_dirs == ["/usr/share/icons", "/usr/share/pixmaps"]
    assert settings.cache_max_age_hours == 4.0
    assert settings.cache_max_age == timedelta(hours=4)


def test_default_theme_round_trip(settings: IconSettings) -> None:
    settings.default_theme = "  Papirus  "
    assert settings.default_theme == "Papirus"
    settings.default_theme = "   "
    assert settings.default_theme == "Adwaita"


def test_fallback_dirs_round_trip(settings: IconSettings) -> None:
    settings.fallback_dirs = ["/opt/icons", " ", "/opt/pixmaps"]
    assert settings.fallback_dirs == ["/opt/icons", "/opt/pixmaps"]
    settings.fallback_dirs = []
    assert settings.fallback_dirs == ["/usr/share/icons", "/usr/share/pixmaps"]


def test_cache_max_age_rejects_non_positive(settings: IconSettings) -> None:
    settings.cache_max_age_hours = 12
    assert settings.cache_max_age == timedelta(hours=12)
    settings.cache_max_age_hours = 0
    assert settings.cache_max_age_hours == 4.0


def test_settings_persist_to_file(tmp_path: Path) -> None:
    path = str(tmp_path / "xdgicons.ini")
    first = IconSettings(QSettings(path, QSettings.Format.IniFormat))
    first.default_theme = "Breeze"
    first.sync()

    second = IconSettings(QSettings(path, QSettings.Format.IniFormat))
    assert second.default_theme == "Breeze"


def test_derived_paths_follow_xdg_cache(settings: IconSettings, monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    assert settings.cache_file_path == tmp_path / "cache" / "libxdg-icons.json"
    assert settings.log_dir == tmp_path / "cache" / "xdgicons" / "logs"
    assert settings.log_dir.is_dir()
