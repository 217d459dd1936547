"""Tests for xdgicons.icons.service."""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from xdgicons.errors import ErrorCode, IconThemeError
from xdgicons.icons.cache import ThemeMapCache
from xdgicons.icons.service import IconService


def _write_theme(icons_dir: Path, dir_name: str, name: str, inherits: str = "") -> Path:
    theme_dir = icons_dir / dir_name
    theme_dir.mkdir(parents=True, exist_ok=True)
    lines = ["[Icon Theme]", f"Name={name}", "Directories=16x16/apps"]
    if inherits:
        lines.append(f"Inherits={inherits}")
    lines += ["[16x16/apps]", "Size=16", "Type=Fixed"]
    (theme_dir / "index.theme").write_text("\n".join(lines) + "\n", encoding="utf-8")
    return theme_dir


def _write_icon(theme_dir: Path, name: str) -> str:
    path = theme_dir / "16x16" / "apps" / f"{name}.png"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"\x89PNG")
    return str(path)


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    return tmp_path / "share"


@pytest.fixture
def pixmaps(tmp_path: Path) -> Path:
    path = tmp_path / "pixmaps"
    path.mkdir()
    return path


@pytest.fixture
def mock_settings(tmp_path, pixmaps):
    settings = MagicMock()
    settings.default_theme = "Foo"
    settings.fallback_dirs = [str(pixmaps)]
    settings.cache_file_path = tmp_path / "cache" / "libxdg-icons.json"
    settings.cache_max_age = timedelta(hours=4)
    return settings


@pytest.fixture
def service(mock_settings, data_dir) -> IconService:
    cache = ThemeMapCache(mock_settings.cache_file_path, data_dirs=lambda: [data_dir])
    return IconService(mock_settings, cache)


class TestIconService:
    def test_exact_match_in_default_theme(self, service, data_dir):
        foo = _write_theme(data_dir / "icons", "foo", "Foo", inherits="hicolor")
        expected = _write_icon(foo, "test")
        assert service.find_icon("test", 16, 1) == expected

    def test_hicolor_when_theme_and_ancestors_miss(self, service, data_dir):
        _write_theme(data_dir / "icons", "foo", "Foo", inherits="Bar")
        _write_theme(data_dir / "icons", "bar", "Bar")
        hicolor = _write_theme(data_dir / "icons", "hicolor", "hicolor")
        expected = _write_icon(hicolor, "test")
        assert service.find_icon("test", 16, 1) == expected

    def test_fallback_directory_when_absent_from_themes(self, service, data_dir, pixmaps):
        _write_theme(data_dir / "icons", "foo", "Foo")
        (pixmaps / "test.png").write_bytes(b"\x89PNG")
        assert service.find_icon("test", 16, 1) == str(pixmaps / "test.png")

    def test_fallback_name_is_tried_once(self, service, data_dir):
        foo = _write_theme(data_dir / "icons", "foo", "Foo")
        expected = _write_icon(foo, "application-x-executable")
        assert service.find_icon("missing-app", 16, 1, "application-x-executable") == expected

    def test_fallback_name_is_not_chained(self, service, data_dir, monkeypatch):
        _write_theme(data_dir / "icons", "foo", "Foo")
        calls: list[tuple[str, str]] = []
        original = IconService.find_icon

        def spy(self, icon, size, scale, fallback="", **kwargs):
            calls.append((icon, fallback))
            return original(self, icon, size, scale, fallback, **kwargs)

        monkeypatch.setattr(IconService, "find_icon", spy)
        assert service.find_icon("missing", 16, 1, "also-missing") is None
        assert calls == [("missing", "also-missing"), ("also-missing", "")]

    def test_explicit_theme_name_overrides_default(self, service, data_dir):
        _write_theme(data_dir / "icons", "foo", "Foo")
        bar = _write_theme(data_dir / "icons", "bar", "Bar")
        expected = _write_icon(bar, "test")
        assert service.find_icon("test", 16, 1, theme_name="bar") == expected

    def test_uninstalled_default_theme_uses_hicolor(self, service, data_dir, mock_settings):
        mock_settings.default_theme = "NotInstalled"
        hicolor = _write_theme(data_dir / "icons", "hicolor", "hicolor")
        expected = _write_icon(hicolor, "test")
        assert service.find_icon("test", 16, 1) == expected

    def test_cache_file_is_written(self, service, data_dir, mock_settings):
        _write_theme(data_dir / "icons", "foo", "Foo")
        service.find_icon("anything", 16, 1)
        assert Path(mock_settings.cache_file_path).exists()

    def test_cache_failure_propagates(self, mock_settings, data_dir):
        cache_file = Path(mock_settings.cache_file_path)
        cache_file.parent.mkdir(parents=True)
        cache_file.write_text("[]", encoding="utf-8")
        service = IconService(mock_settings, ThemeMapCache(cache_file, data_dirs=lambda: [data_dir]))

        with pytest.raises(IconThemeError) as excinfo:
            service.find_icon("test", 16, 1)
        assert excinfo.value.code is ErrorCode.CACHE_READ_FAILED

    def test_default_cache_uses_settings(self, mock_settings):
        service = IconService(mock_settings)
        assert service.cache.cache_file == mock_settings.cache_file_path
        assert service.cache.max_age == timedelta(hours=4)

    def test_theme_with_non_utf8_comment_does_not_hide_hicolor(self, service, data_dir):
        hicolor = _write_theme(data_dir / "icons", "hicolor", "hicolor")
        expected = _write_icon(hicolor, "test")
        legacy = data_dir / "icons" / "legacy"
        legacy.mkdir()
        (legacy / "index.theme").write_bytes(b"[Icon Theme]\nName=Legacy\nComment[fr]=Th\xe8me\n")

        assert service.find_icon("test", 16, 1) == expected

    def test_services_on_one_cache_file_share_the_rebuild_lock(self, mock_settings):
        first = IconService(mock_settings)
        second = IconService(mock_settings)
        assert first.cache is not second.cache
        assert first.cache._rebuild_lock is second.cache._rebuild_lock
