"""XDG base directory lookups driven by environment variables."""

from __future__ import annotations

import os
from pathlib import Path

_SINGLE_DIRS: dict[str, tuple[str, str]] = {
    "data": ("XDG_DATA_HOME", ".local/share"),
    "config": ("XDG_CONFIG_HOME", ".config"),
    "state": ("XDG_STATE_HOME", ".local/state"),
    "cache": ("XDG_CACHE_HOME", ".cache"),
}

_LIST_DIRS: dict[str, tuple[str, str]] = {
    "dataDirs": ("XDG_DATA_DIRS", "/usr/local/share:/usr/share"),
    "configDirs": ("XDG_CONFIG_DIRS", "/etc/xdg"),
}


def get_xdg_directory(key: str) -> str | list[str]:
    """Return a single path for home-style keys, or an ordered list for ``*Dirs`` keys."""
    if key in _SINGLE_DIRS:
        env_var, home_relative = _SINGLE_DIRS[key]
        return _env_or_default(env_var, str(_home() / home_relative))
    if key == "runtime":
        return _env_or_default("XDG_RUNTIME_DIR", "")
    if key in _LIST_DIRS:
        env_var, default = _LIST_DIRS[key]
        return [part for part in _env_or_default(env_var, default).split(":") if part]
    raise KeyError(f"Unknown XDG directory key: {key!r}")


def cache_home() -> Path:
    return Path(get_xdg_directory("cache"))


def data_dirs() -> list[Path]:
    return [Path(entry) for entry in get_xdg_directory("dataDirs")]


def _env_or_default(env_var: str, default: str) -> str:
    value = os.environ.get(env_var, "")
    return value or default


def _home() -> Path:
    home = os.environ.get("HOME", "")
    return Path(home) if home else Path.home()
