"""index.theme descriptor parsing."""

from __future__ import annotations

import logging
import re
from dataclasses import replace
from pathlib import Path

from xdgicons.errors import ErrorCode, IconThemeError
from xdgicons.icons.constants import DESCRIPTOR_FILENAME, THEME_SECTION, TYPE_THRESHOLD
from xdgicons.icons.models import DirectoryRule, ThemeRecord

logger = logging.getLogger(__name__)

_INT_RE = re.compile(r"[+-]?[0-9]+")

_INT_FIELDS: dict[str, str] = {
    "Size": "size",
    "MinSize": "min_size",
    "MaxSize": "max_size",
    "Scale": "scale",
    "Threshold": "threshold",
}
_STR_FIELDS: dict[str, str] = {
    "Type": "type",
    "Context": "context",
}


def parse_index_theme(theme_dir: str | Path) -> ThemeRecord:
    """Parse ``theme_dir/index.theme`` into a ThemeRecord.

    Lines without ``=`` are skipped, and integer fields that fail to parse are
    stored as 0. Sections for directories that were not listed in
    ``Directories`` (or ``ScaledDirectories``) are ignored.
    """
    theme_dir = Path(theme_dir)
    index_path = theme_dir / DESCRIPTOR_FILENAME
    try:
        lines = index_path.read_text(encoding="utf-8", errors="replace").splitlines()
    except OSError as exc:
        raise IconThemeError(
            ErrorCode.DESCRIPTOR_READ_FAILED,
            message=f"Unable to read {index_path}: {exc}",
            path=index_path,
        ) from exc

    name = ""
    parents: list[str] = []
    rules: dict[str, DirectoryRule] = {}
    section = ""

    for raw in lines:
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("[") and line.endswith("]"):
            section = line[1:-1].strip()
            continue
        key, sep, value = line.partition("=")
        if not sep:
            continue
        key, value = key.strip(), value.strip()

        if section == THEME_SECTION:
            if key == "Name":
                name = value
            elif key == "Inherits":
                parents = _split_list(value)
            elif key in ("Directories", "ScaledDirectories"):
                for dir_name in _split_list(value):
                    rules.setdefault(dir_name, DirectoryRule(path_name=dir_name, type=TYPE_THRESHOLD, scale=1))
        elif section in rules:
            rules[section] = _apply_key(rules[section], key, value)

    if not name:
        name = theme_dir.name
        logger.debug("%s declares no Name; using directory name %r", index_path, name)

    theme = ThemeRecord(
        name=name,
        base_path=str(theme_dir),
        parents=tuple(parents),
        directories=tuple(rules.values()),
    )
    logger.debug(
        "parsed theme %r from %s (%d directories, parents=%s)",
        theme.name,
        theme_dir,
        len(theme.directories),
        list(theme.parents),
    )
    return theme


def _apply_key(rule: DirectoryRule, key: str, value: str) -> DirectoryRule:
    if key in _INT_FIELDS:
        return replace(rule, **{_INT_FIELDS[key]: _parse_int(value)})
    if key in _STR_FIELDS:
        return replace(rule, **{_STR_FIELDS[key]: value})
    return rule


def _parse_int(value: str) -> int:
    if not _INT_RE.fullmatch(value):
        return 0
    return int(value)


def _split_list(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]
