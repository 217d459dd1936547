"""Walk an icons directory and collect every theme it contains."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from xdgicons.errors import ErrorCode, IconThemeError
from xdgicons.icons.constants import DESCRIPTOR_FILENAME
from xdgicons.icons.models import ThemeRecord
from xdgicons.icons.parser import parse_index_theme

logger = logging.getLogger(__name__)


class ThemeMapBuilder:
    """Scans a directory tree for index.theme files."""

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def build(self) -> dict[str, ThemeRecord]:
        """Return every theme under the root keyed by its declared name.

        The first unreadable directory or descriptor aborts the whole walk.
        """
        themes: dict[str, ThemeRecord] = {}
        for theme_dir in self.iter_theme_dirs():
            theme = parse_index_theme(theme_dir)
            if theme.name in themes:
                logger.debug(
                    "theme %r at %s replaces %s",
                    theme.name,
                    theme_dir,
                    themes[theme.name].base_path,
                )
            themes[theme.name] = theme
        logger.debug("found %d themes under %s", len(themes), self._root)
        return themes

    def iter_theme_dirs(self):
        """Yield directories holding an index.theme, parents before children."""
        if not self._root.is_dir():
            raise IconThemeError(
                ErrorCode.THEME_SCAN_FAILED,
                message=f"Icon directory does not exist: {self._root}",
                path=self._root,
            )
        for dirpath, dirnames, filenames in os.walk(self._root, onerror=self._raise_walk_error):
            dirnames.sort()
            if DESCRIPTOR_FILENAME in filenames:
                yield Path(dirpath)

    @staticmethod
    def _raise_walk_error(exc: OSError) -> None:
        path = Path(exc.filename) if exc.filename else None
        raise IconThemeError(
            ErrorCode.THEME_SCAN_FAILED,
            message=f"Unable to scan {exc.filename}: {exc.strerror or exc}",
            path=path,
        ) from exc
