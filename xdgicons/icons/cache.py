"""JSON-file cache of the merged theme map with a freshness window."""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
import time
from datetime import timedelta
from pathlib import Path
from typing import Callable, Iterable

from xdgicons import basedir
from xdgicons.errors import ErrorCode, IconThemeError
from xdgicons.icons.builder import ThemeMapBuilder
from xdgicons.icons.constants import CACHE_MAX_AGE
from xdgicons.icons.models import ThemeMap

logger = logging.getLogger(__name__)

_REBUILD_LOCKS: dict[Path, threading.Lock] = {}
_REBUILD_LOCKS_GUARD = threading.Lock()


def _rebuild_lock_for(cache_file: Path) -> threading.Lock:
    """Return the process-wide rebuild lock for ``cache_file``."""
    key = cache_file.resolve()
    with _REBUILD_LOCKS_GUARD:
        return _REBUILD_LOCKS.setdefault(key, threading.Lock())


class ThemeMapCache:
    """Serves the theme map from disk while fresh, rebuilding it when stale.

    The artifact's own mtime is the only freshness signal. Rebuilds of one
    artifact are serialized across every instance in the process; separate
    processes may still race, in which case the last complete write wins.
    """

    def __init__(
        self,
        cache_file: str | Path,
        *,
        max_age: timedelta = CACHE_MAX_AGE,
        data_dirs: Callable[[], Iterable[str | Path]] = basedir.data_dirs,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._cache_file = Path(cache_file)
        self._max_age = max_age
        self._data_dirs = data_dirs
        self._clock = clock
        self._rebuild_lock = _rebuild_lock_for(self._cache_file)

    @property
    def cache_file(self) -> Path:
        return self._cache_file

    @property
    def max_age(self) -> timedelta:
        return self._max_age

    def is_fresh(self) -> bool:
        """Return True when the artifact exists and is no older than ``max_age``."""
        try:
            mtime = self._cache_file.stat().st_mtime
        except (FileNotFoundError, NotADirectoryError):
            return False
        except OSError as exc:
            raise IconThemeError(
                ErrorCode.CACHE_READ_FAILED,
                message=f"Unable to stat {self._cache_file}: {exc}",
                path=self._cache_file,
            ) from exc
        return self._clock() - mtime <= self._max_age.total_seconds()

    def load(self) -> ThemeMap:
        """Return the cached theme map, rebuilding and rewriting it when stale."""
        if self.is_fresh():
            return self.read()
        with self._rebuild_lock:
            if self.is_fresh():
                return self.read()
            return self._rebuild_locked()

    def rebuild(self) -> ThemeMap:
        """Rescan every icon directory and overwrite the artifact."""
        with self._rebuild_lock:
            return self._rebuild_locked()

    def invalidate(self) -> None:
        """Delete the artifact so the next load rebuilds it."""
        try:
            self._cache_file.unlink()
        except FileNotFoundError:
            return
        except OSError as exc:
            raise IconThemeError(
                ErrorCode.CACHE_WRITE_FAILED,
                message=f"Unable to remove {self._cache_file}: {exc}",
                path=self._cache_file,
            ) from exc

    def read(self) -> ThemeMap:
        try:
            content = self._cache_file.read_text(encoding="utf-8")
            return ThemeMap.from_dict(json.loads(content))
        except (OSError, ValueError) as exc:
            raise IconThemeError(
                ErrorCode.CACHE_READ_FAILED,
                message=f"Unable to read icon theme cache {self._cache_file}: {exc}",
                path=self._cache_file,
            ) from exc

    def write(self, theme_map: ThemeMap) -> None:
        payload = json.dumps(theme_map.to_dict(), indent=2)
        tmp_name = ""
        try:
            self._cache_file.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._cache_file.name}.",
                dir=self._cache_file.parent,
            )
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
                handle.write("\n")
            os.replace(tmp_name, self._cache_file)
        except OSError as exc:
            if tmp_name:
                Path(tmp_name).unlink(missing_ok=True)
            raise IconThemeError(
                ErrorCode.CACHE_WRITE_FAILED,
                message=f"Unable to write icon theme cache {self._cache_file}: {exc}",
                path=self._cache_file,
            ) from exc

    def build(self) -> ThemeMap:
        """Scan ``<data dir>/icons`` for every configured data dir; later dirs win."""
        theme_map = ThemeMap()
        for data_dir in self._data_dirs():
            icons_dir = Path(data_dir) / "icons"
            if not icons_dir.is_dir():
                continue
            theme_map = theme_map.merged(ThemeMapBuilder(icons_dir).build())
        return theme_map

    def _rebuild_locked(self) -> ThemeMap:
        started = time.monotonic()
        theme_map = self.build()
        self.write(theme_map)
        logger.info(
            "rebuilt icon theme cache %s with %d themes in %.2fs",
            self._cache_file,
            len(theme_map),
            time.monotonic() - started,
        )
        return theme_map
