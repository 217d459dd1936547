"""Icon theme models."""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from xdgicons.icons.constants import TYPE_FIXED, TYPE_SCALED, TYPE_THRESHOLD

_WORD_RE = re.compile(r"\w+")


@dataclass(frozen=True, slots=True)
class DirectoryRule:
    """One icon directory advertised by a theme and its size-matching policy."""

    path_name: str
    type: str = TYPE_THRESHOLD
    size: int = 0
    min_size: int = 0
    max_size: int = 0
    threshold: int = 0
    scale: int = 1
    context: str = ""

    def matches_size(self, size: int, scale: int) -> bool:
        """Return True when the directory serves ``size`` at ``scale`` without scaling."""
        if self.scale != scale:
            return False
        if self.type == TYPE_FIXED:
            return self.size == size
        if self.type == TYPE_SCALED:
            return self.min_size <= size <= self.max_size
        if self.type == TYPE_THRESHOLD:
            return self.size - self.threshold <= size <= self.size + self.threshold
        return False

    def size_distance(self, size: int, scale: int) -> int:
        """Distance in scaled pixels between the request and the directory's range."""
        requested = size * scale
        if self.type == TYPE_FIXED:
            return abs(self.size * self.scale - requested)
        if self.type == TYPE_SCALED:
            low, high = self.min_size * self.scale, self.max_size * self.scale
        elif self.type == TYPE_THRESHOLD:
            low = (self.size - self.threshold) * self.scale
            high = (self.size + self.threshold) * self.scale
        else:
            return 0
        if requested < low:
            return low - requested
        if requested > high:
            return requested - high
        return 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "Type": self.type,
            "PathName": self.path_name,
            "Size": self.size,
            "MinSize": self.min_size,
            "MaxSize": self.max_size,
            "Threshold": self.threshold,
            "Scale": self.scale,
            "Context": self.context,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> DirectoryRule:
        if not isinstance(data, Mapping):
            raise ValueError(f"Expected a directory object, got {type(data).__name__}")
        return cls(
            path_name=_as_str(data, "PathName"),
            type=_as_str(data, "Type"),
            size=_as_int(data, "Size"),
            min_size=_as_int(data, "MinSize"),
            max_size=_as_int(data, "MaxSize"),
            threshold=_as_int(data, "Threshold"),
            scale=_as_int(data, "Scale"),
            context=_as_str(data, "Context"),
        )


@dataclass(frozen=True, slots=True)
class ThemeRecord:
    """A parsed icon theme: its name, parents, location and directory rules."""

    name: str
    base_path: str
    parents: tuple[str, ...] = ()
    directories: tuple[DirectoryRule, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "Name": self.name,
            "Subdirs": [rule.to_dict() for rule in self.directories],
            "Parents": list(self.parents),
            "BasePath": self.base_path,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ThemeRecord:
        if not isinstance(data, Mapping):
            raise ValueError(f"Expected a theme object, got {type(data).__name__}")
        subdirs = data.get("Subdirs") or []
        parents = data.get("Parents") or []
        if not isinstance(subdirs, list) or not isinstance(parents, list):
            raise ValueError(f"Theme {data.get('Name')!r} has malformed Subdirs or Parents")
        return cls(
            name=_as_str(data, "Name"),
            base_path=_as_str(data, "BasePath"),
            parents=tuple(str(parent) for parent in parents),
            directories=tuple(DirectoryRule.from_dict(item) for item in subdirs),
        )


class ThemeMap(Mapping[str, ThemeRecord]):
    """Read-only name-to-theme mapping with case-tolerant parent resolution."""

    def __init__(self, themes: Mapping[str, ThemeRecord] | None = None) -> None:
        self._themes: dict[str, ThemeRecord] = dict(themes or {})
        folded: dict[str, set[str]] = {}
        for key in self._themes:
            folded.setdefault(key.lower(), set()).add(key)
        self._folded = {key: frozenset(names) for key, names in folded.items()}

    def __getitem__(self, name: str) -> ThemeRecord:
        return self._themes[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._themes)

    def __len__(self) -> int:
        return len(self._themes)

    def __repr__(self) -> str:
        return f"ThemeMap({sorted(self._themes)!r})"

    def resolve(self, name: str) -> ThemeRecord | None:
        """Find a theme trying ``name`` verbatim, lower-cased, upper-cased, then title-cased."""
        theme = self._themes.get(name)
        if theme is not None:
            return theme
        spellings = self._folded.get(name.lower())
        if not spellings:
            return None
        for variant in (name.lower(), name.upper(), title_case(name)):
            if variant in spellings:
                return self._themes[variant]
        return None

    def merged(self, other: Mapping[str, ThemeRecord]) -> ThemeMap:
        """Return a new map where entries from ``other`` replace same-named ones."""
        combined = dict(self._themes)
        combined.update(other)
        return ThemeMap(combined)

    def to_dict(self) -> dict[str, Any]:
        return {name: theme.to_dict() for name, theme in self._themes.items()}

    @classmethod
    def from_dict(cls, data: Any) -> ThemeMap:
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object of themes, got {type(data).__name__}")
        return cls({str(name): ThemeRecord.from_dict(item) for name, item in data.items()})


def title_case(name: str) -> str:
    """Capitalize the first letter of every word and lower-case the rest."""
    return _WORD_RE.sub(lambda match: match.group(0)[:1].upper() + match.group(0)[1:].lower(), name)


def _as_str(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"Field {key!r} must be a string")
    return value


def _as_int(data: Mapping[str, Any], key: str) -> int:
    value = data.get(key, 0)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Field {key!r} must be an integer")
    return value
