"""Error codes raised while scanning, caching and resolving icon themes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import Any


class ErrorCode(Enum):
    """Stage at which an icon theme operation failed."""

    # Scanning
    DESCRIPTOR_READ_FAILED = auto()
    THEME_SCAN_FAILED = auto()

    # Cache artifact
    CACHE_READ_FAILED = auto()
    CACHE_WRITE_FAILED = auto()

    # Resolution
    ICON_NOT_FOUND = auto()


ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.DESCRIPTOR_READ_FAILED: "Failed to read index.theme. The theme directory may be unreadable.",
    ErrorCode.THEME_SCAN_FAILED: "Failed to scan the icon directories. Check folder permissions.",
    ErrorCode.CACHE_READ_FAILED: "The icon theme cache could not be read. Delete it to force a rebuild.",
    ErrorCode.CACHE_WRITE_FAILED: "The icon theme cache could not be written. Check the cache folder permissions.",
    ErrorCode.ICON_NOT_FOUND: "No icon with that name exists in the theme, its parents or the fallback folders.",
}


@dataclass
class IconThemeError(Exception):
    """Failure tagged with the stage that produced it and the file involved."""

    code: ErrorCode
    message: str = ""
    path: Path | None = None
    details: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.message:
            self.message = self.hint

    @property
    def hint(self) -> str:
        return ERROR_MESSAGES[self.code]

    def __str__(self) -> str:
        text = f"[{self.code.name}] {self.message}"
        if self.path:
            text += f" ({self.path})"
        return text

    def to_dict(self) -> dict[str, Any]:
        """Structured form used in log records."""
        return {
            "code": self.code.name,
            "message": self.message,
            "path": str(self.path) if self.path else None,
            "details": self.details,
        }


def format_error_for_user(error: IconThemeError) -> str:
    """Render ``error`` for the terminal, with the stage hint when it adds anything."""
    lines = [error.message]
    if error.hint != error.message:
        lines.append(f"Hint: {error.hint}")
    if error.path:
        lines.append(f"File: {error.path}")
    return "\n".join(lines)
