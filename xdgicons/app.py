"""Command line bootstrap."""

from __future__ import annotations

import argparse
import logging
from logging.handlers import RotatingFileHandler
import sys
from typing import Sequence

from xdgicons import __version__
from xdgicons.config.settings import IconSettings
from xdgicons.errors import ErrorCode, IconThemeError, format_error_for_user
from xdgicons.icons.models import ThemeMap
from xdgicons.icons.service import IconService


def _configure_logger(settings: IconSettings, verbose: bool) -> logging.Logger:
    logger = logging.getLogger("xdgicons")
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    handler = RotatingFileHandler(
        settings.log_dir / "xdgicons.log",
        maxBytes=512_000,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    logger.addHandler(handler)
    if verbose:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        logger.addHandler(console)
    logger.propagate = False
    return logger


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="xdgicons",
        description="Resolve a freedesktop icon name to an image file.",
    )
    parser.add_argument("icon", nargs="?", help="icon name, e.g. firefox or folder")
    parser.add_argument("--size", type=int, default=48, help="requested size in pixels (default 48)")
    parser.add_argument("--scale", type=int, default=1, help="display scale factor (default 1)")
    parser.add_argument("--theme", default=None, help="theme to search instead of the configured default")
    parser.add_argument("--fallback", default="", help="icon name to try when ICON is not found")
    parser.add_argument("--rebuild", action="store_true", help="rescan icon directories before resolving")
    parser.add_argument("--list-themes", action="store_true", help="print every theme in the cache")
    parser.add_argument("-v", "--verbose", action="store_true", help="log lookups to stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def format_theme_map(theme_map: ThemeMap) -> str:
    """Render the theme map as indented text, one theme block per entry."""
    lines: list[str] = []
    for name in sorted(theme_map, key=str.lower):
        theme = theme_map[name]
        lines.append(f"Theme: {name}")
        lines.append(f"  BasePath: {theme.base_path}")
        lines.append(f"  Parents: {', '.join(theme.parents) or '-'}")
        lines.append("  Directories:")
        for rule in theme.directories:
            lines.append(
                f"    - {rule.path_name}: Type={rule.type} Size={rule.size} "
                f"MinSize={rule.min_size} MaxSize={rule.max_size} Scale={rule.scale} "
                f"Threshold={rule.threshold} Context={rule.context or '-'}"
            )
        lines.append("")
    return "\n".join(lines)


def run_app(argv: Sequence[str] | None = None, settings: IconSettings | None = None) -> int:
    """Parse arguments, resolve the icon and print the result."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    if not args.icon and not args.list_themes:
        parser.error("an icon name is required unless --list-themes is given")

    settings = settings or IconSettings()
    logger = _configure_logger(settings, args.verbose)
    service = IconService(settings)

    try:
        if args.rebuild:
            service.cache.rebuild()
        if args.list_themes:
            print(format_theme_map(service.theme_map()))
            return 0
        path = service.find_icon(
            args.icon,
            args.size,
            args.scale,
            args.fallback,
            theme_name=args.theme,
        )
    except IconThemeError as exc:
        logger.error("lookup failed: %s", exc.to_dict())
        print(format_error_for_user(exc), file=sys.stderr)
        return 2

    if path is None:
        not_found = IconThemeError(ErrorCode.ICON_NOT_FOUND, details={"icon": args.icon})
        print(f"{args.icon}: {not_found.message}", file=sys.stderr)
        return 1
    print(path)
    return 0
