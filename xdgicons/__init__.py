"""Resolve freedesktop icon names to image files."""

__version__ = "0.1.0"
