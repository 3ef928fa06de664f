"""Wrapping and side-by-side alignment of styled diff lines, and git-config value formatting."""

__version__ = "0.1.0"