"""Formatting of option values for display as git-config entries."""

from __future__ import annotations

_QUOTE_TRIGGERS = frozenset("\\{}:")


def format_option_value(value: str) -> str:
    """Quote a value in single quotes when git config would need it.

    Values that are empty, start or end with a space, or contain any of
    ``\\ { } :`` are quoted; all others are returned unchanged.
    """
    if (
        not value
        or value.startswith(" ")
        or value.endswith(" ")
        or any(ch in _QUOTE_TRIGGERS for ch in value)
    ):
        return f"'{value}'"
    return value