"""Identifier predicates shared by the naming rules."""

from __future__ import annotations

MARKER = "_"


def has_leading_marker(text: object | None) -> bool:
    """Return True if *text* starts with :data:`MARKER`.

    ``None`` and the empty string are never marked.
    """
    if not text:
        return False
    return str(text).startswith(MARKER)


def has_trailing_marker(text: object | None) -> bool:
    """Return True if *text* ends with :data:`MARKER`."""
    if not text:
        return False
    return str(text).endswith(MARKER)
