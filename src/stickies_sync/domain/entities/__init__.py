"""Domain entities package."""

from .note import (
    DEFAULT_COLOR,
    PALETTE,
    Note,
    NoteIdClock,
    StickyDocument,
    next_color,
    random_color,
)

__all__ = [
    "DEFAULT_COLOR",
    "PALETTE",
    "Note",
    "NoteIdClock",
    "StickyDocument",
    "next_color",
    "random_color",
]
