"""Domain layer for the stickies client.

This package contains the note entities and the interfaces of the
collaborators the sync controller talks to.
"""

from .entities.note import Note, NoteIdClock, StickyDocument
from .interfaces.location_history import ILocationHistory, InMemoryLocationHistory
from .interfaces.stickies_api import IStickiesApi

__all__ = [
    # Interfaces
    "ILocationHistory",
    "IStickiesApi",
    "InMemoryLocationHistory",
    # Entities
    "Note",
    "NoteIdClock",
    "StickyDocument",
]
