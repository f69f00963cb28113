"""Domain interfaces package."""

from .location_history import ILocationHistory, InMemoryLocationHistory
from .stickies_api import IStickiesApi

__all__ = [
    "ILocationHistory",
    "IStickiesApi",
    "InMemoryLocationHistory",
]
