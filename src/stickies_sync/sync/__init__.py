"""Debounced synchronization of a local stickies document with the API."""

from .controller import SyncController
from .debounce import Debouncer
from .state import SaveStatus, SyncState

__all__ = ["Debouncer", "SaveStatus", "SyncController", "SyncState"]
