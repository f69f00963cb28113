"""Save status tracking for the sync controller."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict


class SaveStatus(str, Enum):
    """What the status indicator shows."""

    SAVING = "saving"
    SAVED = "saved"
    ERROR = "error"


class SyncState(BaseModel):
    """Save status plus the in-flight guard.

    ``is_loading`` is set for the whole duration of any remote call; a
    second call started while it is set is dropped.
    """

    model_config = ConfigDict(validate_assignment=True)

    status: SaveStatus = SaveStatus.SAVED
    last_saved_at: datetime | None = None
    has_unsaved_changes: bool = False
    is_loading: bool = False

    def mark_saving(self) -> None:
        self.status = SaveStatus.SAVING
        self.has_unsaved_changes = True

    def mark_saved(self, at: datetime | None = None) -> None:
        self.status = SaveStatus.SAVED
        self.has_unsaved_changes = False
        if at is not None:
            self.last_saved_at = at

    def mark_error(self) -> None:
        self.status = SaveStatus.ERROR

    def clear(self) -> None:
        self.status = SaveStatus.SAVED
        self.last_saved_at = None
        self.has_unsaved_changes = False
