"""Keeps a remote stickies document in step with local edits."""

from __future__ import annotations

import random
from collections.abc import Callable, Iterable, Sequence
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from stickies_sync.domain.entities.note import (
    DEFAULT_COLOR,
    PALETTE,
    Note,
    NoteIdClock,
    StickyDocument,
    next_color,
    random_color,
)
from stickies_sync.domain.interfaces.location_history import (
    ILocationHistory,
    InMemoryLocationHistory,
)
from stickies_sync.domain.interfaces.stickies_api import IStickiesApi
from stickies_sync.exceptions import StickiesApiError, StickiesNotFoundError
from stickies_sync.utils.logging import get_logger

from .debounce import Debouncer
from .identifiers import id_from_path, path_for
from .state import SaveStatus, SyncState

if TYPE_CHECKING:
    from stickies_sync.config_settings import Config

logger = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SyncController:
    """Owns one sticky document and mirrors it to the stickies API.

    Every mutation method calls ``schedule_save()``; the debounce timer then
    coalesces a burst of edits into a single create, update or delete.
    ``state.is_loading`` guards the API so that at most one request is in
    flight: a load or save started while it is set is dropped, not queued.
    The next edit starts a new save cycle, which is the only retry.

    Remote failures never propagate out of ``load``, ``create`` or
    ``update``; they are logged and reported through ``state.status``.
    """

    def __init__(
        self,
        api: IStickiesApi,
        history: ILocationHistory | None = None,
        *,
        debounce_seconds: float = 1.0,
        palette: Sequence[str] = PALETTE,
        default_color: str = DEFAULT_COLOR,
        clock: NoteIdClock | None = None,
        now: Callable[[], datetime] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._api = api
        self._history = history or InMemoryLocationHistory()
        self._palette = tuple(palette)
        self._default_color = default_color
        self._clock = clock or NoteIdClock()
        self._now = now or _utcnow
        self._rng = rng
        self._debouncer = Debouncer(debounce_seconds, self._save)
        # Set when the debounce fired while a request was in flight.
        self._save_dropped = False

        self.document = StickyDocument(notes=[self._blank_note()])
        self.state = SyncState()

    @classmethod
    def from_config(
        cls,
        config: Config,
        api: IStickiesApi | None = None,
        history: ILocationHistory | None = None,
    ) -> SyncController:
        """Build a controller (and, unless given, its API client) from config."""
        if api is None:
            from stickies_sync.api.client import StickiesApiClient

            api = StickiesApiClient(config.api_url, timeout=config.request_timeout)
        return cls(
            api,
            history,
            debounce_seconds=config.debounce_seconds,
            palette=config.palette,
            default_color=config.default_color,
        )

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def notes(self) -> list[Note]:
        return self.document.notes

    @property
    def stickies_id(self) -> str | None:
        return self.document.stickies_id

    @property
    def status(self) -> SaveStatus:
        return self.state.status

    @property
    def location(self) -> str:
        return self._history.current

    def should_warn_before_leaving(self) -> bool:
        """True while edits are waiting to be saved."""
        return self.state.has_unsaved_changes and self.state.status is SaveStatus.SAVING

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def open(self, path: str) -> None:
        """Start editing the document addressed by a ``/{id}`` page path.

        Paths without a valid identifier start a fresh blank document.
        """
        stickies_id = id_from_path(path)
        if stickies_id is None:
            logger.info("stickies_open_blank", path=path)
            self.document = StickyDocument(notes=[self._blank_note()])
            return

        logger.info("stickies_open", stickies_id=stickies_id)
        await self.load(stickies_id)

    async def load(self, stickies_id: str) -> bool:
        """Replace local notes with the remote copy of ``stickies_id``.

        Returns True when the remote document was found and loaded.

        404 falls back to a single blank note with status ``saved``. Any
        other failure falls back to a blank note with status ``error``. In
        both cases the identifier is kept, so the next edit issues an update
        to the same address.
        """
        if self.state.is_loading:
            logger.warning("stickies_load_skipped_busy", stickies_id=stickies_id)
            return False

        self._debouncer.cancel()
        self.document.stickies_id = stickies_id
        self.state.is_loading = True
        try:
            notes = await self._api.fetch(stickies_id)
        except StickiesNotFoundError:
            logger.info("stickies_not_found", stickies_id=stickies_id)
            self.document.notes = [self._blank_note()]
            self.state.mark_saved()
            return False
        except StickiesApiError as e:
            logger.error(
                "stickies_load_failed",
                stickies_id=stickies_id,
                error=str(e),
                error_type=type(e).__name__,
                error_code=e.error_code,
            )
            self.document.notes = [self._blank_note()]
            self.state.mark_error()
            return False
        finally:
            self.state.is_loading = False

        self.document.notes = notes or [self._blank_note()]
        self.state.mark_saved()
        logger.info("stickies_loaded", stickies_id=stickies_id, count=len(notes))
        return True

    def reset(self) -> None:
        """Forget the remote document and start over with one blank note."""
        self._debouncer.cancel()
        self.document = StickyDocument(notes=[self._blank_note()])
        self._save_dropped = False
        self.state.clear()
        self._history.push(path_for(None))
        logger.info("stickies_reset")

    async def flush(self) -> None:
        """Save pending edits now instead of waiting for the timer."""
        await self._debouncer.flush()

    async def wait_idle(self) -> None:
        """Wait for the pending timer and any save it triggers."""
        await self._debouncer.wait()

    async def aclose(self) -> None:
        """Drop any pending save and wait for in-flight work to finish."""
        self._debouncer.cancel()
        await self._debouncer.wait()

    # ------------------------------------------------------------------
    # Saving
    # ------------------------------------------------------------------

    def schedule_save(self) -> None:
        """Mark the document dirty and restart the debounce timer."""
        self.state.mark_saving()
        self._debouncer.schedule()
        logger.debug(
            "stickies_save_scheduled",
            stickies_id=self.document.stickies_id,
            delay=self._debouncer.delay,
        )

    async def _save(self) -> None:
        if self.document.is_persisted:
            await self.update()
        else:
            await self.create()

    async def update(self) -> None:
        """Push local notes to the existing remote document.

        An empty document is deleted remotely instead, after which the
        controller starts over with a blank note.
        On success status becomes ``saved``, unless newer edits are still
        waiting to be sent (see ``_mark_saved``).
        """
        if self.state.is_loading:
            logger.warning(
                "stickies_save_skipped_busy", stickies_id=self.document.stickies_id
            )
            self._save_dropped = True
            return
        stickies_id = self.document.stickies_id
        if not stickies_id:
            return

        deleting = self.document.is_empty
        self._save_dropped = False
        self.state.is_loading = True
        try:
            if deleting:
                await self._api.delete(stickies_id)
            else:
                await self._api.update(stickies_id, list(self.document.notes))
        except StickiesApiError as e:
            logger.error(
                "stickies_delete_failed" if deleting else "stickies_save_failed",
                stickies_id=stickies_id,
                error=str(e),
                error_type=type(e).__name__,
                error_code=e.error_code,
            )
            self.state.mark_error()
            return
        finally:
            self.state.is_loading = False

        if deleting:
            self._after_remote_delete(stickies_id)
        else:
            self._mark_saved()
            logger.info(
                "stickies_saved", stickies_id=stickies_id, count=len(self.document.notes)
            )

    async def create(self) -> None:
        """Store the document remotely for the first time.

        Documents without any non-blank text are never sent.
        On success the identifier is stored and pushed as ``/{id}``; status
        follows the same rule as ``update``.
        """
        if self.state.is_loading:
            logger.warning("stickies_create_skipped_busy")
            self._save_dropped = True
            return
        if not self.document.has_content():
            logger.debug("stickies_create_skipped_blank")
            self.state.mark_saved()
            return

        self._save_dropped = False
        self.state.is_loading = True
        try:
            stickies_id = await self._api.create(list(self.document.notes))
        except StickiesApiError as e:
            logger.error(
                "stickies_create_failed",
                error=str(e),
                error_type=type(e).__name__,
                error_code=e.error_code,
            )
            self.state.mark_error()
            return
        finally:
            self.state.is_loading = False

        self.document.stickies_id = stickies_id
        self._history.push(path_for(stickies_id))
        self._mark_saved()
        logger.info(
            "stickies_created", stickies_id=stickies_id, count=len(self.document.notes)
        )

    def _mark_saved(self) -> None:
        """Record a successful create or update.

        Status only becomes ``saved`` when the request carried the latest
        notes. If edits arrived while it was in flight, either a timer is
        still pending or the save it fired was dropped by the busy guard; in
        both cases ``last_saved_at`` is updated but status stays ``saving``
        with unsaved changes. A dropped save is retried by the next edit.
        """
        now = self._now()
        if self._debouncer.pending or self._save_dropped:
            self._save_dropped = False
            self.state.last_saved_at = now
        else:
            self.state.mark_saved(now)

    def _after_remote_delete(self, stickies_id: str) -> None:
        if self.document.is_empty:
            logger.info("stickies_document_deleted", stickies_id=stickies_id)
            self.reset()
            return

        # Notes were added while the delete was in flight: keep them and
        # store them as a new document.
        logger.info(
            "stickies_document_deleted_with_new_notes",
            stickies_id=stickies_id,
            count=len(self.document.notes),
        )
        self.document.stickies_id = None
        self._history.push(path_for(None))
        self.schedule_save()

    # ------------------------------------------------------------------
    # Local mutations
    # ------------------------------------------------------------------

    def add_note(self, text: str = "") -> Note:
        """Append a note with a random palette colour."""
        note = Note(
            id=self._clock.next_id(),
            text=text,
            color=random_color(self._palette, self._rng),
        )
        self.document.notes.append(note)
        self.schedule_save()
        return note

    def edit_text(self, index: int, text: str) -> None:
        note = self._note_at(index)
        if note.text == text:
            return
        note.text = text
        self.schedule_save()

    def change_color(self, index: int) -> str:
        """Cycle a note to the next palette colour and return it."""
        note = self._note_at(index)
        note.color = next_color(note.color, self._palette)
        self.schedule_save()
        return note.color

    def delete_note(self, index: int) -> bool:
        """Remove a note if its text is blank.

        Returns False, without scheduling a save, for notes that still hold
        text. Removing the last note makes the next save a remote delete.
        """
        note = self._note_at(index)
        if not note.is_blank:
            return False
        del self.document.notes[index]
        if self.document.is_empty:
            logger.info("stickies_all_notes_deleted", stickies_id=self.stickies_id)
        self.schedule_save()
        return True

    def move_note(self, from_index: int, to_index: int) -> None:
        """Move a note to another position (drag and drop)."""
        self._note_at(from_index)
        self._note_at(to_index)
        if from_index == to_index:
            return
        note = self.document.notes.pop(from_index)
        self.document.notes.insert(to_index, note)
        self.schedule_save()

    def replace_notes(self, notes: Iterable[Note]) -> None:
        self.document.notes = list(notes)
        self.schedule_save()

    def _note_at(self, index: int) -> Note:
        if not 0 <= index < len(self.document.notes):
            msg = f"Note index {index} out of range (0..{len(self.document.notes) - 1})"
            raise IndexError(msg)
        return self.document.notes[index]

    def _blank_note(self) -> Note:
        return Note(id=self._clock.next_id(), text="", color=self._default_color)
