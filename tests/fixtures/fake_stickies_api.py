"""In-memory implementation of IStickiesApi for testing."""

import asyncio
from collections.abc import Sequence
from typing import Any

from stickies_sync.domain.entities.note import Note
from stickies_sync.domain.interfaces.stickies_api import IStickiesApi
from stickies_sync.exceptions import StickiesApiError, StickiesNotFoundError


class FakeStickiesApi(IStickiesApi):
    """Fake stickies server.

    Records every call as ``(method, stickies_id, payload)``. Set
    ``fail_with`` to make the next calls raise, or ``gate`` to hold calls in
    flight until the event is set.
    """

    def __init__(self) -> None:
        self.documents: dict[str, list[dict[str, Any]]] = {}
        self.calls: list[tuple[str, str | None, list[dict[str, Any]] | None]] = []
        self.fail_with: StickiesApiError | None = None
        self.gate: asyncio.Event | None = None
        self.closed = False
        self._counter = 0

    @property
    def methods(self) -> list[str]:
        return [method for method, _, _ in self.calls]

    def last_payload(self) -> list[dict[str, Any]] | None:
        return self.calls[-1][2] if self.calls else None

    async def _enter(
        self,
        method: str,
        stickies_id: str | None,
        payload: list[dict[str, Any]] | None = None,
    ) -> None:
        self.calls.append((method, stickies_id, payload))
        if self.gate is not None:
            await self.gate.wait()
        if self.fail_with is not None:
            raise self.fail_with

    async def fetch(self, stickies_id: str) -> list[Note]:
        await self._enter("GET", stickies_id)
        if stickies_id not in self.documents:
            msg = f"No stickies found at {stickies_id}"
            raise StickiesNotFoundError(msg)
        return [Note.model_validate(item) for item in self.documents[stickies_id]]

    async def create(self, notes: Sequence[Note]) -> str:
        payload = [note.model_dump() for note in notes]
        await self._enter("POST", None, payload)
        self._counter += 1
        stickies_id = f"{self._counter:024x}"
        self.documents[stickies_id] = payload
        return stickies_id

    async def update(self, stickies_id: str, notes: Sequence[Note]) -> None:
        payload = [note.model_dump() for note in notes]
        await self._enter("PUT", stickies_id, payload)
        self.documents[stickies_id] = payload

    async def delete(self, stickies_id: str) -> None:
        await self._enter("DELETE", stickies_id)
        self.documents.pop(stickies_id, None)

    async def aclose(self) -> None:
        self.closed = True
