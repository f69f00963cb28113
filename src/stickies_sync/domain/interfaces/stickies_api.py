"""Interface for the remote stickies store."""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from ..entities.note import Note


class IStickiesApi(ABC):
    """Remote store holding one list of notes per identifier.

    Implementations raise subclasses of ``StickiesApiError`` on failure and
    never return partial results.
    """

    @abstractmethod
    async def fetch(self, stickies_id: str) -> list[Note]:
        """Load the notes stored under ``stickies_id``.

        Raises:
            StickiesNotFoundError: If no document exists for the identifier
            StickiesApiError: For any other failure
        """

    @abstractmethod
    async def create(self, notes: Sequence[Note]) -> str:
        """Store ``notes`` as a new document and return its identifier."""

    @abstractmethod
    async def update(self, stickies_id: str, notes: Sequence[Note]) -> None:
        """Replace the remote notes of ``stickies_id`` with ``notes``."""

    @abstractmethod
    async def delete(self, stickies_id: str) -> None:
        """Delete the document ``stickies_id``."""

    @abstractmethod
    async def aclose(self) -> None:
        """Release network resources."""
