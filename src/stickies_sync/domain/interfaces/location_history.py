"""Interface for the page location that mirrors the document identifier."""

from abc import ABC, abstractmethod


class ILocationHistory(ABC):
    """Push-only view of browser history.

    The controller pushes ``/{id}`` after a create and ``/`` after a delete,
    without reloading anything.
    """

    @abstractmethod
    def push(self, path: str) -> None:
        """Record ``path`` as the new current location."""

    @property
    @abstractmethod
    def current(self) -> str:
        """The most recently pushed path."""


class InMemoryLocationHistory(ILocationHistory):
    """Keeps the pushed paths in a list; used by the CLI and tests."""

    def __init__(self, initial: str = "/") -> None:
        self.entries: list[str] = [initial]

    def push(self, path: str) -> None:
        self.entries.append(path)

    @property
    def current(self) -> str:
        return self.entries[-1]
