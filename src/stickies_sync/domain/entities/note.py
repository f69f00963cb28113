"""Domain entities for sticky notes and the document that holds them."""

from __future__ import annotations

import random
import re
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_COLOR = "#fcfa5d"

PALETTE: tuple[str, ...] = (
    "#fcfa5d",
    "#6eed2a",
    "#f989d6",
    "#20dff8",
    "#ff9999",
    "#99ff99",
    "#9999ff",
    "#ffcc99",
)

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class NoteIdClock:
    """Hands out note ids from wall-clock milliseconds.

    Two notes created within the same millisecond get consecutive ids, so
    ids never repeat within one clock's lifetime.
    """

    def __init__(self, time_func: Callable[[], int] | None = None) -> None:
        self._time_func = time_func or _now_ms
        self._last = 0

    def next_id(self) -> int:
        candidate = self._time_func()
        if candidate <= self._last:
            candidate = self._last + 1
        self._last = candidate
        return candidate


class Note(BaseModel):
    """A single sticky note, as exchanged with the API."""

    model_config = ConfigDict(validate_assignment=True, extra="ignore")

    id: int = Field(default_factory=_now_ms)
    text: str = ""
    color: str = DEFAULT_COLOR

    @field_validator("text", mode="before")
    @classmethod
    def coerce_text(cls, v: object) -> str:
        # Older documents store placeholder notes without text.
        return "" if v is None else str(v)

    @field_validator("color")
    @classmethod
    def validate_color(cls, v: str) -> str:
        if not _HEX_COLOR.match(v):
            msg = f"Invalid note colour: {v!r}"
            raise ValueError(msg)
        return v

    @property
    def is_blank(self) -> bool:
        """True when the note holds nothing but whitespace."""
        return not self.text.strip()


def next_color(current: str, palette: Sequence[str] = PALETTE) -> str:
    """Return the palette entry after ``current``, wrapping around.

    Colours outside the palette move to its first entry.
    """
    try:
        index = list(palette).index(current)
    except ValueError:
        return palette[0]
    return palette[(index + 1) % len(palette)]


def random_color(palette: Sequence[str] = PALETTE, rng: random.Random | None = None) -> str:
    return (rng or random).choice(list(palette))


@dataclass
class StickyDocument:
    """Ordered notes forming one persisted unit.

    ``stickies_id`` is assigned by the server on the first successful create
    and cleared again when the remote copy is deleted.
    """

    notes: list[Note] = field(default_factory=list)
    stickies_id: str | None = None

    @property
    def is_persisted(self) -> bool:
        return self.stickies_id is not None

    @property
    def is_empty(self) -> bool:
        return not self.notes

    def has_content(self) -> bool:
        """Check whether any note has non-blank text."""
        return any(not note.is_blank for note in self.notes)
