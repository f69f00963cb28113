"""Tests for note entities, colours and id generation."""

import random

import pytest
from pydantic import ValidationError

from stickies_sync.domain.entities.note import (
    DEFAULT_COLOR,
    PALETTE,
    Note,
    NoteIdClock,
    StickyDocument,
    next_color,
    random_color,
)


class TestNote:
    def test_missing_text_reads_as_blank(self) -> None:
        note = Note.model_validate({"id": 7, "color": DEFAULT_COLOR})

        assert note.text == ""
        assert note.is_blank

    def test_null_text_reads_as_blank(self) -> None:
        note = Note.model_validate({"id": 7, "text": None, "color": "#fff"})

        assert note.text == ""

    def test_whitespace_is_blank(self) -> None:
        assert Note(id=1, text=" \n\t").is_blank
        assert not Note(id=1, text=" x ").is_blank

    def test_extra_fields_are_ignored(self) -> None:
        note = Note.model_validate(
            {"id": 1, "text": "a", "color": "#ffcc99", "x": 10, "y": 20}
        )

        assert note.model_dump() == {"id": 1, "text": "a", "color": "#ffcc99"}

    @pytest.mark.parametrize("color", ["yellow", "#12", "#1234567", "fcfa5d"])
    def test_invalid_colour_rejected(self, color) -> None:
        with pytest.raises(ValidationError):
            Note(id=1, color=color)

    def test_colour_validated_on_assignment(self) -> None:
        note = Note(id=1)

        with pytest.raises(ValidationError):
            note.color = "blue"


class TestColours:
    def test_next_color_cycles_and_wraps(self) -> None:
        assert next_color(PALETTE[0]) == PALETTE[1]
        assert next_color(PALETTE[-1]) == PALETTE[0]

    def test_unknown_colour_moves_to_first_entry(self) -> None:
        assert next_color("#000000") == PALETTE[0]

    def test_random_color_comes_from_palette(self) -> None:
        rng = random.Random(3)

        colours = {random_color(PALETTE, rng) for _ in range(50)}

        assert colours <= set(PALETTE)


class TestNoteIdClock:
    def test_ids_follow_wall_clock(self) -> None:
        ticks = iter([100, 250, 400])
        clock = NoteIdClock(time_func=lambda: next(ticks))

        assert [clock.next_id() for _ in range(3)] == [100, 250, 400]

    def test_same_millisecond_yields_distinct_ids(self) -> None:
        clock = NoteIdClock(time_func=lambda: 1000)

        assert [clock.next_id() for _ in range(3)] == [1000, 1001, 1002]

    def test_clock_going_backwards_stays_unique(self) -> None:
        ticks = iter([500, 400])
        clock = NoteIdClock(time_func=lambda: next(ticks))

        assert clock.next_id() == 500
        assert clock.next_id() == 501


class TestStickyDocument:
    def test_has_content(self) -> None:
        doc = StickyDocument(notes=[Note(id=1), Note(id=2, text="  ")])
        assert not doc.has_content()

        doc.notes.append(Note(id=3, text="hi"))
        assert doc.has_content()

    def test_persisted_and_empty_flags(self) -> None:
        doc = StickyDocument()

        assert doc.is_empty
        assert not doc.is_persisted

        doc.stickies_id = "a" * 24
        assert doc.is_persisted
