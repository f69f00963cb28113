"""Pytest configuration and fixtures for the test suite."""

import pytest

from stickies_sync.config import reset_config
from stickies_sync.domain.entities.note import NoteIdClock
from stickies_sync.domain.interfaces.location_history import InMemoryLocationHistory
from stickies_sync.sync.controller import SyncController
from tests.fixtures import TEST_DEBOUNCE_SECONDS, FakeStickiesApi


@pytest.fixture
def fake_api():
    """Provide an in-memory stickies server."""
    return FakeStickiesApi()


@pytest.fixture
def history():
    """Provide an in-memory location history."""
    return InMemoryLocationHistory()


@pytest.fixture
def fixed_clock():
    """Note id clock frozen at one millisecond; ids still come out unique."""
    return NoteIdClock(time_func=lambda: 1_700_000_000_000)


@pytest.fixture
def controller(fake_api, history, fixed_clock):
    """Provide a controller wired to the fake API."""
    return SyncController(
        fake_api,
        history,
        debounce_seconds=TEST_DEBOUNCE_SECONDS,
        clock=fixed_clock,
    )


@pytest.fixture(autouse=True)
def _reset_global_config():
    yield
    reset_config()
