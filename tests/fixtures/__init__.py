"""Test fixtures package."""

from .fake_stickies_api import FakeStickiesApi
from .helpers import STICKIES_ID, TEST_DEBOUNCE_SECONDS, wait_until

__all__ = ["STICKIES_ID", "TEST_DEBOUNCE_SECONDS", "FakeStickiesApi", "wait_until"]
