"""Shared test helpers and constants."""

import asyncio
from collections.abc import Callable

# Short enough to keep the suite fast, long enough that a burst of
# synchronous edits always lands inside one window.
TEST_DEBOUNCE_SECONDS = 0.02

STICKIES_ID = "5f2b9c1e8a4d3f6b7c0e1a2d"


async def wait_until(predicate: Callable[[], bool], timeout: float = 1.0) -> None:
    """Poll ``predicate`` on the event loop until it holds."""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            msg = "condition not met before timeout"
            raise AssertionError(msg)
        await asyncio.sleep(0.001)
