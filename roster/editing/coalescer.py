"""Per-key debounced persistence.

``schedule(key, thunk)`` (re)starts a timer for ``key``; when it expires
the thunk runs once. Rapid edits under one key therefore collapse into a
single call carrying the last value. Calls for the same key run in
schedule order: a fired thunk waits for the key's previous call to finish.
Different keys are independent and unordered relative to each other.

``flush_all`` cancels every pending timer without running its thunk.
Edits still waiting on a timer at teardown are dropped.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional

from roster.config import DEFAULT_SAVE_DELAY

logger = logging.getLogger(__name__)

Thunk = Callable[[], Awaitable[Any]]
ErrorCallback = Callable[[str, BaseException], None]


class EditCoalescer:
    def __init__(self, delay: float = DEFAULT_SAVE_DELAY, on_error: Optional[ErrorCallback] = None):
        self.delay = delay
        self.on_error = on_error
        self._timers: Dict[str, asyncio.TimerHandle] = {}
        self._in_flight: Dict[str, "asyncio.Task[None]"] = {}
        self.calls = 0
        self.failures = 0

    @property
    def pending_keys(self) -> List[str]:
        """Keys with a timer that has not fired yet."""
        return list(self._timers)

    @property
    def in_flight_keys(self) -> List[str]:
        return list(self._in_flight)

    def schedule(self, key: str, thunk: Thunk) -> None:
        """Replace any pending call for ``key`` with ``thunk``.

        Must be called from inside a running event loop.
        """
        loop = asyncio.get_running_loop()
        previous = self._timers.pop(key, None)
        if previous is not None:
            previous.cancel()
            logger.debug("Superseded pending edit %s", key)
        self._timers[key] = loop.call_later(self.delay, self._fire, key, thunk)

    def cancel(self, key: str) -> bool:
        """Drop the pending call for ``key``, if any."""
        handle = self._timers.pop(key, None)
        if handle is None:
            return False
        handle.cancel()
        return True

    def flush_all(self) -> int:
        """Cancel all pending timers without running them. Returns how many were dropped."""
        dropped = len(self._timers)
        for handle in self._timers.values():
            handle.cancel()
        self._timers.clear()
        if dropped:
            logger.info("Dropped %d pending edit(s)", dropped)
        return dropped

    async def drain(self) -> None:
        """Wait for every call that has already fired."""
        while self._in_flight:
            await asyncio.gather(*self._in_flight.values())

    def _fire(self, key: str, thunk: Thunk) -> None:
        self._timers.pop(key, None)
        previous = self._in_flight.get(key)
        task = asyncio.get_running_loop().create_task(
            self._run(key, thunk, previous), name=f"persist-{key}"
        )
        self._in_flight[key] = task
        task.add_done_callback(lambda done, key=key: self._forget(key, done))

    async def _run(self, key: str, thunk: Thunk, previous: "Optional[asyncio.Task[None]]") -> None:
        if previous is not None and not previous.done():
            await asyncio.wait([previous])
        self.calls += 1
        try:
            await thunk()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            self.failures += 1
            logger.error("Persisting %s failed: %s", key, e, exc_info=True)
            if self.on_error is not None:
                self.on_error(key, e)

    def _forget(self, key: str, task: "asyncio.Task[None]") -> None:
        if self._in_flight.get(key) is task:
            del self._in_flight[key]
