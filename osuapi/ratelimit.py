from __future__ import annotations

import asyncio
import logging
import time
from collections import deque

from osuapi.errors import RateLimitInternal

DEFAULT_RATE = 10
DEFAULT_PERIOD = 1.0  # in seconds


class RateLimiter:
    """Admits at most `rate` calls within any trailing `per_seconds` window.

    One instance is meant to be shared by every task issuing requests through
    the same client. Waiting callers are admitted in arrival order: the lock
    is held while the head of the queue sleeps, and `asyncio.Lock` wakes its
    waiters first-in first-out.

    A caller cancelled while waiting has not reserved anything, so nothing
    needs to be returned on cancellation. A slot that was admitted but never
    used can be handed back with `release`.
    """

    def __init__(
        self,
        rate: int = DEFAULT_RATE,
        per_seconds: float = DEFAULT_PERIOD,
    ) -> None:
        if rate < 1:
            raise ValueError(f"rate must be at least 1, got {rate}")

        if per_seconds <= 0:
            raise ValueError(f"per_seconds must be positive, got {per_seconds}")

        self.rate = rate
        self.per_seconds = per_seconds

        self.admitted = 0

        self._window: deque[float] = deque()
        self._lock = asyncio.Lock()

    def __repr__(self) -> str:
        return f"<RateLimiter {self.rate}/{self.per_seconds}s>"

    @property
    def in_window(self) -> int:
        """Admissions currently counted against the window."""

        self._expire(time.monotonic())
        return len(self._window)

    def _expire(self, now: float) -> None:
        while self._window and now - self._window[0] >= self.per_seconds:
            self._window.popleft()

    async def acquire(self) -> float:
        """Waits for a free slot and reserves it.

        Returns:
            float: The `time.monotonic()` timestamp of the admission, which
                identifies the slot for `release`.
        """

        async with self._lock:
            while True:
                now = time.monotonic()
                self._expire(now)

                if len(self._window) < self.rate:
                    break

                wait_for = self.per_seconds - (now - self._window[0])
                logging.debug(
                    "Waiting for an osu!api rate limit slot",
                    extra={"wait_for": wait_for},
                )
                await asyncio.sleep(wait_for)

            self._window.append(now)
            if len(self._window) > self.rate:
                raise RateLimitInternal(
                    f"{len(self._window)} admissions within a window of {self.rate}",
                )

            self.admitted += 1
            return now

    def release(self, stamp: float) -> bool:
        """Returns an unused slot to the window.

        Returns:
            bool: Whether the slot was still reserved.
        """

        try:
            self._window.remove(stamp)
        except ValueError:
            # expired already
            return False

        return True
