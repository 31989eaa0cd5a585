"""Rate limiting by token bucket, and delays for emulating network latency."""

from __future__ import annotations

import asyncio
import time
from datetime import timedelta
from typing import Union

from .bitrate import GIGA, UNIT, Bitrate, Datasize

Seconds = Union[float, int, timedelta]


def _seconds(value: Seconds) -> float:
    if isinstance(value, timedelta):
        return value.total_seconds()
    return float(value)


async def delay(seconds: Seconds) -> None:
    """Sleep for ``seconds``; return at once when it is zero."""
    duration = _seconds(seconds)
    if duration < 0:
        raise ValueError("delay must be non-negative")
    if duration == 0:
        return
    await asyncio.sleep(duration)


class TokenBucket:
    """Tokens (bytes) accumulate at ``rate`` up to ``capacity``.

    The default bucket has an unlimited rate and no capacity.
    """

    def __init__(self, rate: Bitrate | None = None, capacity: int = 0):
        self.set(Bitrate.unlimited(GIGA) if rate is None else rate, capacity)

    def set(self, rate: Bitrate, capacity: int) -> None:
        """Reset the rate and capacity; the bucket starts full."""
        if capacity < 0:
            raise ValueError("capacity must be non-negative")
        self._rate = rate
        self._capacity = int(capacity)
        self._available = self._capacity
        self._latest_update = time.monotonic()

    def bitrate(self) -> Bitrate:
        return self._rate

    def capacity(self) -> int:
        return self._capacity

    def _refill(self, now: float) -> None:
        elapsed = timedelta(seconds=now - self._latest_update)
        generated = int((self._rate * elapsed).to(UNIT).count)
        self._available = min(self._capacity, self._available + generated)

    def request(self, requested: int) -> int:
        """Take up to ``requested`` tokens without waiting; return how many were taken."""
        now = time.monotonic()
        self._refill(now)
        acquired = min(self._available, requested)
        self._available -= acquired
        self._latest_update = now
        return acquired

    async def require(self, required: int) -> None:
        """Wait until ``required`` tokens have been taken from the bucket."""
        if self._rate.count == 0:
            raise RuntimeError("token bucket bitrate set to zero")

        now = time.monotonic()
        self._refill(now)
        if required <= self._available:
            self._available -= required
            self._latest_update = now
            return

        remaining = required - self._available
        eta = (Datasize(remaining) / self._rate).total_seconds()
        completion = now + eta
        await asyncio.sleep(max(0.0, completion - time.monotonic()))

        # the bucket is empty once the wait completes
        self._available = 0
        self._latest_update = completion