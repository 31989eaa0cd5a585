"""A stopwatch measuring the last interval and the running total."""

from __future__ import annotations

import time


class Timer:
    """Measures elapsed seconds between start and stop; usable as a context manager."""

    def __init__(self) -> None:
        self._elapsed = 0.0
        self._total_elapsed = 0.0
        self._last_update: float | None = None

    def start(self) -> None:
        self._last_update = time.perf_counter()

    def stop(self) -> None:
        if self._last_update is None:
            raise RuntimeError("timer stopped before it was started")
        end = time.perf_counter()
        self._elapsed = end - self._last_update
        self._total_elapsed += self._elapsed

    def elapsed(self) -> float:
        return self._elapsed

    def total_elapsed(self) -> float:
        return self._total_elapsed

    def __enter__(self) -> Timer:
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()