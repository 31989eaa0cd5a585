"""Groups of futures waited on together, and promises that feed them."""

from __future__ import annotations

import concurrent.futures
import time
from datetime import timedelta
from typing import Iterable, Union

Future = concurrent.futures.Future
Timeout = Union[float, timedelta]


def _seconds(timeout: Timeout) -> float:
    if isinstance(timeout, timedelta):
        return timeout.total_seconds()
    return float(timeout)


class FutureVector:
    """A list of futures that behaves like one future of a list."""

    def __init__(self, futures: Iterable[Future] = ()):
        self._futures = list(futures)

    def append(self, future: Future) -> None:
        self._futures.append(future)

    def __len__(self) -> int:
        return len(self._futures)

    def wait(self) -> None:
        """Block until every future is done."""
        concurrent.futures.wait(self._futures)

    def wait_for(self, timeout: Timeout) -> bool:
        """Wait up to ``timeout``; return whether every future is done."""
        deadline = time.monotonic() + _seconds(timeout)
        for future in self._futures:
            remaining = max(0.0, deadline - time.monotonic())
            done, _ = concurrent.futures.wait([future], timeout=remaining)
            if not done:
                return False
        return True

    def get(self) -> list:
        """Results in order; the first failure is raised."""
        return [future.result() for future in self._futures]


class PromiseVector:
    """``n`` promises; each is a future whose result is set by the producer."""

    def __init__(self, n: int = 0):
        if n < 0:
            raise ValueError("number of promises must be non-negative")
        self._promises = [Future() for _ in range(n)]

    def at(self, pos: int) -> Future:
        if not 0 <= pos < len(self._promises):
            raise IndexError("promise index out of range")
        return self._promises[pos]

    def get_future(self) -> FutureVector:
        return FutureVector(self._promises)


def get_or_raise(future, timeout: Timeout, message: str):
    """Return the future's result, or raise RuntimeError(message) on timeout."""
    if isinstance(future, FutureVector):
        if not future.wait_for(timeout):
            raise RuntimeError(message)
        return future.get()
    done, _ = concurrent.futures.wait([future], timeout=_seconds(timeout))
    if not done:
        raise RuntimeError(message)
    return future.result()