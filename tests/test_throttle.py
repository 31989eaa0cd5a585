import asyncio
import time
from datetime import timedelta

import pytest

from mpnet.bitrate import GIGA, Bitrate, bps, mbps
from mpnet.throttle import TokenBucket, delay


def test_default_bucket_is_unlimited_and_empty():
    bucket = TokenBucket()
    assert bucket.bitrate() == Bitrate.unlimited(GIGA)
    assert bucket.capacity() == 0


def test_set_replaces_rate_and_capacity():
    bucket = TokenBucket()
    bucket.set(mbps(8), 4096)
    assert bucket.bitrate() == mbps(8)
    assert bucket.capacity() == 4096


def test_negative_capacity_rejected():
    with pytest.raises(ValueError):
        TokenBucket(bps(8), -1)


def test_request_takes_at_most_available():
    # one byte per second: no new tokens appear within the test
    bucket = TokenBucket(bps(8), 1000)
    assert bucket.request(600) == 600
    assert bucket.request(600) == 1000 - 600
    assert bucket.request(1) == 0


def test_request_never_exceeds_capacity():
    bucket = TokenBucket(mbps(8), 100)
    taken = bucket.request(10_000)
    assert taken <= bucket.capacity()


def test_request_with_unlimited_rate_raises():
    bucket = TokenBucket()
    with pytest.raises(ValueError):
        bucket.request(1)


@pytest.mark.asyncio
async def test_require_zero_rate_raises():
    bucket = TokenBucket(Bitrate.zero(), 10)
    with pytest.raises(RuntimeError):
        await bucket.require(1)


@pytest.mark.asyncio
async def test_require_within_available_is_immediate():
    bucket = TokenBucket(bps(8), 1000)
    start = time.monotonic()
    await bucket.require(1000)
    assert time.monotonic() - start < 0.5
    assert bucket.request(1) == 0


@pytest.mark.asyncio
async def test_require_waits_for_missing_tokens():
    # one million bytes per second
    bucket = TokenBucket(mbps(8), 1000)
    await bucket.require(1000)
    start = time.monotonic()
    result = await bucket.require(5000)
    assert result is None
    assert time.monotonic() - start >= 0.004
    assert 0 <= bucket.request(10_000) <= 1000


@pytest.mark.asyncio
async def test_delay_zero_returns_quickly():
    start = time.monotonic()
    result = await delay(0)
    assert result is None
    assert time.monotonic() - start < 0.5


@pytest.mark.asyncio
async def test_delay_sleeps():
    start = time.monotonic()
    result = await delay(timedelta(milliseconds=20))
    assert result is None
    assert time.monotonic() - start >= 0.015


@pytest.mark.asyncio
async def test_delay_negative_raises():
    with pytest.raises(ValueError):
        await delay(-1)


def test_delay_accepts_float_and_timedelta():
    start = time.monotonic()
    assert asyncio.run(delay(0.0)) is None
    assert asyncio.run(delay(timedelta(0))) is None
    assert time.monotonic() - start < 0.5