"""Length-prefixed messaging over stream channels, with delay and rate limits."""

from __future__ import annotations

import asyncio
import enum
import struct
import time
from dataclasses import dataclass
from datetime import timedelta
from typing import Iterable, Union

from .bitrate import UNIT, Bitrate, Datasize
from .sockets import Channel, SocketPackage
from .statistics import Statistics
from .throttle import Seconds, TokenBucket, _seconds
from .throttle import delay as _wait
from .timer import Timer

_SIZE = struct.Struct("<Q")
_MIN_PACKET_DURATION = timedelta(milliseconds=2)

BytesLike = Union[bytes, bytearray, memoryview]


class StrategyType(enum.Enum):
    UNLIMITED = "unlimited"
    FIXED_PACKET_SIZE = "fixed_packet_size"
    FIXED_INTERVAL = "fixed_interval"
    DYNAMIC_PACKET_SIZE = "dynamic_packet_size"


@dataclass(frozen=True)
class Strategy:
    """How a rate-limited message is split into packets."""

    type: StrategyType = StrategyType.UNLIMITED
    data: Union[Datasize, float, timedelta, None] = None

    def __post_init__(self):
        if self.type is StrategyType.FIXED_PACKET_SIZE:
            if not isinstance(self.data, Datasize):
                raise TypeError("fixed packet size strategy needs a Datasize")
        elif self.type is StrategyType.FIXED_INTERVAL:
            if isinstance(self.data, bool) or not isinstance(self.data, (int, float, timedelta)):
                raise TypeError("fixed interval strategy needs a duration")
        elif self.data is not None:
            raise TypeError(f"{self.type.value} strategy takes no data")


async def recv_message(reader: asyncio.StreamReader) -> bytes:
    """Read one message: an 8-byte little-endian length, then the payload."""
    header = await reader.readexactly(_SIZE.size)
    (size,) = _SIZE.unpack(header)
    return await reader.readexactly(size)


async def send_size(writer, size: int) -> None:
    writer.write(_SIZE.pack(size))
    await writer.drain()


async def send_unlimited(writer, data: BytesLike) -> None:
    writer.write(data)
    await writer.drain()


async def send_fixed_packet_size(writer, data: BytesLike, bucket: TokenBucket, packet_size) -> None:
    """Send packets of a fixed size, each after taking its tokens from the bucket."""
    size = packet_size.to(UNIT).count if isinstance(packet_size, Datasize) else int(packet_size)
    if size <= 0:
        raise ValueError("packet size must be positive")
    view = memoryview(data)
    sent = 0
    while sent < len(view):
        this_packet = min(size, len(view) - sent)
        await bucket.require(this_packet)
        writer.write(view[sent : sent + this_packet])
        await writer.drain()
        sent += this_packet


async def send_fixed_interval(writer, data: BytesLike, bucket: TokenBucket, interval: Seconds) -> None:
    """Every ``interval``, send as many bytes as the bucket currently holds."""
    step = _seconds(interval)
    view = memoryview(data)
    completion = time.monotonic()
    sent = 0
    while sent < len(view):
        this_packet = bucket.request(len(view) - sent)
        writer.write(view[sent : sent + this_packet])
        await writer.drain()
        sent += this_packet
        if sent == len(view):
            break
        completion += step
        await asyncio.sleep(max(0.0, completion - time.monotonic()))


async def send_dynamic_packet_size(writer, data: BytesLike, bucket: TokenBucket) -> None:
    """Send in shrinking packets paced by the bucket.

    The first packets are a fraction of the message small enough to fit the
    bucket; later ones halve in size until they would take under 2 ms at the
    bucket's rate, when the rest goes at once.
    """
    bitrate = bucket.bitrate()
    if bitrate.is_unlimited():
        raise ValueError("unlimited bitrate")

    min_packet_size = int((bitrate * _MIN_PACKET_DURATION).to(UNIT).count)
    max_packet_size = bucket.capacity()
    if min_packet_size >= max_packet_size:
        raise ValueError("bucket capacity too small")

    view = memoryview(data)
    total = len(view)

    if total < min_packet_size:
        await bucket.require(total)
        writer.write(view)
        await writer.drain()
        return

    initial_d = 1
    while (total >> initial_d) >= max_packet_size:
        initial_d += 1

    i, sent, d = 0, 0, initial_d
    while sent < total:
        # stay on the initial fraction for 2^initial_d - 1 packets
        if i < (1 << initial_d) - 1:
            d = initial_d
        remaining = total - sent
        packet_size = total >> d
        if packet_size <= min_packet_size:
            packet_size = remaining
        packet_size = min(packet_size, remaining)

        await bucket.require(packet_size)
        writer.write(view[sent : sent + packet_size])
        await writer.drain()
        sent += packet_size
        i += 1
        d += 1


async def send_message(writer, message: BytesLike, delay: Seconds, bucket: TokenBucket) -> None:
    """Wait out the delay, then send the length and the payload."""
    await _wait(delay)
    await send_size(writer, len(message))
    if bucket.bitrate().is_unlimited():
        await send_unlimited(writer, message)
    else:
        await send_dynamic_packet_size(writer, message, bucket)


class Sender:
    """The sending side of a channel, with its delay, rate limit and counters."""

    def __init__(self, channel: Channel):
        self._channel = channel
        self._timer = Timer()
        self._bytes_send = 0
        self._delay = 0.0
        self._bucket = TokenBucket()
        self.strategy = Strategy()

    def set_delay(self, delay: Seconds) -> None:
        if _seconds(delay) < 0:
            raise ValueError("delay must be non-negative")
        self._delay = delay

    def set_bucket(self, rate: Bitrate, capacity: int) -> None:
        self._bucket.set(rate, capacity)

    @property
    def delay(self) -> Seconds:
        return self._delay

    @property
    def bucket_bitrate(self) -> Bitrate:
        return self._bucket.bitrate()

    @property
    def bucket_capacity(self) -> int:
        return self._bucket.capacity()

    @property
    def bytes_send(self) -> int:
        return self._bytes_send

    @property
    def elapsed_send(self) -> float:
        return self._timer.elapsed()

    async def send(self, message: BytesLike) -> None:
        """Send one message; counts its bytes once it has gone out."""
        writer = self._channel.writer
        if writer is None:
            raise RuntimeError("channel not connected")
        self._timer.start()
        try:
            await send_message(writer, message, self._delay, self._bucket)
        finally:
            self._timer.stop()
        self._bytes_send += len(message)


class Recver:
    """The receiving side of a channel, with its counters."""

    def __init__(self, channel: Channel):
        self._channel = channel
        self._timer = Timer()
        self._bytes_recv = 0

    @property
    def bytes_recv(self) -> int:
        return self._bytes_recv

    @property
    def elapsed_recv(self) -> float:
        return self._timer.elapsed()

    async def recv(self, size_hint: int = 0) -> bytes:
        """Receive one message; its length is set by the sender."""
        reader = self._channel.reader
        if reader is None:
            raise RuntimeError("channel not connected")
        self._timer.start()
        try:
            message = await recv_message(reader)
        finally:
            self._timer.stop()
        self._bytes_recv += len(message)
        return message


class CommPackage:
    """A Sender and a Recver for each player of a SocketPackage."""

    def __init__(self, sockets: SocketPackage | None = None):
        sockets = SocketPackage() if sockets is None else sockets
        self._senders = [Sender(sockets.send(i)) for i in range(len(sockets))]
        self._recvers = [Recver(sockets.recv(i)) for i in range(len(sockets))]

    def _sender(self, i: int) -> Sender:
        if not 0 <= i < len(self._senders):
            raise IndexError(f"player {i} out of range")
        return self._senders[i]

    def _recver(self, i: int) -> Recver:
        if not 0 <= i < len(self._recvers):
            raise IndexError(f"player {i} out of range")
        return self._recvers[i]

    def n_players(self) -> int:
        return len(self._senders)

    def set_delay(self, tos: Iterable[int], delay: Seconds) -> None:
        for i in tos:
            self._sender(i).set_delay(delay)

    def set_bucket(self, tos: Iterable[int], rate: Bitrate, capacity: int) -> None:
        for i in tos:
            self._sender(i).set_bucket(rate, capacity)

    def send(self, to: int, message: BytesLike):
        """Coroutine sending ``message`` to player ``to``."""
        return self._sender(to).send(message)

    def recv(self, frm: int, size_hint: int = 0):
        """Coroutine receiving one message from player ``frm``."""
        return self._recver(frm).recv(size_hint)

    def get_statistics(self) -> Statistics:
        return Statistics(
            bytes_send=[s.bytes_send for s in self._senders],
            bytes_recv=[r.bytes_recv for r in self._recvers],
            elapsed_send=[s.elapsed_send for s in self._senders],
            elapsed_recv=[r.elapsed_recv for r in self._recvers],
        )