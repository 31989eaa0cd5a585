"""Per-peer pairs of stream channels, one for sending and one for receiving."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Sequence


@dataclass
class Channel:
    """One direction of a connection: an asyncio stream reader and writer."""

    reader: asyncio.StreamReader | None = None
    writer: asyncio.StreamWriter | None = None


class SocketPackage:
    """A send channel and a receive channel for each of ``n`` players."""

    def __init__(self, n: int = 0):
        if n < 0:
            raise ValueError("number of channels must be non-negative")
        self._send = [Channel() for _ in range(n)]
        self._recv = [Channel() for _ in range(n)]

    @classmethod
    def from_channels(
        cls, send_channels: Sequence[Channel], recv_channels: Sequence[Channel]
    ) -> SocketPackage:
        if len(send_channels) != len(recv_channels):
            raise ValueError("number of sockets mismatch")
        if len(send_channels) <= 1:
            raise ValueError("too few sockets")
        package = cls()
        package._send = list(send_channels)
        package._recv = list(recv_channels)
        return package

    def __len__(self) -> int:
        return len(self._send)

    def _check(self, i: int) -> int:
        if not 0 <= i < len(self._send):
            raise IndexError(f"channel index {i} out of range")
        return i

    def send(self, i: int) -> Channel:
        return self._send[self._check(i)]

    def recv(self, i: int) -> Channel:
        return self._recv[self._check(i)]

    def set_send(self, i: int, channel: Channel) -> None:
        self._send[self._check(i)] = channel

    def set_recv(self, i: int, channel: Channel) -> None:
        self._recv[self._check(i)] = channel

    def close(self) -> None:
        """Close every open writer and leave empty channels in their place."""
        for channels in (self._send, self._recv):
            for channel in channels:
                if channel.writer is not None:
                    channel.writer.close()
            channels[:] = [Channel() for _ in channels]