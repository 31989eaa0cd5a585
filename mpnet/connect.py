"""Establishing a full mesh of connections between the players of a session."""

from __future__ import annotations

import asyncio
import ssl
import struct
from typing import Sequence, Tuple

from .playerid import MAX_NUM_PLAYERS
from .sockets import Channel, SocketPackage

Endpoint = Tuple[str, int]

_PID = struct.Struct("<Q")
_RETRY_INTERVAL = 0.05


def _uses_tls(channel: Channel) -> bool:
    writer = channel.writer
    return writer is not None and writer.get_extra_info("ssl_object") is not None


async def handshake(
    my_pid: int,
    peer_pid: int,
    channel_send: Channel,
    channel_recv: Channel,
    order: bool,
) -> bool:
    """Confirm the identity of the peer on a freshly connected channel pair.

    Plain channels exchange player ids as 8-byte little-endian integers; the
    side with ``order`` set reads first. TLS channels are already verified by
    their certificates. Returns whether the peer is the expected one.
    """
    if my_pid == peer_pid:
        raise RuntimeError("self connection is unexpected")

    if _uses_tls(channel_send) and _uses_tls(channel_recv):
        return True

    if channel_send.writer is None or channel_recv.reader is None:
        raise RuntimeError("channel not connected")

    async def write_pid() -> None:
        channel_send.writer.write(_PID.pack(my_pid))
        await channel_send.writer.drain()

    async def read_pid() -> int:
        (pid,) = _PID.unpack(await channel_recv.reader.readexactly(_PID.size))
        return pid

    if order:
        received = await read_pid()
        await write_pid()
    else:
        await write_pid()
        received = await read_pid()

    return received == peer_pid


async def _dial(
    endpoint: Endpoint,
    ssl_context: ssl.SSLContext | None,
    server_hostname: str | None,
) -> Channel:
    host, port = endpoint
    while True:
        try:
            if ssl_context is None:
                reader, writer = await asyncio.open_connection(host, port)
            else:
                reader, writer = await asyncio.open_connection(
                    host, port, ssl=ssl_context, server_hostname=server_hostname
                )
            return Channel(reader, writer)
        except ConnectionRefusedError:
            # the peer is not listening yet
            await asyncio.sleep(_RETRY_INTERVAL)


async def connect_pair(
    endpoint: Endpoint,
    accept_queue: asyncio.Queue,
    order: bool,
    ssl_context: ssl.SSLContext | None = None,
    server_hostname: str | None = None,
) -> tuple[Channel, Channel]:
    """Dial ``endpoint`` for sending and take the next accepted channel for receiving.

    With ``order`` set the accepted channel is taken first, otherwise the dial
    comes first. Refused dials are retried until the peer listens.
    Returns ``(send_channel, recv_channel)``.
    """
    if order:
        recv_channel = await accept_queue.get()
        send_channel = await _dial(endpoint, ssl_context, server_hostname)
    else:
        send_channel = await _dial(endpoint, ssl_context, server_hostname)
        recv_channel = await accept_queue.get()
    return send_channel, recv_channel


async def connect_all(
    my_pid: int,
    n_players: int,
    endpoints: Sequence[Endpoint],
    ssl_context: ssl.SSLContext | None = None,
) -> SocketPackage:
    """Connect to every other player and return the channels.

    ``endpoints[my_pid]`` is where this player listens; the others are dialled.
    Players must start in increasing order of their ids.
    """
    if my_pid >= n_players or my_pid < 0:
        raise ValueError("invalid pid")
    if n_players != len(endpoints):
        raise ValueError("argument mismatch")
    if n_players > MAX_NUM_PLAYERS:
        raise ValueError("too much players")

    accept_queue: asyncio.Queue = asyncio.Queue()

    async def on_accept(reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        await accept_queue.put(Channel(reader, writer))

    host, port = endpoints[my_pid]
    server = await asyncio.start_server(on_accept, host, port, ssl=ssl_context)
    package = SocketPackage(n_players)
    try:
        for peer_pid in range(n_players):
            if peer_pid == my_pid:
                continue
            order = my_pid < peer_pid
            send_channel, recv_channel = await connect_pair(
                endpoints[peer_pid],
                accept_queue,
                order,
                ssl_context,
                f"Party{peer_pid}",
            )
            package.set_send(peer_pid, send_channel)
            package.set_recv(peer_pid, recv_channel)
            if not await handshake(my_pid, peer_pid, send_channel, recv_channel, order):
                raise ConnectionError(f"handshake with player {peer_pid} failed")
    except BaseException:
        package.close()
        while not accept_queue.empty():
            stray = accept_queue.get_nowait()
            if stray.writer is not None:
                stray.writer.close()
        raise
    finally:
        server.close()
    return package