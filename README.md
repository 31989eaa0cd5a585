# mpnet

Asyncio building blocks for multi-party protocols. Every party listens on
one endpoint and dials every other party, so each pair of parties shares two
streams (one per direction, plain TCP or TLS). Messages travel with an
8-byte little-endian length prefix, and each outgoing stream can be given a
delay and a token-bucket rate limit to emulate network conditions.

## Install

```
pip install mpnet
pip install "mpnet[test]"   # to run the tests
```

## Connecting and exchanging messages

```python
import asyncio

from mpnet.comm import CommPackage
from mpnet.connect import connect_all
from mpnet.playerid import PlayerSet


async def main(my_pid, endpoints):
    n_players = len(endpoints)
    sockets = await connect_all(my_pid, n_players, endpoints)
    comm = CommPackage(sockets)

    peers = PlayerSet.all_but(n_players, my_pid)
    await asyncio.gather(*(comm.send(peer, b"hello") for peer in peers))
    replies = await asyncio.gather(*(comm.recv(peer) for peer in peers))

    print(comm.get_statistics())
    sockets.close()
```

`endpoints` holds one `(host, port)` pair per party; `endpoints[my_pid]` is
where this party listens. Parties must start connecting in increasing order
of their ids. After the streams are open, each pair of plain channels
exchanges player ids (`mpnet.connect.handshake`); a mismatch raises
`ConnectionError`. `connect_all` raises `ValueError` for a bad pid, a
wrong number of endpoints or more than 128 players.

For TLS, pass an `ssl.SSLContext` as `ssl_context`. The same context serves
the listening side and the dialling side; the peer with id `n` is expected to
present a certificate for the host name `Party<n>`.

`CommPackage.send` and `CommPackage.recv` return coroutines; the length of a
received message is set by the sender. `get_statistics()` returns a
`mpnet.statistics.Statistics` with bytes and seconds of the last operation
per peer.

The lower-level pieces are in `mpnet.comm` too: `Sender`, `Recver`,
`recv_message`, `send_message`, and the packet strategies
`send_unlimited`, `send_fixed_packet_size`, `send_fixed_interval` and
`send_dynamic_packet_size`. `mpnet.connect.connect_pair` opens a single
pair of channels.

## Emulating network conditions

```python
from mpnet.bitrate import gbps

comm.set_delay(peers, 0.02)                      # wait 20 ms before each message
comm.set_bucket(PlayerSet([1]), gbps(1), 1_000_000)  # 1 Gbps, 1 MB burst
```

With a limited rate, messages go out in packets paced by a
`mpnet.throttle.TokenBucket`; the bucket capacity must exceed what the rate
delivers in 2 ms, or sending raises `ValueError`.

## Rates and sizes

`mpnet.bitrate` has `Bitrate` and `Datasize` with decimal multiples, built
with `bps`, `kbps`, `mbps`, `gbps`, `nbytes`, `kilobytes`, `megabytes` and
`gigabytes`. A size divided by a rate gives a `timedelta`, a rate times a
`timedelta` gives a size, and a size divided by a `timedelta` gives a rate.
`.to(multiple)` converts between multiples.

## Other tools

- `mpnet.playerid.PlayerSet`: a set of player ids below 128 with set
  operators, iterated in ascending order.
- `mpnet.sockets.SocketPackage`, `Channel`: send and receive streams per
  player.
- `mpnet.bytevector.ByteVector`, `RawVector`: growable buffers with separate
  size and capacity.
- `mpnet.futures`: `FutureVector`, `PromiseVector` and `get_or_raise` for
  waiting on groups of `concurrent.futures` futures.
- `mpnet.timer.Timer`: a stopwatch that also works as a context manager.
- `mpnet.mathutil`: `ceildiv`, `is_pow2` and element-wise list helpers.

## What it does not do

Everything here is asyncio: there is no blocking player object that runs an
event loop on worker threads and offers `send`, `broadcast` or `exchange` as
plain calls, and no two-party shortcut. Programs drive the coroutines above
from their own event loop. There is no packed bit vector, no permutation
helper and no command-line program.