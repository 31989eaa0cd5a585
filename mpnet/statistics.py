"""Per-peer traffic counters collected by a player."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Statistics:
    """Bytes and seconds spent sending to and receiving from each player."""

    bytes_send: list[int] = field(default_factory=list)
    bytes_recv: list[int] = field(default_factory=list)
    elapsed_send: list[float] = field(default_factory=list)
    elapsed_recv: list[float] = field(default_factory=list)
    elapsed_total: float = 0.0

    @classmethod
    def empty(cls, n_players: int) -> Statistics:
        """Zeroed counters for ``n_players`` players."""
        if n_players < 0:
            raise ValueError("number of players must be non-negative")
        return cls(
            bytes_send=[0] * n_players,
            bytes_recv=[0] * n_players,
            elapsed_send=[0.0] * n_players,
            elapsed_recv=[0.0] * n_players,
        )

    def total_bytes_send(self) -> int:
        return sum(self.bytes_send)

    def total_bytes_recv(self) -> int:
        return sum(self.bytes_recv)