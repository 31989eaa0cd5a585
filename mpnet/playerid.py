"""Player identifiers and sets of players."""

from __future__ import annotations

from typing import Iterable, Iterator

MAX_NUM_PLAYERS = 128

SUPER_CLIENT_ID = 0
SHARING_DECIMAL_LEN = 12
SHARING_TOTAL_LEN = 128
SHARING_RING_SIZE = 1 << SHARING_TOTAL_LEN
SHARING_DECIMAL_SIZE = 1 << SHARING_DECIMAL_LEN


def _check(pid: int) -> int:
    if not 0 <= pid < MAX_NUM_PLAYERS:
        raise IndexError(f"player id {pid} out of range [0, {MAX_NUM_PLAYERS})")
    return pid


class PlayerSet:
    """A set of player ids below MAX_NUM_PLAYERS, iterated in ascending order."""

    __slots__ = ("_mask",)
    __hash__ = None

    def __init__(self, pids: Iterable[int] = ()):
        self._mask = 0
        for pid in pids:
            self.insert(pid)

    @classmethod
    def _from_mask(cls, mask: int) -> PlayerSet:
        result = cls()
        result._mask = mask
        return result

    @classmethod
    def all(cls, n_players: int) -> PlayerSet:
        return cls(range(n_players))

    @classmethod
    def all_but(cls, n_players: int, but: int) -> PlayerSet:
        result = cls.all(n_players)
        result.erase(but)
        return result

    def __len__(self) -> int:
        return bin(self._mask).count("1")

    def __bool__(self) -> bool:
        return self._mask != 0

    def __iter__(self) -> Iterator[int]:
        mask = self._mask
        return (pid for pid in range(mask.bit_length()) if (mask >> pid) & 1)

    def __contains__(self, pid) -> bool:
        return bool((self._mask >> _check(pid)) & 1)

    def __eq__(self, other):
        if not isinstance(other, PlayerSet):
            return NotImplemented
        return self._mask == other._mask

    def __or__(self, other: PlayerSet) -> PlayerSet:
        if not isinstance(other, PlayerSet):
            return NotImplemented
        return PlayerSet._from_mask(self._mask | other._mask)

    def __and__(self, other: PlayerSet) -> PlayerSet:
        if not isinstance(other, PlayerSet):
            return NotImplemented
        return PlayerSet._from_mask(self._mask & other._mask)

    def __xor__(self, other: PlayerSet) -> PlayerSet:
        if not isinstance(other, PlayerSet):
            return NotImplemented
        return PlayerSet._from_mask(self._mask ^ other._mask)

    def __add__(self, other: PlayerSet) -> PlayerSet:
        return self.__or__(other)

    def __sub__(self, other: PlayerSet) -> PlayerSet:
        if not isinstance(other, PlayerSet):
            return NotImplemented
        return PlayerSet._from_mask(self._mask & ~other._mask)

    def __repr__(self) -> str:
        return f"PlayerSet({list(self)})"

    def insert(self, pid: int) -> None:
        self._mask |= 1 << _check(pid)

    def erase(self, pid: int) -> None:
        self._mask &= ~(1 << _check(pid))

    def clear(self) -> None:
        self._mask = 0

    def merge(self, other: PlayerSet) -> None:
        self._mask |= other._mask

    def copy(self) -> PlayerSet:
        return PlayerSet._from_mask(self._mask)