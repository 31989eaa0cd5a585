"""Growable typed buffers whose capacity is managed apart from their size."""

from __future__ import annotations

from array import array
from typing import Iterable, Iterator, Union

BytesLike = Union[bytes, bytearray, memoryview]


class RawVector:
    """A typed buffer with separate size and capacity.

    Shrinking keeps the storage, so elements beyond the size survive and
    reappear if the vector grows again within its capacity. Growth past
    the capacity appends zeroed storage.
    """

    __hash__ = None

    def __init__(self, typecode: str, size: int = 0, fill=0):
        if size < 0:
            raise ValueError("size must be non-negative")
        self._data = array(typecode, [fill]) * size
        self._size = size

    @property
    def typecode(self) -> str:
        return self._data.typecode

    def __len__(self) -> int:
        return self._size

    def __bool__(self) -> bool:
        return self._size != 0

    def _index(self, pos) -> int:
        if isinstance(pos, bool) or not isinstance(pos, int):
            raise TypeError("index must be an integer")
        if pos < 0:
            pos += self._size
        if not 0 <= pos < self._size:
            raise IndexError("index out of range")
        return pos

    def __getitem__(self, pos):
        return self._data[self._index(pos)]

    def __setitem__(self, pos, value) -> None:
        self._data[self._index(pos)] = value

    def __iter__(self) -> Iterator:
        return iter(self._data[: self._size])

    def __eq__(self, other):
        if not isinstance(other, RawVector):
            return NotImplemented
        return self.typecode == other.typecode and (
            self._data[: self._size] == other._data[: other._size]
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.typecode!r}, {list(self)!r})"

    def capacity(self) -> int:
        """Number of elements the storage holds without growing."""
        return len(self._data)

    def resize(self, n: int) -> None:
        """Set the size; growth reuses spare capacity before adding storage."""
        if n < 0:
            raise ValueError("size must be non-negative")
        if n > self._size:
            self.reserve(n)
        self._size = n

    def reserve(self, n: int) -> None:
        """Make sure at least ``n`` elements fit without further growth."""
        extra = n - len(self._data)
        if extra > 0:
            self._data.extend(array(self.typecode, [0]) * extra)

    def shrink_to_fit(self) -> None:
        """Release storage beyond the current size."""
        del self._data[self._size :]

    def clear(self) -> None:
        """Set the size to zero, keeping the capacity."""
        self._size = 0

    def tobytes(self) -> bytes:
        return self._data[: self._size].tobytes()


class ByteVector(RawVector):
    """A growable byte buffer."""

    def __init__(self, data: Union[int, BytesLike, Iterable[int]] = 0, fill: int = 0):
        if isinstance(data, int):
            super().__init__("B", data, fill)
        else:
            super().__init__("B")
            self.push_back(data)

    def __bytes__(self) -> bytes:
        return self.tobytes()

    def __repr__(self) -> str:
        return f"ByteVector({self.tobytes()!r})"

    def push_back(self, data) -> None:
        """Append one byte given as an int, or every byte of a bytes-like object."""
        if isinstance(data, int):
            chunk = bytes([data])
        else:
            chunk = bytes(data)
        if not chunk:
            return
        pos = self._size
        self.resize(pos + len(chunk))
        self._data[pos : pos + len(chunk)] = array("B", chunk)

    def pop_back(self, n: int = 1) -> None:
        """Drop the last ``n`` bytes."""
        if n < 0:
            raise ValueError("count must be non-negative")
        if n > self._size:
            raise IndexError("pop more bytes than stored")
        self.resize(self._size - n)