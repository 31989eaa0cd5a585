"""Bit rates and data sizes with decimal multiples, and the arithmetic between them."""

from __future__ import annotations

import math
from datetime import timedelta
from fractions import Fraction
from functools import total_ordering
from numbers import Real

UNIT = 1
KILO = 1000
MEGA = 1000**2
GIGA = 1000**3

_BITRATE_PREFIX = {KILO: "K", MEGA: "M", GIGA: "G"}
_DATASIZE_SUFFIX = {UNIT: "B", KILO: "KB", MEGA: "MB", GIGA: "GB"}


def _ratio(multiple) -> Fraction:
    ratio = Fraction(multiple)
    if ratio <= 0:
        raise ValueError("multiple must be positive")
    return ratio


@total_ordering
class Bitrate:
    """A transfer rate of ``count`` times ``multiple`` bits per second."""

    __slots__ = ("count", "multiple")

    def __init__(self, count=math.inf, multiple=UNIT):
        self.count = float(count)
        self.multiple = _ratio(multiple)

    @classmethod
    def zero(cls, multiple=UNIT) -> Bitrate:
        return cls(0, multiple)

    @classmethod
    def unlimited(cls, multiple=UNIT) -> Bitrate:
        return cls(math.inf, multiple)

    def is_unlimited(self) -> bool:
        return self.count == math.inf

    def to(self, multiple) -> Bitrate:
        """Return the same rate expressed in another multiple."""
        target = _ratio(multiple)
        if self.is_unlimited():
            return Bitrate.unlimited(target)
        return Bitrate(self.count * float(self.multiple / target), target)

    def bits_per_second(self) -> float:
        return self.count * float(self.multiple)

    def __str__(self) -> str:
        if self.count == 0:
            return "0bps"
        if self.is_unlimited():
            return "unlimited"
        prefix = _BITRATE_PREFIX.get(self.multiple)
        if prefix is None:
            raise ValueError("unknown bitrate multiple")
        return f"{self.count:f}{prefix}bps"

    def __repr__(self) -> str:
        return f"Bitrate({self.count!r}, {self.multiple})"

    def __mul__(self, other):
        if isinstance(other, timedelta):
            if self.is_unlimited():
                raise ValueError("duration multiplied by unlimited bitrate")
            return Datasize(other.total_seconds() * self.count / 8, self.multiple)
        if isinstance(other, Real) and not isinstance(other, bool):
            return Bitrate(self.count * other, self.multiple)
        return NotImplemented

    def __rmul__(self, other):
        return self.__mul__(other)

    def __eq__(self, other):
        if not isinstance(other, Bitrate):
            return NotImplemented
        return self.bits_per_second() == other.bits_per_second()

    def __lt__(self, other):
        if not isinstance(other, Bitrate):
            return NotImplemented
        return self.bits_per_second() < other.bits_per_second()

    def __hash__(self):
        return hash(self.bits_per_second())


@total_ordering
class Datasize:
    """An amount of data of ``count`` times ``multiple`` bytes."""

    __slots__ = ("count", "multiple")

    def __init__(self, count=0, multiple=UNIT):
        self.count = count
        self.multiple = _ratio(multiple)

    @classmethod
    def infinity(cls, multiple=UNIT) -> Datasize:
        return cls(math.inf, multiple)

    def is_infinite(self) -> bool:
        return self.count == math.inf

    def to(self, multiple) -> Datasize:
        """Return the size in another multiple, truncated to a whole count."""
        target = _ratio(multiple)
        if self.is_infinite():
            return Datasize.infinity(target)
        value = self.count * (self.multiple / target)
        return Datasize(int(value), target)

    def nbytes(self):
        return self.count * self.multiple

    def __str__(self) -> str:
        suffix = _DATASIZE_SUFFIX.get(self.multiple)
        if suffix is None:
            raise ValueError("unknown multiple of datasize")
        count = self.count
        if isinstance(count, float) and count.is_integer():
            count = int(count)
        return f"{count}{suffix}"

    def __repr__(self) -> str:
        return f"Datasize({self.count!r}, {self.multiple})"

    def _same_multiple(self, other: Datasize) -> Datasize:
        return other if other.multiple == self.multiple else other.to(self.multiple)

    def __add__(self, other):
        if not isinstance(other, Datasize):
            return NotImplemented
        other = self._same_multiple(other)
        return Datasize(self.count + other.count, self.multiple)

    def __sub__(self, other):
        if not isinstance(other, Datasize):
            return NotImplemented
        other = self._same_multiple(other)
        if self.count < other.count:
            raise ValueError("datasize subtraction would be negative")
        return Datasize(self.count - other.count, self.multiple)

    def __mul__(self, multiple):
        if isinstance(multiple, int) and not isinstance(multiple, bool):
            if multiple < 0:
                raise ValueError("multiplier must be non-negative")
            return Datasize(self.count * multiple, self.multiple)
        return NotImplemented

    def __truediv__(self, other):
        if isinstance(other, Bitrate):
            if other.is_unlimited():
                raise ValueError("datasize divide by unlimited bitrate")
            if other.count == 0:
                raise ValueError("datasize divide by zero bitrate")
            seconds = 8 * self.count / other.count * float(self.multiple / other.multiple)
            return timedelta(seconds=seconds)
        if isinstance(other, timedelta):
            seconds = other.total_seconds()
            if seconds == 0:
                return Bitrate.unlimited(self.multiple)
            return Bitrate(8 * self.count / seconds, self.multiple)
        return NotImplemented

    def __eq__(self, other):
        if not isinstance(other, Datasize):
            return NotImplemented
        return self.nbytes() == other.nbytes()

    def __lt__(self, other):
        if not isinstance(other, Datasize):
            return NotImplemented
        return self.nbytes() < other.nbytes()

    def __hash__(self):
        return hash(self.nbytes())


def bps(value) -> Bitrate:
    return Bitrate(value, UNIT)


def kbps(value) -> Bitrate:
    return Bitrate(value, KILO)


def mbps(value) -> Bitrate:
    return Bitrate(value, MEGA)


def gbps(value) -> Bitrate:
    return Bitrate(value, GIGA)


def nbytes(value) -> Datasize:
    return Datasize(value, UNIT)


def kilobytes(value) -> Datasize:
    return Datasize(value, KILO)


def megabytes(value) -> Datasize:
    return Datasize(value, MEGA)


def gigabytes(value) -> Datasize:
    return Datasize(value, GIGA)