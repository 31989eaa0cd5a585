"""Small integer helpers and element-wise vector arithmetic on lists."""

from __future__ import annotations

from typing import Sequence


def ceildiv(n: int, d: int) -> int:
    """Integer division rounding up."""
    return (n + d - 1) // d


def is_pow2(n: int) -> bool:
    return n != 0 and (n & (n - 1)) == 0


def format_vector(vec: Sequence, length: int = 10) -> str:
    """Render the first ``length`` elements followed by the total size."""
    head = "".join(f"{x}, " for x in vec[:length])
    return f"[{head}...], size = {len(vec)}"


def add(vec1: Sequence, vec2: Sequence, factor: float = 1) -> list:
    """Return ``vec1 + factor * vec2`` element-wise."""
    return [a + b * factor for a, b in zip(vec1, vec2, strict=True)]


def add_scalar(vec: Sequence, offset: float) -> list:
    return [x + offset for x in vec]


def add_many(vecs: Sequence[Sequence]) -> list:
    """Element-wise sum of several vectors of equal length."""
    if not vecs:
        raise ValueError("no vectors to add")
    result = [0] * len(vecs[0])
    for v in vecs:
        result = add(result, v)
    return result


def mult(vec1: Sequence, vec2: Sequence) -> list:
    """Element-wise product."""
    return [a * b for a, b in zip(vec1, vec2, strict=True)]


def scale(vec: Sequence, factor: float) -> list:
    return [x * factor for x in vec]


def mult_mv(mat: Sequence[Sequence], vec: Sequence) -> list:
    """Matrix-vector product."""
    return [sum(m * v for m, v in zip(row, vec, strict=True)) for row in mat]