"""Seeded pseudo random numbers and the selections built on them.

The stream depends on nothing but the seed string, so a request replayed with
the same fields draws the same values in the same order.
"""

import math
from typing import Callable, Sequence, TypeAlias, TypeVar


T = TypeVar("T")

PRNG: TypeAlias = Callable[[], float]


MASK = 0xFFFFFFFF


def imul(a: int, b: int) -> int:
    return (a * b) & MASK


def rotl(h: int, n: int) -> int:
    return ((h << n) | (h >> (32 - n))) & MASK


def code_units(seed: str) -> list[int]:
    """UTF-16 code units, so astral characters hash as surrogate pairs."""
    data = seed.encode("utf-16-le")
    return [int.from_bytes(data[i : i + 2], "little") for i in range(0, len(data), 2)]


def create_prng(seed: str) -> PRNG:
    units = code_units(seed)
    h = 1779033703 ^ len(units)
    for unit in units:
        h = imul(h ^ unit, 3432918353)
        h = rotl(h, 13)

    def draw() -> float:
        nonlocal h
        h = imul(h ^ (h >> 16), 2246822507)
        h = imul(h ^ (h >> 13), 3266489909)
        h ^= h >> 16
        return h / 4294967296

    return draw


def pick_one(prng: PRNG, options: Sequence[T]) -> T | None:
    if not options:
        return None
    return options[math.floor(prng() * len(options))]


def pick_unique_subset(prng: PRNG, options: Sequence[T], count: int) -> list[T]:
    if count <= 0:
        return []
    pool = list(options)
    chosen: list[T] = []
    while pool and len(chosen) < count:
        chosen.append(pool.pop(math.floor(prng() * len(pool))))
    return chosen
