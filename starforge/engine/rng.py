"""Seeded random source shared by every generation step."""
from __future__ import annotations

import random
from typing import Optional, Sequence, TypeVar

T = TypeVar("T")


class SeededRandom(random.Random):
    """Deterministic random stream for one generation run.

    The same seed and the same sequence of calls always yield the same values.
    Instances are never shared between runs.
    """

    def __init__(self, seed: int) -> None:
        super().__init__(seed)
        self.initial_seed = seed

    def next_int(self, a: Optional[int] = None, b: Optional[int] = None) -> int:
        """Uniform int in [a, b); ``next_int(n)`` is [0, n) and ``next_int()`` a 31 bit value."""

        if a is None:
            return self.randrange(0, 2**31 - 1)
        if b is None:
            a, b = 0, a
        if b <= a:
            return a
        return self.randrange(a, b)

    def next_float(self, a: float = 0.0, b: float = 1.0) -> float:
        return a + (b - a) * self.random()

    def next_double(self) -> float:
        return self.random()

    def normal(self, mean: float, sd: float) -> float:
        return self.gauss(mean, sd)

    def next_pick(self, chance: float) -> bool:
        return self.random() < chance

    def item(self, items: Sequence[T]) -> T:
        if not items:
            raise IndexError("Cannot pick an item from an empty sequence")
        return items[self.randrange(0, len(items))]


__all__ = ["SeededRandom"]
