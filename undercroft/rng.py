"""Uniform random source shared by placement, cave generation and the default AI."""

from __future__ import annotations

import random
from typing import Optional, Protocol


class RandomSource(Protocol):
    def uniform(self, bound: int) -> int:
        ...


class UniformSource:
    """Seedable ``uniform(bound)`` over a private ``random.Random``.

    A local generator keeps external ``random`` usage from perturbing level
    generation; seed 0 is a valid deterministic seed, None picks one.
    """

    def __init__(self, seed: Optional[int] = None):
        if seed is None:
            seed = random.randint(0, 2**31 - 1)
        self.seed = seed
        self._rng = random.Random(seed)

    def uniform(self, bound: int) -> int:
        """Return an integer in [0, bound)."""
        if bound <= 0:
            raise ValueError("bound must be positive")
        return self._rng.randrange(bound)

    def chance(self, probability: float) -> bool:
        return self._rng.random() < probability


__all__ = ["RandomSource", "UniformSource"]
