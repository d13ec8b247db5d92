from __future__ import annotations

import math
from typing import Protocol, runtime_checkable

import numpy as np


@runtime_checkable
class RandomSource(Protocol):
    """Capability the generators draw their randomness from."""

    def uniform(self, low: float, high: float) -> float:
        ...

    def uniform_int(self, low: int, high: int) -> int:
        ...


class NumpyRandomSource:
    """RandomSource backed by ``numpy.random.Generator``.

    Pass a seed for reproducible shape sequences; without one the generator is
    seeded from OS entropy.
    """

    def __init__(self, seed: int | None = None, generator: np.random.Generator | None = None) -> None:
        self._rng = generator if generator is not None else np.random.default_rng(seed)

    def uniform(self, low: float, high: float) -> float:
        low = float(low)
        high = float(high)
        if high == low:
            return low
        return float(self._rng.uniform(low, high))

    def uniform_int(self, low: int, high: int) -> int:
        """Return an integer drawn uniformly from ``[low, high]`` (inclusive)."""

        if high < low:
            raise ValueError("uniform_int requires low <= high.")
        # floor(uniform(low, high + 1)) keeps the draw on the same stream as uniform().
        value = math.floor(self.uniform(low, high + 1))
        return int(min(max(value, low), high))
