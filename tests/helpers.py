from __future__ import annotations

import math
from typing import Iterable, Sequence

from polymorph.modeling.geometry import Shape


class MidpointRandom:
    """Deterministic source that always returns the middle of the range."""

    def uniform(self, low: float, high: float) -> float:
        return (float(low) + float(high)) / 2.0

    def uniform_int(self, low: int, high: int) -> int:
        return int(min(max(math.floor(self.uniform(low, high + 1)), low), high))


class ScriptedRandom:
    """Replays a fixed list of unit draws, scaled into each requested range."""

    def __init__(self, units: Iterable[float]) -> None:
        self._units = list(units)
        self.calls = 0

    def uniform(self, low: float, high: float) -> float:
        unit = self._units[self.calls % len(self._units)]
        self.calls += 1
        return float(low) + (float(high) - float(low)) * unit

    def uniform_int(self, low: int, high: int) -> int:
        return int(min(max(math.floor(self.uniform(low, high + 1)), low), high))


def make_shape(
    vertices: Sequence[Sequence[float]],
    x: float = 0.0,
    y: float = 0.0,
    rotation: float = 0.0,
    size: float = 1.0,
) -> Shape:
    return Shape(x=x, y=y, rotation=rotation, size=size, vertices=vertices)
