from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, NamedTuple, Sequence, Tuple

import numpy as np


class Point(NamedTuple):
    x: float
    y: float


def _as_vertex_array(vertices: Iterable[Sequence[float]] | np.ndarray) -> np.ndarray:
    arr = np.array(vertices, dtype=float)
    if arr.size == 0:
        arr = np.zeros((0, 2), dtype=float)
    try:
        arr = arr.reshape(-1, 2)
    except ValueError as exc:
        raise ValueError("vertices must be a sequence of 2D points.") from exc
    if not np.all(np.isfinite(arr)):
        raise ValueError("vertices must be finite.")
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True, eq=False)
class Shape:
    """One polygon: a world-space centre, rotation, reference size and a local outline.

    ``vertices`` is an ``(N, 2)`` read-only array in the shape's own frame. Its
    order is the boundary cycle used for drawing and for index-wise morphing.
    """

    x: float
    y: float
    rotation: float
    size: float
    vertices: np.ndarray

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))
        object.__setattr__(self, "rotation", float(self.rotation))
        object.__setattr__(self, "size", float(self.size))
        object.__setattr__(self, "vertices", _as_vertex_array(self.vertices))

    @property
    def vertex_count(self) -> int:
        return int(self.vertices.shape[0])

    @property
    def points(self) -> Tuple[Point, ...]:
        return tuple(Point(float(x), float(y)) for x, y in self.vertices)

    @property
    def center(self) -> Point:
        return Point(self.x, self.y)


ShapeSet = Tuple[Shape, ...]


__all__ = ["Point", "Shape", "ShapeSet"]
