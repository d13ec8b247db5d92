from __future__ import annotations

import logging
import math
from typing import Sequence

from polymorph._config import MorphParameters
from polymorph.random_source import NumpyRandomSource, RandomSource

from .geometry import Shape, ShapeSet
from .vertices import generate_vertices

logger = logging.getLogger(__name__)

SHAPE_SIZE_FACTOR = 0.9
MAX_GENERATION_ATTEMPTS = 8


class GenerationError(RuntimeError):
    """Raised when a shape set cannot be generated."""


def generate_shape_set(
    params: MorphParameters,
    center: Sequence[float],
    rng: RandomSource,
) -> ShapeSet:
    """Build one random shape set clustered around ``center``.

    All shapes in a set share a base size drawn from ``[min_size, max_size]``;
    each gets its own offset, rotation and vertex count.
    """

    cx, cy = (float(c) for c in center)
    size = rng.uniform(params.min_size, params.max_size)
    shape_count = rng.uniform_int(1, int(params.num_shapes))
    half = size / 2.0
    shape_size = size * SHAPE_SIZE_FACTOR

    shapes = []
    for _ in range(shape_count):
        x = cx + rng.uniform(-half, half)
        y = cy + rng.uniform(-half, half)
        rotation = rng.uniform(0.0, 2.0 * math.pi)
        vertex_count = rng.uniform_int(int(params.min_vertices), int(params.max_vertices))
        vertices = generate_vertices(vertex_count, shape_size, rng)
        shapes.append(Shape(x=x, y=y, rotation=rotation, size=shape_size, vertices=vertices))
    return tuple(shapes)


class ShapeSetGenerator:
    """Produce shape sets for a canvas, re-reading parameters on every call."""

    def __init__(
        self,
        rng: RandomSource | None = None,
        canvas_size: Sequence[float] = (600, 600),
        max_attempts: int = MAX_GENERATION_ATTEMPTS,
    ) -> None:
        if max_attempts <= 0:
            raise ValueError("max_attempts must be positive.")
        self.rng = rng or NumpyRandomSource()
        self.canvas_size = canvas_size
        self._max_attempts = max_attempts

    @property
    def canvas_size(self) -> tuple[float, float]:
        return self._canvas_size

    @canvas_size.setter
    def canvas_size(self, value: Sequence[float]) -> None:
        width, height = (float(v) for v in value)
        if width <= 0 or height <= 0:
            raise ValueError("canvas_size must be positive.")
        self._canvas_size = (width, height)

    @property
    def center(self) -> tuple[float, float]:
        width, height = self._canvas_size
        return width / 2.0, height / 2.0

    def generate(self, params: MorphParameters) -> ShapeSet:
        for attempt in range(1, self._max_attempts + 1):
            shapes = generate_shape_set(params, self.center, self.rng)
            if shapes:
                logger.debug(
                    "Generated %d shape(s) with vertex counts %s",
                    len(shapes),
                    [shape.vertex_count for shape in shapes],
                )
                return shapes
            logger.warning("Shape generation produced an empty set (attempt %d)", attempt)
        raise GenerationError(f"No shapes generated after {self._max_attempts} attempts.")


__all__ = ["GenerationError", "ShapeSetGenerator", "generate_shape_set"]
