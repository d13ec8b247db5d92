from __future__ import annotations

import math

import numpy as np

from polymorph.random_source import RandomSource

ANGLE_JITTER = 0.2
RADIUS_RANGE = (0.6, 1.0)
POSITION_JITTER = 0.05


def generate_vertices(vertex_count: int, base_size: float, rng: RandomSource) -> np.ndarray:
    """Return an ``(vertex_count, 2)`` star-like outline around the origin.

    Vertices sit on evenly spaced base angles, each nudged in angle, radius and
    position. They are kept in generation order so the outline stays a simple
    cycle for moderate jitter.
    """

    vertex_count = int(vertex_count)
    if vertex_count < 3:
        raise ValueError("vertex_count must be >= 3.")
    base_size = float(base_size)
    if not math.isfinite(base_size) or base_size <= 0:
        raise ValueError("base_size must be positive.")

    jitter = base_size * POSITION_JITTER
    points = np.empty((vertex_count, 2), dtype=float)
    for i in range(vertex_count):
        base_angle = 2.0 * math.pi * i / vertex_count
        angle = base_angle + rng.uniform(-ANGLE_JITTER, ANGLE_JITTER)
        radius = base_size * rng.uniform(*RADIUS_RANGE)
        points[i, 0] = math.cos(angle) * radius + rng.uniform(-jitter, jitter)
        points[i, 1] = math.sin(angle) * radius + rng.uniform(-jitter, jitter)
    return points


__all__ = ["generate_vertices"]
