from __future__ import annotations

import numpy as np

from .geometry import Shape


def smooth_outline(vertices: np.ndarray, samples_per_segment: int = 8) -> np.ndarray:
    """Sample the closed Catmull-Rom spline through ``vertices``.

    Every input vertex appears in the output, followed by the interpolated
    points leading to the next one. The first point is not repeated at the end.
    Outlines with fewer than three vertices are returned unchanged.
    """

    pts = np.asarray(vertices, dtype=float).reshape(-1, 2)
    if pts.shape[0] < 3:
        return pts.copy()
    samples_per_segment = max(int(samples_per_segment), 1)

    p0 = np.roll(pts, 1, axis=0)
    p1 = pts
    p2 = np.roll(pts, -1, axis=0)
    p3 = np.roll(pts, -2, axis=0)

    t = np.linspace(0.0, 1.0, samples_per_segment, endpoint=False).reshape(1, -1, 1)
    t2 = t * t
    t3 = t2 * t
    p0, p1, p2, p3 = (p[:, np.newaxis, :] for p in (p0, p1, p2, p3))
    curve = 0.5 * (
        2.0 * p1
        + (-p0 + p2) * t
        + (2.0 * p0 - 5.0 * p1 + 4.0 * p2 - p3) * t2
        + (-p0 + 3.0 * p1 - 3.0 * p2 + p3) * t3
    )
    return curve.reshape(-1, 2)


def to_world(shape: Shape, points: np.ndarray | None = None) -> np.ndarray:
    """Rotate local points by the shape's rotation, then move them to its centre."""

    pts = shape.vertices if points is None else np.asarray(points, dtype=float).reshape(-1, 2)
    c = np.cos(shape.rotation)
    s = np.sin(shape.rotation)
    rot = np.array([[c, -s], [s, c]], dtype=float)
    return pts @ rot.T + np.array([shape.x, shape.y], dtype=float)


def world_outline(shape: Shape, samples_per_segment: int = 8) -> np.ndarray:
    return to_world(shape, smooth_outline(shape.vertices, samples_per_segment))


__all__ = ["smooth_outline", "to_world", "world_outline"]
