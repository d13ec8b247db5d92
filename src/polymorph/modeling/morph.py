from __future__ import annotations

from typing import Sequence

import numpy as np

from .geometry import Shape, ShapeSet


def _clamp_progress(t: float) -> float:
    return min(max(float(t), 0.0), 1.0)


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def blend_vertices(current: np.ndarray, target: np.ndarray, t: float) -> np.ndarray:
    """Interpolate two outlines that may differ in vertex count.

    Shared indices blend pairwise. Surplus vertices on the longer side blend
    against the last vertex of the shorter side, so a changing vertex count
    fans out of (or collapses into) a single anchor.
    """

    current = np.asarray(current, dtype=float).reshape(-1, 2)
    target = np.asarray(target, dtype=float).reshape(-1, 2)
    if current.shape[0] == 0 or target.shape[0] == 0:
        return np.zeros((0, 2), dtype=float)

    shared = min(current.shape[0], target.shape[0])
    if current.shape[0] > shared:
        anchor = np.repeat(target[-1:], current.shape[0] - shared, axis=0)
        target = np.vstack([target[:shared], anchor])
    elif target.shape[0] > shared:
        anchor = np.repeat(current[-1:], target.shape[0] - shared, axis=0)
        current = np.vstack([current[:shared], anchor])
    return current + (target - current) * t


def blend_shapes(current: Shape, target: Shape, t: float) -> Shape:
    """Blend one shape pair. Rotation is interpolated in raw radians."""

    t = _clamp_progress(t)
    return Shape(
        x=lerp(current.x, target.x, t),
        y=lerp(current.y, target.y, t),
        rotation=lerp(current.rotation, target.rotation, t),
        size=lerp(current.size, target.size, t),
        vertices=blend_vertices(current.vertices, target.vertices, t),
    )


def blend(current_set: Sequence[Shape], target_set: Sequence[Shape], progress: float) -> ShapeSet:
    """Return a new shape set between ``current_set`` and ``target_set``.

    The result has as many shapes as the longer input. Indices missing from
    the shorter set fall back to its first shape.
    """

    t = _clamp_progress(progress)
    current_set = tuple(current_set)
    target_set = tuple(target_set)
    if not current_set and not target_set:
        return ()
    if not current_set:
        current_set = target_set
    if not target_set:
        target_set = current_set

    count = max(len(current_set), len(target_set))
    blended = []
    for index in range(count):
        current = current_set[index] if index < len(current_set) else current_set[0]
        target = target_set[index] if index < len(target_set) else target_set[0]
        blended.append(blend_shapes(current, target, t))
    return tuple(blended)


def morph(current_set: Sequence[Shape], target_set: Sequence[Shape], progress: float) -> ShapeSet:
    """Alias for blend."""

    return blend(current_set, target_set, progress)


__all__ = ["blend", "blend_shapes", "blend_vertices", "lerp", "morph"]
