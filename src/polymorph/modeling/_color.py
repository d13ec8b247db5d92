from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np
from PIL import ImageColor


def _normalize_color(color: Sequence[float] | str) -> Tuple[Tuple[float, float, float], float]:
    if isinstance(color, str):
        rgba = ImageColor.getcolor(color, "RGBA")
        rgb = tuple(c / 255.0 for c in rgba[:3])
        return rgb, rgba[3] / 255.0

    arr = np.asarray(color, dtype=float).flatten()
    if arr.size not in (3, 4):
        raise ValueError("Color must be RGB or RGBA.")
    if arr.max() > 1.0:
        arr = arr / 255.0
    rgb = tuple(float(c) for c in arr[:3])
    alpha = float(arr[3]) if arr.size == 4 else 1.0
    return rgb, alpha


def to_rgba8(color: Sequence[float] | str) -> Tuple[int, int, int, int]:
    """Return the color as 0-255 RGBA, the form PIL drawing expects."""

    rgb, alpha = _normalize_color(color)
    r, g, b = (int(round(c * 255)) for c in rgb)
    return r, g, b, int(round(alpha * 255))


def to_float_rgb(color: Sequence[float] | str) -> Tuple[float, float, float]:
    rgb, _ = _normalize_color(color)
    return rgb
