from __future__ import annotations

import math
from typing import Callable, Dict

EasingFunction = Callable[[float], float]


def _clamp01(t: float) -> float:
    t = float(t)
    if t <= 0.0:
        return 0.0
    if t >= 1.0:
        return 1.0
    return t


def linear(t: float) -> float:
    return _clamp01(t)


def ease_in_out_cubic(t: float) -> float:
    t = _clamp01(t)
    if t < 0.5:
        return 4.0 * t * t * t
    return 1.0 - (-2.0 * t + 2.0) ** 3 / 2.0


def ease_in_out_quad(t: float) -> float:
    t = _clamp01(t)
    if t < 0.5:
        return 2.0 * t * t
    return 1.0 - (-2.0 * t + 2.0) ** 2 / 2.0


def ease_in_out_sine(t: float) -> float:
    t = _clamp01(t)
    return -(math.cos(math.pi * t) - 1.0) / 2.0


EASINGS: Dict[str, EasingFunction] = {
    "cubic": ease_in_out_cubic,
    "quad": ease_in_out_quad,
    "sine": ease_in_out_sine,
    "linear": linear,
}

DEFAULT_EASING = "cubic"


def get_easing(name: str | EasingFunction) -> EasingFunction:
    """Look up an easing by name; callables pass through unchanged."""

    if callable(name):
        return name
    key = str(name).strip().lower()
    try:
        return EASINGS[key]
    except KeyError:
        options = ", ".join(sorted(EASINGS))
        raise ValueError(f"Unknown easing {name!r}; expected one of: {options}.") from None


__all__ = [
    "EASINGS",
    "DEFAULT_EASING",
    "EasingFunction",
    "ease_in_out_cubic",
    "ease_in_out_quad",
    "ease_in_out_sine",
    "get_easing",
    "linear",
]
