from __future__ import annotations

import math

from PIL import ImageColor


class ValidationError(ValueError):
    """Raised when validation constraints are violated."""


class ConfigError(ValidationError):
    """Raised when a parameter value or combination cannot be accepted."""


def validate_range(name: str, value: float, minimum: float | None, maximum: float | None) -> None:
    if not math.isfinite(value):
        raise ConfigError(f"{name} must be finite.")
    if minimum is not None and value < minimum:
        raise ConfigError(f"{name}={value:g} is below the minimum {minimum:g}.")
    if maximum is not None and value > maximum:
        raise ConfigError(f"{name}={value:g} is above the maximum {maximum:g}.")


def validate_ordered(low_name: str, low: float, high_name: str, high: float) -> None:
    if low > high:
        raise ConfigError(f"{low_name} ({low:g}) must not exceed {high_name} ({high:g}).")


def validate_color(name: str, value: object) -> str:
    """Return ``value`` unchanged if PIL can parse it as a color."""

    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"{name} must be a color string such as '#4C74B9'.")
    try:
        ImageColor.getrgb(value)
    except ValueError as exc:
        raise ConfigError(f"{name}={value!r} is not a recognised color.") from exc
    return value
