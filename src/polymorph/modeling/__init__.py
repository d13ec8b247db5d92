"""Morph engine: shape generation, blending, easing and draw modes."""

from __future__ import annotations

from .geometry import Point, Shape, ShapeSet
from .easing import EASINGS, get_easing
from .vertices import generate_vertices
from .shapes import GenerationError, ShapeSetGenerator, generate_shape_set
from .morph import blend, morph
from .drawmode import DrawMode, DrawModeCycler, DrawStyle, resolve_style
from .paths import smooth_outline, to_world, world_outline

__all__ = [
    "Point",
    "Shape",
    "ShapeSet",
    "EASINGS",
    "get_easing",
    "generate_vertices",
    "GenerationError",
    "ShapeSetGenerator",
    "generate_shape_set",
    "blend",
    "morph",
    "DrawMode",
    "DrawModeCycler",
    "DrawStyle",
    "resolve_style",
    "smooth_outline",
    "to_world",
    "world_outline",
]
