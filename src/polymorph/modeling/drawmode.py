from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

from polymorph._config import MorphParameters

logger = logging.getLogger(__name__)

CYCLE_LENGTH = 4
FILLED_POSITIONS = 3


class DrawMode(enum.IntEnum):
    FILLED = 0
    OUTLINE = 1
    OUTLINE_VERTICES = 2


def clamp_mode(value: int) -> DrawMode:
    return DrawMode(min(max(int(value), 0), 2))


@dataclass(frozen=True)
class DrawStyle:
    """Resolved styling a renderer applies to every shape of a frame."""

    filled: bool
    stroked: bool
    show_vertices: bool
    fill_color: str
    stroke_color: str
    stroke_weight: float
    vertex_color: str
    vertex_size: float


class DrawModeCycler:
    """Step the draw mode each time a new target shape set is generated.

    While cycling, three filled sets are followed by one outline-with-vertices
    set. ``DrawMode.OUTLINE`` is never chosen by the cycle; it is only reached
    by setting ``current_draw_mode`` directly.
    """

    def __init__(self, counter: int = 0) -> None:
        self.counter = int(counter) % CYCLE_LENGTH

    def advance(self, params: MorphParameters) -> DrawMode:
        if not params.cycle_draw_mode:
            return self.active_mode(params)
        mode = DrawMode.FILLED if self.counter < FILLED_POSITIONS else DrawMode.OUTLINE_VERTICES
        self.counter = (self.counter + 1) % CYCLE_LENGTH
        if mode != params.current_draw_mode:
            logger.debug("Draw mode %s -> %s", params.current_draw_mode, int(mode))
        params.current_draw_mode = int(mode)
        return mode

    def active_mode(self, params: MorphParameters) -> DrawMode:
        if params.cycle_draw_mode:
            return clamp_mode(params.current_draw_mode)
        return DrawMode.OUTLINE if params.outline_only else DrawMode.FILLED

    def reset(self) -> None:
        self.counter = 0


def resolve_style(mode: DrawMode, params: MorphParameters) -> DrawStyle:
    mode = clamp_mode(mode)
    show_vertices = mode == DrawMode.OUTLINE_VERTICES
    if not params.cycle_draw_mode and params.show_vertices:
        show_vertices = True
    return DrawStyle(
        filled=mode == DrawMode.FILLED,
        stroked=mode != DrawMode.FILLED,
        show_vertices=show_vertices,
        fill_color=params.key_color,
        stroke_color=params.key_color,
        stroke_weight=float(params.stroke_weight),
        vertex_color=params.vertex_color,
        vertex_size=float(params.vertex_size),
    )


__all__ = ["DrawMode", "DrawModeCycler", "DrawStyle", "clamp_mode", "resolve_style"]
