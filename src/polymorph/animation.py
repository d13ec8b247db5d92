from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Callable, Sequence

from polymorph._config import DEFAULT_CANVAS_SIZE, MorphParameters
from polymorph.modeling.drawmode import DrawMode, DrawModeCycler, DrawStyle, resolve_style
from polymorph.modeling.easing import DEFAULT_EASING, EasingFunction, get_easing
from polymorph.modeling.geometry import ShapeSet
from polymorph.modeling.morph import blend
from polymorph.modeling.shapes import ShapeSetGenerator
from polymorph.random_source import RandomSource

logger = logging.getLogger(__name__)


class ControllerState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    STEADY = "steady"


@dataclass(frozen=True)
class Frame:
    """Everything a renderer needs for one tick."""

    shapes: ShapeSet
    draw_mode: DrawMode
    style: DrawStyle
    progress: float
    eased_progress: float
    time_ms: float


Renderer = Callable[[Frame], object]


class AnimationController:
    """Drive the morph from an external per-frame tick.

    The host calls :meth:`setup` once with the canvas size and then
    :meth:`tick` with a monotonic time in milliseconds. Parameters are read
    from the shared :class:`MorphParameters` at the top of every tick, so edits
    between ticks take effect immediately.
    """

    def __init__(
        self,
        params: MorphParameters | None = None,
        rng: RandomSource | None = None,
        renderer: Renderer | None = None,
        easing: str | EasingFunction = DEFAULT_EASING,
        canvas_size: Sequence[float] = DEFAULT_CANVAS_SIZE,
    ) -> None:
        self.params = params if params is not None else MorphParameters()
        self.renderer = renderer
        self.easing = get_easing(easing)
        self.generator = ShapeSetGenerator(rng=rng, canvas_size=canvas_size)
        self.cycler = DrawModeCycler()
        self._state = ControllerState.UNINITIALIZED
        self._current: ShapeSet = ()
        self._target: ShapeSet = ()
        self._progress = 0.0
        self._last_transition = 0.0

    @property
    def state(self) -> ControllerState:
        return self._state

    @property
    def current(self) -> ShapeSet:
        return self._current

    @property
    def target(self) -> ShapeSet:
        return self._target

    @property
    def progress(self) -> float:
        return self._progress

    @property
    def last_transition_ms(self) -> float:
        return self._last_transition

    def setup(self, canvas_size: Sequence[float] | None = None) -> None:
        if canvas_size is not None:
            self.generator.canvas_size = canvas_size
        logger.debug("Canvas %sx%s", *self.generator.canvas_size)

    def reset(self) -> None:
        self._state = ControllerState.UNINITIALIZED
        self._current = ()
        self._target = ()
        self._progress = 0.0
        self._last_transition = 0.0
        self.cycler.reset()

    def tick(self, now_ms: float) -> Frame:
        params = self.params.validate()
        now_ms = float(now_ms)

        if self._state is ControllerState.UNINITIALIZED:
            self._target = self.generator.generate(params)
            self._current = self._target
            self._progress = 0.0
            self._last_transition = now_ms
            self._state = ControllerState.STEADY
            # The opening frame shows the target as-is; accumulation starts next tick.
            return self._emit(params, progress=1.0, now_ms=now_ms)

        if now_ms - self._last_transition >= params.interval:
            self._transition(params, now_ms)

        self._progress = min(1.0, max(0.0, self._progress + params.morph_speed))
        return self._emit(params, progress=self._progress, now_ms=now_ms)

    def _transition(self, params: MorphParameters, now_ms: float) -> None:
        self._current = self._target
        self._target = self.generator.generate(params)
        self._progress = 0.0
        self._last_transition = now_ms
        mode = self.cycler.advance(params)
        logger.debug(
            "New target at %.0f ms: %d -> %d shape(s), draw mode %d",
            now_ms,
            len(self._current),
            len(self._target),
            int(mode),
        )

    def _emit(self, params: MorphParameters, progress: float, now_ms: float) -> Frame:
        eased = self.easing(progress)
        shapes = blend(self._current, self._target, eased)
        mode = self.cycler.active_mode(params)
        frame = Frame(
            shapes=shapes,
            draw_mode=mode,
            style=resolve_style(mode, params),
            progress=progress,
            eased_progress=eased,
            time_ms=now_ms,
        )
        if self.renderer is not None:
            self.renderer(frame)
        return frame


__all__ = ["AnimationController", "ControllerState", "Frame", "Renderer"]
