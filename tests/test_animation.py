from __future__ import annotations

import numpy as np
import pytest

from polymorph._config import MorphParameters
from polymorph.animation import AnimationController, ControllerState
from polymorph.modeling.drawmode import DrawMode
from polymorph.modeling.easing import ease_in_out_cubic
from polymorph.random_source import NumpyRandomSource
from polymorph.validation import ConfigError


def _controller(**overrides):
    params = MorphParameters(**overrides)
    frames = []
    controller = AnimationController(params=params, rng=NumpyRandomSource(seed=11), renderer=frames.append)
    controller.setup((600, 600))
    return controller, frames


def test_first_tick_renders_target_without_interpolation():
    controller, frames = _controller()
    assert controller.state is ControllerState.UNINITIALIZED
    frame = controller.tick(0)
    assert controller.state is ControllerState.STEADY
    assert frame.progress == 1.0
    assert frame.eased_progress == 1.0
    assert controller.current is controller.target
    assert len(frame.shapes) == len(controller.target)
    for blended, target in zip(frame.shapes, controller.target):
        assert np.allclose(blended.vertices, target.vertices)
    assert frames == [frame]


def test_end_to_end_schedule():
    controller, frames = _controller(interval=2000, morph_speed=0.3)
    controller.tick(0)
    initial_target = controller.target

    frame = controller.tick(500)
    assert controller.progress == pytest.approx(0.3)
    assert frame.eased_progress == pytest.approx(ease_in_out_cubic(0.3))
    assert controller.target is initial_target

    frame = controller.tick(2100)
    assert controller.current is initial_target
    assert controller.target is not initial_target
    assert controller.last_transition_ms == 2100
    assert frame.progress == pytest.approx(0.3)
    assert len(frames) == 3


def test_progress_saturates_at_one():
    controller, _ = _controller(interval=20000, morph_speed=0.4)
    controller.tick(0)
    values = [controller.tick(t).progress for t in (10, 20, 30, 40)]
    assert values == pytest.approx([0.4, 0.8, 1.0, 1.0])


def test_fast_morph_clamps_on_first_tick_after_transition():
    controller, _ = _controller(interval=1000, morph_speed=1.5)
    controller.tick(0)
    frame = controller.tick(1000)
    assert frame.progress == 1.0
    for blended, target in zip(frame.shapes, controller.target):
        assert blended.x == pytest.approx(target.x)


def test_blend_covers_longer_set():
    controller, _ = _controller(interval=100, num_shapes=6)
    controller.tick(0)
    for t in range(100, 2000, 100):
        frame = controller.tick(t)
        assert len(frame.shapes) == max(len(controller.current), len(controller.target))


def test_draw_mode_cycles_with_transitions():
    controller, _ = _controller(interval=100, cycle_draw_mode=True)
    controller.tick(0)
    modes = [controller.tick(t).draw_mode for t in (100, 200, 300, 400, 500)]
    assert modes == [DrawMode.FILLED, DrawMode.FILLED, DrawMode.FILLED, DrawMode.OUTLINE_VERTICES, DrawMode.FILLED]


def test_parameters_are_read_live():
    controller, _ = _controller(interval=5000, morph_speed=0.1)
    controller.tick(0)
    controller.tick(10)
    controller.params.set("morph_speed", 0.5)
    controller.tick(20)
    assert controller.progress == pytest.approx(0.6)
    controller.params.update(cycle_draw_mode=False, outline_only=True)
    assert controller.tick(30).draw_mode is DrawMode.OUTLINE


def test_generated_sets_follow_parameter_edits():
    controller, _ = _controller(interval=100)
    controller.tick(0)
    controller.params.update(num_shapes=1, min_vertices=12, max_vertices=12)
    controller.tick(100)
    assert len(controller.target) == 1
    assert controller.target[0].vertex_count == 12


def test_invalid_parameters_stop_the_tick():
    controller, frames = _controller()
    controller.tick(0)
    controller.params.min_vertices = 10
    controller.params.max_vertices = 4
    with pytest.raises(ConfigError):
        controller.tick(10)
    assert len(frames) == 1


def test_reset_returns_to_uninitialized():
    controller, _ = _controller()
    controller.tick(0)
    controller.reset()
    assert controller.state is ControllerState.UNINITIALIZED
    assert controller.current == ()
    assert controller.tick(5000).progress == 1.0


def test_easing_strategy_is_selectable():
    params = MorphParameters(interval=10000, morph_speed=0.3)
    controller = AnimationController(params=params, rng=NumpyRandomSource(seed=1), easing="linear")
    controller.tick(0)
    assert controller.tick(1).eased_progress == pytest.approx(0.3)
