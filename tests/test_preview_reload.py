from __future__ import annotations

import io
import json
import queue

from rich.console import Console

from polymorph._config import MorphParameters, ensure_user_config
from polymorph.animation import AnimationController
from polymorph.modeling.drawmode import DrawMode
from polymorph.preview import PyVistaPreviewer
from polymorph.random_source import NumpyRandomSource


class FakePlotter:
    def __init__(self) -> None:
        self.renders = 0

    def render(self) -> None:
        self.renders += 1


def _previewer():
    output = io.StringIO()
    previewer = PyVistaPreviewer(console=Console(file=output, width=200))
    return previewer, output


def _controller(**overrides):
    controller = AnimationController(params=MorphParameters(**overrides), rng=NumpyRandomSource(seed=5))
    controller.setup((600, 600))
    return controller


def _write(path, **values):
    path.write_text(json.dumps({**MorphParameters().as_dict(), **values}))


def test_reload_applies_new_values(config_path):
    controller = _controller()
    controller.tick(0)
    _write(config_path, morph_speed=0.25, num_shapes=2)

    previewer, output = _previewer()
    assert previewer._reload_params(controller, config_path) is True
    assert controller.params.morph_speed == 0.25
    assert controller.params.num_shapes == 2
    assert "Reloaded parameters" in output.getvalue()


def test_reload_of_inverted_ranges_keeps_previous_values(config_path):
    controller = _controller(morph_speed=0.1)
    _write(config_path, morph_speed=0.5, min_vertices=9, max_vertices=4)

    previewer, output = _previewer()
    assert previewer._reload_params(controller, config_path) is False
    assert controller.params.morph_speed == 0.1
    assert controller.params.min_vertices == 3
    assert "Parameter reload failed" in output.getvalue()


def test_reload_of_malformed_json_keeps_previous_values(config_path):
    controller = _controller(morph_speed=0.1)
    config_path.write_text("{ not json")

    previewer, output = _previewer()
    assert previewer._reload_params(controller, config_path) is False
    assert controller.params.morph_speed == 0.1
    assert "Parameter reload failed" in output.getvalue()


def test_reload_while_cycling_keeps_cycled_draw_mode(config_path):
    controller = _controller(interval=100)
    controller.tick(0)
    modes = [controller.tick(t).draw_mode for t in (100, 200, 300, 400)]
    assert modes == [DrawMode.FILLED, DrawMode.FILLED, DrawMode.FILLED, DrawMode.OUTLINE_VERTICES]

    ensure_user_config(config_path)
    previewer, _ = _previewer()
    assert previewer._reload_params(controller, config_path) is True

    assert controller.params.current_draw_mode == DrawMode.OUTLINE_VERTICES
    assert controller.tick(450).draw_mode is DrawMode.OUTLINE_VERTICES


def test_reload_without_cycling_applies_draw_mode(config_path):
    controller = _controller()
    controller.tick(0)
    _write(config_path, cycle_draw_mode=False, current_draw_mode=1, outline_only=True)

    previewer, _ = _previewer()
    assert previewer._reload_params(controller, config_path) is True
    assert controller.params.current_draw_mode == 1
    assert controller.tick(10).draw_mode is DrawMode.OUTLINE


def test_drain_reports_pending_changes():
    pending: queue.Queue[float] = queue.Queue()
    assert PyVistaPreviewer._drain(pending) is False
    pending.put_nowait(1.0)
    pending.put_nowait(2.0)
    assert PyVistaPreviewer._drain(pending) is True
    assert pending.empty()


def test_repeated_frame_failure_is_reported_once(monkeypatch):
    controller = _controller()
    previewer, output = _previewer()
    monkeypatch.setattr(previewer, "_apply_frame", lambda plotter, frame: None)
    plotter = FakePlotter()

    assert previewer._run_tick(plotter, controller, 0) is True
    controller.params.min_vertices = 10
    controller.params.max_vertices = 4
    assert previewer._run_tick(plotter, controller, 16) is False
    assert previewer._run_tick(plotter, controller, 32) is False
    assert previewer._run_tick(plotter, controller, 48) is False
    assert output.getvalue().count("Frame failed") == 1

    controller.params.min_vertices = 3
    assert previewer._run_tick(plotter, controller, 64) is True
    assert plotter.renders == 2

    controller.params.min_vertices = 10
    assert previewer._run_tick(plotter, controller, 80) is False
    assert output.getvalue().count("Frame failed") == 2
