from __future__ import annotations

import queue
import threading
import time
from pathlib import Path
from typing import Callable

import numpy as np
from rich.console import Console
from rich.panel import Panel
from watchfiles import Change, watch

from polymorph._config import read_parameters
from polymorph.animation import AnimationController, Frame
from polymorph.modeling._color import to_float_rgb
from polymorph.modeling.paths import to_world, world_outline
from polymorph.validation import ConfigError

VISIBILITY_KEY = "h"


class PreviewBackendError(RuntimeError):
    """Raised when a preview backend cannot run."""


class PyVistaPreviewer:
    """Tick an AnimationController from a PyVista timer and draw each frame.

    Canvas coordinates are y-down like a 2D canvas; they are flipped into the
    plotter's y-up XY plane when drawn.
    """

    def __init__(self, console: Console, samples_per_segment: int = 8):
        self.console = console
        self.samples_per_segment = samples_per_segment
        self._pv = None
        self._visible = True
        self._canvas_height = 600.0
        self._last_error: str | None = None

    def show(
        self,
        controller: AnimationController,
        canvas_size: tuple[int, int],
        target_fps: int,
        params_path: Path | None = None,
        watch_files: bool = False,
        screenshot_path: Path | None = None,
        background: str = "#090c10",
    ) -> None:
        pv = self._ensure_backend()
        width, height = canvas_size
        self._canvas_height = float(height)
        controller.setup(canvas_size)

        plotter = pv.Plotter(window_size=(int(width), int(height)))
        plotter.set_background(background)
        self._configure_camera(plotter, width, height)

        start = time.monotonic()

        def now_ms() -> float:
            return (time.monotonic() - start) * 1000.0

        self._apply_frame(plotter, controller.tick(now_ms()))

        if screenshot_path is not None:
            screenshot_path.parent.mkdir(parents=True, exist_ok=True)
            plotter.show(title="Polymorph Preview", auto_close=True, screenshot=str(screenshot_path))
            plotter.close()
            return

        plotter.add_key_event(VISIBILITY_KEY, lambda: self._toggle_visibility(plotter))

        reload_queue: queue.Queue[float] = queue.Queue()
        stop_event = threading.Event()
        if watch_files and params_path is not None:
            watcher_thread = threading.Thread(
                target=self._watch_params_file,
                args=(params_path, reload_queue, stop_event),
                name="polymorph-watch",
                daemon=True,
            )
            watcher_thread.start()

        def on_tick() -> None:
            if self._drain(reload_queue) and params_path is not None:
                self._reload_params(controller, params_path)
            self._run_tick(plotter, controller, now_ms())

        interval_seconds = max(1.0 / max(target_fps, 1), 0.005)
        callback_cleanup = self._install_timer_callback(plotter, on_tick, interval_seconds)
        try:
            plotter.show(title="Polymorph Preview", auto_close=False)
        finally:
            stop_event.set()
            callback_cleanup()
            plotter.close()

    # Internal helpers -----------------------------------------------------

    def _ensure_backend(self):
        if self._pv is None:
            try:
                import pyvista as pv
            except ImportError as exc:  # pragma: no cover - runtime dep
                raise PreviewBackendError(
                    "PyVista is required for previewing. Install polymorph with `pip install -e .`."
                ) from exc
            self._pv = pv
        return self._pv

    def _configure_camera(self, plotter, width: float, height: float) -> None:
        cx = width / 2.0
        cy = height / 2.0
        plotter.enable_parallel_projection()
        plotter.camera_position = [(cx, cy, 1000.0), (cx, cy, 0.0), (0.0, 1.0, 0.0)]
        plotter.camera.parallel_scale = height / 2.0

    def _to_scene(self, points: np.ndarray) -> np.ndarray:
        pts = np.asarray(points, dtype=float).reshape(-1, 2)
        return np.column_stack([pts[:, 0], self._canvas_height - pts[:, 1], np.zeros(pts.shape[0])])

    def _toggle_visibility(self, plotter) -> None:
        self._visible = not self._visible
        if not self._visible:
            plotter.clear_actors()
        plotter.render()

    def _apply_frame(self, plotter, frame: Frame) -> None:
        pv = self._ensure_backend()
        plotter.clear_actors()
        if not self._visible:
            return

        style = frame.style
        for index, shape in enumerate(frame.shapes):
            if shape.vertex_count == 0:
                continue
            outline = self._to_scene(world_outline(shape, self.samples_per_segment))
            if style.filled and outline.shape[0] >= 3:
                faces = np.concatenate([[outline.shape[0]], np.arange(outline.shape[0])])
                surface = pv.PolyData(outline, faces=faces).triangulate()
                plotter.add_mesh(surface, name=f"shape-{index}", color=to_float_rgb(style.fill_color))
            if style.stroked and outline.shape[0] >= 2:
                line = pv.lines_from_points(np.vstack([outline, outline[:1]]))
                plotter.add_mesh(
                    line,
                    name=f"shape-{index}-outline",
                    color=to_float_rgb(style.stroke_color),
                    line_width=style.stroke_weight,
                )
            if style.show_vertices:
                markers = pv.PolyData(self._to_scene(to_world(shape)))
                plotter.add_mesh(
                    markers,
                    name=f"shape-{index}-vertices",
                    color=to_float_rgb(style.vertex_color),
                    point_size=style.vertex_size,
                    render_points_as_spheres=True,
                )

    @staticmethod
    def _drain(reload_queue: "queue.Queue[float]") -> bool:
        """Empty the reload queue; True if at least one change was queued."""

        pending = False
        while True:
            try:
                reload_queue.get_nowait()
            except queue.Empty:
                return pending
            pending = True

    def _reload_params(self, controller: AnimationController, params_path: Path) -> bool:
        """Apply the parameter file to the running controller, keeping old values on error."""

        try:
            fresh = read_parameters(params_path)
        except ConfigError as exc:
            self.console.print(
                Panel.fit(str(exc), title="Parameter reload failed; keeping previous values", style="red")
            )
            return False

        values = fresh.as_dict()
        if fresh.cycle_draw_mode:
            # The cycler owns the mode while cycling.
            values.pop("current_draw_mode")
        controller.params.update(**values)
        self.console.print(f"[green]Reloaded parameters from {params_path}[/green]")
        return True

    def _run_tick(self, plotter, controller: AnimationController, now_ms: float) -> bool:
        """Advance and draw one frame. A repeated failure is reported once until a tick succeeds."""

        try:
            self._apply_frame(plotter, controller.tick(now_ms))
            plotter.render()
        except Exception as exc:
            message = str(exc)
            if message != self._last_error:
                self.console.print(Panel.fit(message, title="Frame failed", style="red"))
            self._last_error = message
            return False
        self._last_error = None
        return True

    def _install_timer_callback(
        self,
        plotter,
        callback: Callable[[], None],
        interval_seconds: float,
    ):
        """Install a repeating timer on the plotter's VTK interactor; returns a cleanup callable."""

        interactor = getattr(plotter, "iren", None)
        if interactor is None:
            raise PreviewBackendError("PyVista interactor unavailable; cannot attach timer callbacks.")

        duration_ms = max(int(interval_seconds * 1000), 5)
        timer_id = interactor.create_timer(duration=duration_ms, repeating=True)
        observer_id = interactor.add_observer("TimerEvent", lambda *_: callback())

        def cleanup() -> None:
            interactor.remove_observer(observer_id)
            interactor.destroy_timer(timer_id)

        return cleanup

    def _watch_params_file(
        self,
        params_path: Path,
        reload_queue: "queue.Queue[float]",
        stop_event: threading.Event,
    ) -> None:
        resolved = params_path.resolve()
        for changes in watch(str(resolved.parent), stop_event=stop_event, debounce=300):
            if stop_event.is_set():
                return
            for change, changed_path in changes:
                if change == Change.deleted:
                    continue
                if Path(changed_path).resolve() == resolved:
                    reload_queue.put_nowait(time.monotonic())
                    break
