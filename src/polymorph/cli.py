from __future__ import annotations

import json
import logging
import pathlib
from dataclasses import dataclass
from typing import List

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from polymorph._config import (
    CONFIG_FILE,
    DEFAULT_CANVAS_SIZE,
    PARAMETER_SPECS,
    MorphParameters,
    load_parameters,
)
from polymorph._logging import setup_logging
from polymorph.animation import AnimationController
from polymorph.modeling.easing import DEFAULT_EASING, EASINGS
from polymorph.modeling.shapes import GenerationError
from polymorph.preview import PreviewBackendError, PyVistaPreviewer
from polymorph.random_source import NumpyRandomSource
from polymorph.raster import RasterRenderer
from polymorph.validation import ConfigError

console = Console()
app = typer.Typer(help="Morph between random polygon shape sets.")


@dataclass(frozen=True)
class CanvasOptions:
    width: int
    height: int

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height


def _parse_override(raw: str) -> tuple[str, object]:
    if "=" not in raw:
        raise typer.BadParameter(f"Expected NAME=VALUE, got {raw!r}.")
    name, value = raw.split("=", 1)
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError:
        parsed = value
    return name.strip(), parsed


def _load_params(config: pathlib.Path | None, overrides: List[str]) -> MorphParameters:
    try:
        params = load_parameters(config)
        if overrides:
            params.update(**dict(_parse_override(item) for item in overrides))
    except ConfigError as exc:
        raise typer.BadParameter(str(exc)) from exc
    return params


def _check_easing(name: str) -> str:
    key = name.strip().lower()
    if key not in EASINGS:
        raise typer.BadParameter(f"Unknown easing {name!r}; expected one of: {', '.join(sorted(EASINGS))}.")
    return key


def _next_available_path(path: pathlib.Path) -> pathlib.Path:
    """Return a non-conflicting path by appending ' (n)' before the suffix."""

    if not path.exists():
        return path

    parent = path.parent
    stem = path.stem
    suffix = path.suffix
    n = 1
    while True:
        candidate = parent / f"{stem} ({n}){suffix}"
        if not candidate.exists():
            return candidate
        n += 1


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log engine events at debug level."),
) -> None:
    setup_logging(logging.DEBUG if verbose else logging.WARNING, console=console)


@app.command()
def preview(
    config: pathlib.Path | None = typer.Option(None, "--config", "-c", help="Parameter file (JSON)."),
    overrides: List[str] = typer.Option([], "--set", "-s", help="Override a parameter, e.g. --set morph_speed=0.2."),
    watch: bool = typer.Option(True, help="Watch the parameter file and apply edits live."),
    target_fps: int = typer.Option(60, min=1, max=240, help="Frame tick rate."),
    width: int = typer.Option(DEFAULT_CANVAS_SIZE[0], min=16, help="Canvas width in pixels."),
    height: int = typer.Option(DEFAULT_CANVAS_SIZE[1], min=16, help="Canvas height in pixels."),
    easing: str = typer.Option(DEFAULT_EASING, help="Easing curve: cubic, quad, sine or linear."),
    seed: int | None = typer.Option(None, help="Seed for reproducible shapes."),
    screenshot: pathlib.Path | None = typer.Option(
        None, "--screenshot", help="Optional path to save a screenshot of the first frame and exit."
    ),
) -> None:
    """
    Open an interactive window that morphs continuously. Press 'h' to hide or show the shapes.
    """

    params = _load_params(config, overrides)
    canvas = CanvasOptions(width=width, height=height)
    controller = AnimationController(
        params=params,
        rng=NumpyRandomSource(seed),
        easing=_check_easing(easing),
        canvas_size=canvas.size,
    )
    params_path = config or CONFIG_FILE

    console.rule("Polymorph Preview")
    console.print(f"Parameters from [green]{params_path}[/green]")
    if watch:
        console.print("[cyan]Watching parameters; save the file to retune, close the window to stop.[/cyan]")

    previewer = PyVistaPreviewer(console=console)
    try:
        previewer.show(
            controller=controller,
            canvas_size=canvas.size,
            target_fps=target_fps,
            params_path=params_path,
            watch_files=watch,
            screenshot_path=screenshot,
        )
    except PreviewBackendError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.command()
def render(
    output: pathlib.Path = typer.Argument(..., help="Output file: .gif for an animation, any image suffix for a still."),
    config: pathlib.Path | None = typer.Option(None, "--config", "-c", help="Parameter file (JSON)."),
    overrides: List[str] = typer.Option([], "--set", "-s", help="Override a parameter, e.g. --set num_shapes=2."),
    frames: int = typer.Option(120, min=1, help="Number of ticks to render."),
    fps: int = typer.Option(30, min=1, max=120, help="Simulated tick rate."),
    width: int = typer.Option(DEFAULT_CANVAS_SIZE[0], min=16, help="Canvas width in pixels."),
    height: int = typer.Option(DEFAULT_CANVAS_SIZE[1], min=16, help="Canvas height in pixels."),
    background: str = typer.Option("#000000", help="Background color."),
    easing: str = typer.Option(DEFAULT_EASING, help="Easing curve: cubic, quad, sine or linear."),
    seed: int | None = typer.Option(None, help="Seed for reproducible shapes."),
    overwrite: bool = typer.Option(False, "--overwrite", help="Allow replacing an existing file."),
) -> None:
    """
    Run the morph offscreen with simulated time and save the frames.
    """

    params = _load_params(config, overrides)
    canvas = CanvasOptions(width=width, height=height)
    try:
        renderer = RasterRenderer(canvas_size=canvas.size, background=background, record=True)
    except ValueError as exc:
        raise typer.BadParameter(f"Invalid background {background!r}: {exc}") from exc

    controller = AnimationController(
        params=params,
        rng=NumpyRandomSource(seed),
        renderer=renderer,
        easing=_check_easing(easing),
        canvas_size=canvas.size,
    )
    controller.setup(canvas.size)

    frame_ms = 1000.0 / fps
    try:
        for index in range(frames):
            controller.tick(index * frame_ms)
    except GenerationError as exc:
        raise typer.BadParameter(str(exc)) from exc

    final_output = output
    if output.exists() and not overwrite:
        final_output = _next_available_path(output)
        console.print(f"[yellow]Output {output} exists; writing to {final_output} instead.[/yellow]")

    renderer.save(final_output, fps=fps)
    kind = "animation" if final_output.suffix.lower() == ".gif" else "still of the last frame"
    console.print(
        Panel(
            f"Wrote {frames} frame {kind} to [green]{final_output}[/green].",
            title="Render complete",
            border_style="green",
        )
    )


@app.command()
def params(
    config: pathlib.Path | None = typer.Option(None, "--config", "-c", help="Parameter file (JSON)."),
) -> None:
    """
    List every tweakable parameter with its current value, range and step.
    """

    values = _load_params(config, []).as_dict()
    table = Table(title=f"Parameters ({config or CONFIG_FILE})")
    table.add_column("name", style="cyan")
    table.add_column("alias")
    table.add_column("value", style="green")
    table.add_column("range")
    table.add_column("step")
    table.add_column("description")
    for name, spec in PARAMETER_SPECS.items():
        if spec.minimum is not None and spec.maximum is not None:
            bounds = f"{spec.minimum:g}..{spec.maximum:g}"
        else:
            bounds = ""
        step = f"{spec.step:g}" if spec.step is not None else ""
        table.add_row(name, spec.alias or "", str(values[name]), bounds, step, spec.help)
    console.print(table)
