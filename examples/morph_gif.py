"""Render a short morph to morph.gif without opening a window."""

from __future__ import annotations

from pathlib import Path

from polymorph._config import MorphParameters
from polymorph.animation import AnimationController
from polymorph.random_source import NumpyRandomSource
from polymorph.raster import RasterRenderer


def build(output: Path = Path("morph.gif"), seconds: float = 8.0, fps: int = 30) -> Path:
    params = MorphParameters(interval=1500, morph_speed=0.05, num_shapes=3, max_vertices=7, min_size=90, max_size=120)
    renderer = RasterRenderer(canvas_size=(400, 400), background="#101418", record=True)
    controller = AnimationController(
        params=params,
        rng=NumpyRandomSource(seed=2024),
        renderer=renderer,
        canvas_size=(400, 400),
    )
    frame_ms = 1000.0 / fps
    for index in range(int(seconds * fps)):
        controller.tick(index * frame_ms)
    return renderer.save(output, fps=fps)


if __name__ == "__main__":
    print(build())
