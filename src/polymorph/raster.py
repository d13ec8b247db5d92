from __future__ import annotations

from pathlib import Path
from typing import List, Sequence

from PIL import Image, ImageDraw

from polymorph.animation import Frame
from polymorph.modeling._color import to_rgba8
from polymorph.modeling.paths import to_world, world_outline


class RasterRenderer:
    """Draw frames into RGBA PIL images.

    Call the renderer with a :class:`Frame` (it is a valid ``Renderer``). The
    latest image is kept in :attr:`image`; with ``record=True`` every image is
    also appended to :attr:`frames` for later export.
    """

    def __init__(
        self,
        canvas_size: Sequence[int] = (600, 600),
        background: Sequence[float] | str | None = None,
        samples_per_segment: int = 8,
        record: bool = False,
    ) -> None:
        width, height = (int(v) for v in canvas_size)
        if width <= 0 or height <= 0:
            raise ValueError("canvas_size must be positive.")
        self.size = (width, height)
        self.background = to_rgba8(background) if background is not None else (0, 0, 0, 0)
        self.samples_per_segment = samples_per_segment
        self.record = record
        self.image: Image.Image | None = None
        self.frames: List[Image.Image] = []

    def __call__(self, frame: Frame) -> Image.Image:
        image = self.draw(frame)
        self.image = image
        if self.record:
            self.frames.append(image)
        return image

    def draw(self, frame: Frame) -> Image.Image:
        image = Image.new("RGBA", self.size, self.background)
        draw = ImageDraw.Draw(image, "RGBA")
        style = frame.style
        fill = to_rgba8(style.fill_color)
        stroke = to_rgba8(style.stroke_color)
        marker = to_rgba8(style.vertex_color)
        width = max(int(round(style.stroke_weight)), 1)
        radius = style.vertex_size / 2.0

        for shape in frame.shapes:
            if shape.vertex_count == 0:
                continue
            outline = [tuple(p) for p in world_outline(shape, self.samples_per_segment)]
            if len(outline) >= 3 and style.filled:
                draw.polygon(outline, fill=fill)
            if len(outline) >= 2 and style.stroked:
                draw.line(outline + [outline[0]], fill=stroke, width=width, joint="curve")
            if style.show_vertices:
                for x, y in to_world(shape):
                    draw.ellipse((x - radius, y - radius, x + radius, y + radius), fill=marker)
        return image

    def save(self, path: Path, fps: float = 30.0) -> Path:
        """Write recorded frames as an animated GIF, or the latest image as a still."""

        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        images = self.frames if self.frames else ([self.image] if self.image is not None else [])
        if not images:
            raise ValueError("Nothing has been rendered yet.")

        if path.suffix.lower() == ".gif":
            duration = max(int(round(1000.0 / max(fps, 1e-3))), 10)
            first, *rest = images
            first.save(
                path,
                save_all=True,
                append_images=rest,
                duration=duration,
                loop=0,
                disposal=2,
            )
        else:
            images[-1].save(path)
        return path


__all__ = ["RasterRenderer"]
