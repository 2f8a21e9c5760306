"""Raster canvases and the text rendering backend."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from PIL import Image, ImageDraw

from glyphsmith.core.colors import NamedColor
from glyphsmith.fonts.typeface import RenderableFace


TRANSPARENT = (0, 0, 0, 0)


@dataclass(slots=True)
class RenderedCanvas:
    """An RGBA raster owned by a single render task."""

    image: Image.Image

    @classmethod
    def blank(cls, width: int, height: int) -> RenderedCanvas:
        return cls(Image.new("RGBA", (width, height), TRANSPARENT))

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    def alpha(self) -> np.ndarray:
        """Return the alpha channel as a ``(height, width)`` uint8 array."""
        return np.asarray(self.image.getchannel("A"))


def render_text(
    face: RenderableFace,
    text: str,
    color: NamedColor,
    width: int,
    height: int,
    x: float,
    y: float,
) -> RenderedCanvas:
    """Draw ``text`` with its baseline origin at ``(x, y)`` on a fresh canvas.

    Antialiasing is always on; callers cannot change rendering quality.
    """
    canvas = RenderedCanvas.blank(width, height)
    draw = ImageDraw.Draw(canvas.image)
    draw.fontmode = "L"
    face.draw(draw, text, (x, y), color.rgba)
    return canvas


__all__ = ["RenderedCanvas", "render_text"]
