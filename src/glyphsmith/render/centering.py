"""Empirical glyph centering.

Font ascent and descent metadata cannot be trusted across arbitrary fallback
typefaces, so the solver measures the ink itself: it renders the glyph on a
probe canvas one pixel larger than the target, lifts the baseline until the ink
leaves the bottom probe row, then shifts the glyph right until it leaves the
left column. The measured margins give the draw offset that centers the ink.

The result is a plain value (`CenteringResult`) computed once per glyph and
reused for every color through `render_centered`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
from typing import Literal, TypeAlias

from glyphsmith.core.colors import PROBE_COLOR, NamedColor
from glyphsmith.fonts.typeface import RenderableFace
from glyphsmith.render.boundary import (
    Boundaries,
    scan_from_bottom,
    scan_from_left,
    scan_from_right,
    scan_from_top,
)
from glyphsmith.render.canvas import RenderedCanvas, render_text


logger = logging.getLogger(__name__)


class Unrenderable(Enum):
    """Marker for glyphs whose ink cannot be placed on the canvas."""

    TOKEN = "unrenderable"

    def __repr__(self) -> str:
        return "UNRENDERABLE"


UNRENDERABLE = Unrenderable.TOKEN


@dataclass(frozen=True, slots=True)
class CenteringResult:
    """Baseline origin that centers a glyph's ink on the target canvas."""

    offset_x: float
    offset_y: float


Centering: TypeAlias = CenteringResult | Literal[Unrenderable.TOKEN]


def _probe(
    face: RenderableFace, text: str, width: int, height: int, x: float, y: float
) -> RenderedCanvas:
    return render_text(face, text, PROBE_COLOR, width + 1, height + 1, x, y)


def measure_glyph(
    face: RenderableFace, text: str, width: int, height: int
) -> tuple[Boundaries, int, int]:
    """Run both probe loops and return the final margins and offsets."""
    top, bottom = 1, 0
    bottom_offset = 0
    while bottom == 0 and top > 0:
        bottom_offset += 1
        probe = _probe(face, text, width, height, 1, height - bottom_offset)
        top = scan_from_top(probe, width, height)
        bottom = scan_from_bottom(probe, width, height)

    left, right = 0, 1
    left_offset = 0
    while left == 0 and right < width - 1:
        left_offset += 1
        probe = _probe(face, text, width, height, left_offset, height - bottom_offset)
        left = scan_from_left(probe, width, height)
        right = scan_from_right(probe, width, height)

    return Boundaries(top=top, bottom=bottom, left=left, right=right), bottom_offset, left_offset


def solve_centering(face: RenderableFace, text: str, width: int, height: int) -> Centering:
    """Return the centering offsets for ``text`` or `UNRENDERABLE`."""
    bounds, bottom_offset, left_offset = measure_glyph(face, text, width, height)
    if bounds.is_empty(width, height):
        logger.debug("No ink for %r in %s on a %dx%d canvas", text, face.name, width, height)
        return UNRENDERABLE

    offset_y = height - (bounds.top + bounds.bottom) / 2.0 - bottom_offset
    offset_x = (bounds.right - bounds.left) / 2.0 + left_offset
    return CenteringResult(offset_x=offset_x, offset_y=offset_y)


def render_centered(
    face: RenderableFace,
    text: str,
    centering: CenteringResult,
    color: NamedColor,
    width: int,
    height: int,
) -> RenderedCanvas:
    """Draw ``text`` in ``color`` at the precomputed centering offsets."""
    return render_text(face, text, color, width, height, centering.offset_x, centering.offset_y)


def center_image(
    face: RenderableFace, text: str, color: NamedColor, width: int, height: int
) -> RenderedCanvas | None:
    """Solve and render in one step; ``None`` when the glyph cannot fit."""
    centering = solve_centering(face, text, width, height)
    if centering is UNRENDERABLE:
        return None
    return render_centered(face, text, centering, color, width, height)


__all__ = [
    "UNRENDERABLE",
    "Centering",
    "CenteringResult",
    "Unrenderable",
    "center_image",
    "measure_glyph",
    "render_centered",
    "solve_centering",
]
