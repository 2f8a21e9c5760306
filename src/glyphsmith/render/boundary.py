"""Measure how far the ink of a rendered glyph sits from each canvas edge.

The scans work on a probe canvas one pixel larger than the nominal
``width`` x ``height``. Top and left scans stay inside the nominal area;
bottom and right scans start on the extra row/column. A scan that finds no
ink returns the full extent it walked: ``height`` or ``width`` for top/left,
``height + 1`` or ``width + 1`` for bottom/right.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from glyphsmith.render.canvas import RenderedCanvas


@dataclass(frozen=True, slots=True)
class Boundaries:
    top: int
    bottom: int
    left: int
    right: int

    def is_empty(self, width: int, height: int) -> bool:
        """Return True when every scan reported its empty sentinel."""
        return (
            self.top == height
            and self.bottom == height + 1
            and self.left == width
            and self.right == width + 1
        )


def _ink_rows(alpha: np.ndarray, width: int, rows: int) -> np.ndarray:
    return np.flatnonzero(alpha[:rows, :width].any(axis=1))


def _ink_columns(alpha: np.ndarray, height: int, columns: int) -> np.ndarray:
    return np.flatnonzero(alpha[:height, :columns].any(axis=0))


def scan_from_top(canvas: RenderedCanvas, width: int, height: int) -> int:
    rows = _ink_rows(canvas.alpha(), width, height)
    return int(rows[0]) if rows.size else height


def scan_from_bottom(canvas: RenderedCanvas, width: int, height: int) -> int:
    rows = _ink_rows(canvas.alpha(), width, height + 1)
    return height - int(rows[-1]) if rows.size else height + 1


def scan_from_left(canvas: RenderedCanvas, width: int, height: int) -> int:
    columns = _ink_columns(canvas.alpha(), height, width)
    return int(columns[0]) if columns.size else width


def scan_from_right(canvas: RenderedCanvas, width: int, height: int) -> int:
    columns = _ink_columns(canvas.alpha(), height, width + 1)
    return width - int(columns[-1]) if columns.size else width + 1


def scan_boundaries(canvas: RenderedCanvas, width: int, height: int) -> Boundaries:
    return Boundaries(
        top=scan_from_top(canvas, width, height),
        bottom=scan_from_bottom(canvas, width, height),
        left=scan_from_left(canvas, width, height),
        right=scan_from_right(canvas, width, height),
    )


__all__ = [
    "Boundaries",
    "scan_boundaries",
    "scan_from_bottom",
    "scan_from_left",
    "scan_from_right",
    "scan_from_top",
]
