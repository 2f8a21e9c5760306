"""Synchronous single-typeface export of a code point range."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from glyphsmith.core.colors import NamedColor
from glyphsmith.core.diagnostics import DiagnosticEmitter
from glyphsmith.core.logging import PipelineLogger
from glyphsmith.fonts.typeface import RenderableFace
from glyphsmith.fonts.utils import unicode_label
from glyphsmith.render.centering import UNRENDERABLE, render_centered, solve_centering
from glyphsmith.render.export import export_canvas
from glyphsmith.render.jobs import Solver, output_filename
from glyphsmith.render.summary import codepoint_report


@dataclass(slots=True)
class RangeReport:
    created: int = 0
    size_issue: int = 0
    failed: int = 0
    missing: list[int] = field(default_factory=list)

    @property
    def no_image(self) -> int:
        return len(self.missing)

    def lines(self) -> list[str]:
        lines = [
            f"Created: {self.created}",
            f"Size issue: {self.size_issue}",
            f"No Image: {self.no_image}",
        ]
        if self.failed:
            lines.append(f"Write failures: {self.failed}")
        return lines


def generate_range(
    start: int,
    end: int,
    face: RenderableFace,
    directory: Path,
    color: NamedColor,
    height: int,
    width: int,
    *,
    solver: Solver = solve_centering,
    emitter: DiagnosticEmitter | None = None,
    logger: PipelineLogger | None = None,
) -> RangeReport:
    """Center and export ``[start, end)`` in one color, one glyph at a time."""
    logger = logger or PipelineLogger()
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    report = RangeReport()

    for codepoint in range(start, end):
        if not face.can_display(codepoint):
            report.missing.append(codepoint)
            continue
        text = chr(codepoint)
        path = output_filename(directory, face.name, codepoint)
        centering = solver(face, text, width, height)
        if centering is UNRENDERABLE:
            logger.warning("Could not render (%s): %s", unicode_label(codepoint), path)
            report.size_issue += 1
            continue
        canvas = render_centered(face, text, centering, color, width, height)
        if export_canvas(canvas, path, emitter=emitter):
            report.created += 1
        else:
            report.failed += 1

    missing = codepoint_report(f"{face.name} does not have", report.missing)
    if missing:
        logger.info(missing)
    for line in report.lines():
        logger.info(line)
    return report


__all__ = ["RangeReport", "generate_range"]
