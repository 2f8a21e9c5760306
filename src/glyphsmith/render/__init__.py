"""Glyph centering and the batch export pipeline."""

from glyphsmith.render.boundary import Boundaries, scan_boundaries
from glyphsmith.render.canvas import RenderedCanvas, render_text
from glyphsmith.render.centering import (
    UNRENDERABLE,
    CenteringResult,
    center_image,
    render_centered,
    solve_centering,
)
from glyphsmith.render.dispatch import Dispatcher, WorkCounter
from glyphsmith.render.export import export_canvas
from glyphsmith.render.jobs import (
    BuildReport,
    GenerationRequest,
    GlyphJob,
    RenderTask,
    generate_image_files,
)
from glyphsmith.render.ranges import RangeReport, generate_range
from glyphsmith.render.summary import RunSummary, codepoint_report


__all__ = [
    "UNRENDERABLE",
    "Boundaries",
    "BuildReport",
    "CenteringResult",
    "Dispatcher",
    "GenerationRequest",
    "GlyphJob",
    "RangeReport",
    "RenderTask",
    "RenderedCanvas",
    "RunSummary",
    "WorkCounter",
    "center_image",
    "codepoint_report",
    "export_canvas",
    "generate_image_files",
    "generate_range",
    "render_centered",
    "render_text",
    "scan_boundaries",
    "solve_centering",
]
