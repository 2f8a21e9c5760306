"""Primary public API for glyphsmith."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version as _pkg_version

from glyphsmith.core.colors import COLOR_OPTIONS, NamedColor, color_option
from glyphsmith.core.config import GeneratorPlan, load_plan
from glyphsmith.core.exceptions import (
    DispatchRejectedError,
    GlyphsmithError,
    PlanError,
    TypefaceNotFoundError,
)
from glyphsmith.fonts import FontLocator, FontStyle, Typeface, TypefaceRegistry
from glyphsmith.render import (
    UNRENDERABLE,
    BuildReport,
    CenteringResult,
    Dispatcher,
    GenerationRequest,
    RunSummary,
    center_image,
    export_canvas,
    generate_image_files,
    generate_range,
    solve_centering,
)


try:
    __version__ = _pkg_version("glyphsmith")
except PackageNotFoundError:
    __version__ = "0.0.0"


def get_version() -> str:
    return __version__


__all__ = [
    "COLOR_OPTIONS",
    "UNRENDERABLE",
    "BuildReport",
    "CenteringResult",
    "DispatchRejectedError",
    "Dispatcher",
    "FontLocator",
    "FontStyle",
    "GenerationRequest",
    "GeneratorPlan",
    "GlyphsmithError",
    "NamedColor",
    "PlanError",
    "RunSummary",
    "Typeface",
    "TypefaceNotFoundError",
    "TypefaceRegistry",
    "__version__",
    "center_image",
    "color_option",
    "export_canvas",
    "generate_image_files",
    "generate_range",
    "get_version",
    "load_plan",
    "solve_centering",
]
