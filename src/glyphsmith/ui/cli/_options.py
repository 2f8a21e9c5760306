"""Shared Typer option definitions for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer


OUTPUT_PANEL = "Output"
RENDERING_PANEL = "Rendering"

OutputDirOption = Annotated[
    Path | None,
    typer.Option(
        "--output",
        "-o",
        help="Base directory for generated images. Overrides the plan's target_directory.",
        file_okay=False,
        dir_okay=True,
        rich_help_panel=OUTPUT_PANEL,
    ),
]

WorkersOption = Annotated[
    int | None,
    typer.Option(
        "--workers",
        "-j",
        min=1,
        help="Worker threads for the export phase (clamped to 1x..4x the CPU count).",
        rich_help_panel=OUTPUT_PANEL,
    ),
]

FontSizeOption = Annotated[
    int,
    typer.Option("--size", min=1, help="Font size in points.", rich_help_panel=RENDERING_PANEL),
]

FontStyleOption = Annotated[
    str,
    typer.Option(
        "--style",
        help="Font style: plain, bold, italic, bold_italic, or 1/2/3.",
        rich_help_panel=RENDERING_PANEL,
    ),
]

ColorOption = Annotated[
    str,
    typer.Option("--color", help="Color name, e.g. black or 'light gray'.", rich_help_panel=RENDERING_PANEL),
]

WidthOption = Annotated[
    int,
    typer.Option("--width", min=1, help="Canvas width in pixels.", rich_help_panel=RENDERING_PANEL),
]

HeightOption = Annotated[
    int,
    typer.Option("--height", min=1, help="Canvas height in pixels.", rich_help_panel=RENDERING_PANEL),
]

FontDirOption = Annotated[
    list[Path] | None,
    typer.Option(
        "--font-dir",
        help="Additional directory scanned for font files. Repeat for several directories.",
        file_okay=False,
        dir_okay=True,
        rich_help_panel=RENDERING_PANEL,
    ),
]

NoFontconfigOption = Annotated[
    bool,
    typer.Option(
        "--no-fontconfig",
        help="Only use --font-dir and GLYPHSMITH_FONT_DIRS; do not query fc-list.",
        rich_help_panel=RENDERING_PANEL,
    ),
]
