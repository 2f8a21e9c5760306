"""Implementation of the `glyphsmith range` command."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from glyphsmith.core.exceptions import TypefaceNotFoundError
from glyphsmith.core.logging import PipelineLogger
from glyphsmith.render.ranges import generate_range

from .._options import (
    ColorOption,
    FontDirOption,
    FontSizeOption,
    FontStyleOption,
    HeightOption,
    NoFontconfigOption,
    OutputDirOption,
    WidthOption,
)
from ..diagnostics import CliEmitter
from ..state import emit_error, get_cli_state
from ..utils import (
    build_registry,
    parse_codepoint_option,
    parse_color_option,
    parse_style_option,
)


def range_command(
    start: Annotated[str, typer.Argument(help="First code point (inclusive), e.g. 65 or U+0041.")],
    end: Annotated[str, typer.Argument(help="Last code point (exclusive).")],
    font: Annotated[str, typer.Option("--font", "-f", help="Typeface family name.")],
    size: FontSizeOption = 48,
    style: FontStyleOption = "plain",
    color: ColorOption = "black",
    width: WidthOption = 64,
    height: HeightOption = 64,
    output: OutputDirOption = None,
    font_dir: FontDirOption = None,
    no_fontconfig: NoFontconfigOption = False,
) -> None:
    """Export one code point range with a single typeface and color."""
    first = parse_codepoint_option(start, param="START")
    last = parse_codepoint_option(end, param="END")
    if last <= first:
        raise typer.BadParameter("END must be greater than START.", param_hint="END")
    font_style = parse_style_option(style)
    named_color = parse_color_option(color)

    state = get_cli_state()
    registry = build_registry(font_dir, use_fontconfig=not no_fontconfig)
    try:
        typeface = registry.resolve(font)
    except TypefaceNotFoundError as exc:
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=2) from exc

    directory = output or Path("png")
    logger = PipelineLogger(verbose=state.verbosity >= 1)
    face = typeface.derive(size, font_style)
    generate_range(
        first,
        last,
        face,
        directory,
        named_color,
        height,
        width,
        emitter=CliEmitter(state),
        logger=logger,
    )

    logger.info("")
    logger.info("Summary")
    logger.info("=======")
    logger.info("\tSize: %dx%d", width, height)
    logger.info("\tFont: %s (%s) %s %dpt", named_color.label, font_style.value, face.name, size)
    logger.info("\tFiles written to: %s", directory)


__all__ = ["range_command"]
