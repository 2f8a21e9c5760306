"""Helpers shared by CLI commands."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import typer

from glyphsmith.core.colors import NamedColor, color_option
from glyphsmith.fonts.locator import FontLocator
from glyphsmith.fonts.typeface import FontStyle, TypefaceRegistry
from glyphsmith.fonts.utils import parse_codepoint


def build_registry(
    font_dirs: Iterable[Path] | None = None, *, use_fontconfig: bool = True
) -> TypefaceRegistry:
    return TypefaceRegistry(
        FontLocator(search_paths=list(font_dirs or ()), use_fontconfig=use_fontconfig)
    )


def parse_codepoint_option(value: str, *, param: str) -> int:
    """Parse a code point argument, reporting bad input as a usage error."""
    try:
        codepoint = parse_codepoint(value)
    except (TypeError, ValueError) as exc:
        raise typer.BadParameter(f"'{value}' is not a code point.", param_hint=param) from exc
    if not 0 <= codepoint <= 0x110000:
        raise typer.BadParameter(f"{value} is outside the Unicode range.", param_hint=param)
    return codepoint


def parse_style_option(value: str) -> FontStyle:
    try:
        return FontStyle.parse(value)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--style") from exc


def parse_color_option(value: str) -> NamedColor:
    color = color_option(value)
    if color is None:
        raise typer.BadParameter(f"Unknown color '{value}'.", param_hint="--color")
    return color


__all__ = [
    "build_registry",
    "parse_codepoint_option",
    "parse_color_option",
    "parse_style_option",
]
