"""Implementation of the `glyphsmith fonts` command."""

from __future__ import annotations

from .._options import FontDirOption, NoFontconfigOption
from ..presenter import present_font_families
from ..state import get_cli_state
from ..utils import build_registry


def fonts(
    font_dir: FontDirOption = None,
    no_fontconfig: NoFontconfigOption = False,
) -> None:
    """List the font families glyphsmith can use."""
    registry = build_registry(font_dir, use_fontconfig=not no_fontconfig)
    present_font_families(get_cli_state(), registry.families())


__all__ = ["fonts"]
