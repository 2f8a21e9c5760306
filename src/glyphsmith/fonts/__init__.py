"""Typeface discovery and glyph availability.

`FontLocator` groups font files into families, `TypefaceRegistry` turns family
names into `Typeface` handles, and each handle derives Pillow-backed
`FontFace` objects for the size and style a selection asks for.
"""

from glyphsmith.fonts.locator import FontFiles, FontLocator
from glyphsmith.fonts.typeface import (
    FontFace,
    FontStyle,
    RenderableFace,
    Typeface,
    TypefaceHandle,
    TypefaceRegistry,
    read_codepoints,
)
from glyphsmith.fonts.utils import normalize_family, parse_codepoint, unicode_label


__all__ = [
    "FontFace",
    "FontFiles",
    "FontLocator",
    "FontStyle",
    "RenderableFace",
    "Typeface",
    "TypefaceHandle",
    "TypefaceRegistry",
    "normalize_family",
    "parse_codepoint",
    "read_codepoints",
    "unicode_label",
]
