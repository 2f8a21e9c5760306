"""Typeface handles backed by fontTools character maps and Pillow rasterisers.

Architecture
: `Typeface` is the named family resolved from a `FontLocator`. It answers
  glyph availability from the character map of its primary face and derives
  renderable `FontFace` handles for a given size and style.
: `FontFace` wraps a `PIL.ImageFont.FreeTypeFont` and knows how to draw text at
  a baseline origin.
: `TypefaceRegistry` resolves names to typefaces once and keeps them for the
  lifetime of a run.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
import logging
from pathlib import Path
import threading
from typing import Any, Protocol, runtime_checkable

from fontTools.ttLib import TTFont
from PIL import ImageDraw, ImageFont

from glyphsmith.core.exceptions import TypefaceNotFoundError
from glyphsmith.fonts.locator import FontFiles, FontLocator
from glyphsmith.fonts.utils import normalize_family


logger = logging.getLogger(__name__)


class FontStyle(str, Enum):
    """Font style requested by a selection."""

    PLAIN = "plain"
    BOLD = "bold"
    ITALIC = "italic"
    BOLD_ITALIC = "bold_italic"

    @classmethod
    def parse(cls, value: Any) -> FontStyle:
        """Accept enum members, names, or the numeric codes ``1``/``2``/``3``."""
        if isinstance(value, cls):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            numeric = {1: cls.PLAIN, 2: cls.BOLD, 3: cls.ITALIC}
            if value in numeric:
                return numeric[value]
            raise ValueError(f"font style must be 1, 2, or 3, but {value} was provided")
        if isinstance(value, str):
            cleaned = value.strip().casefold().replace(" ", "_").replace("-", "_")
            if cleaned.isdigit():
                return cls.parse(int(cleaned))
            aliases = {"regular": cls.PLAIN, "normal": cls.PLAIN, "bolditalic": cls.BOLD_ITALIC}
            if cleaned in aliases:
                return aliases[cleaned]
            return cls(cleaned)
        raise ValueError(f"Unsupported font style: {value!r}")


@runtime_checkable
class RenderableFace(Protocol):
    """A typeface at a fixed size and style, ready to draw."""

    name: str

    def can_display(self, codepoint: int) -> bool: ...

    def draw(
        self,
        draw: ImageDraw.ImageDraw,
        text: str,
        origin: tuple[float, float],
        fill: tuple[int, int, int, int],
    ) -> None: ...


@runtime_checkable
class TypefaceHandle(Protocol):
    """A named typeface that can be probed and derived."""

    name: str

    def can_display(self, codepoint: int) -> bool: ...

    def derive(self, size: int, style: FontStyle) -> RenderableFace: ...


def read_codepoints(path: Path, *, font_number: int = 0) -> frozenset[int]:
    """Return the code points mapped by the best cmap subtable of ``path``."""
    font = TTFont(str(path), fontNumber=font_number, lazy=True)
    try:
        cmap = font.getBestCmap() or {}
    finally:
        font.close()
    return frozenset(int(codepoint) for codepoint in cmap)


@dataclass(frozen=True, slots=True)
class FontFace:
    """Pillow-backed renderable handle."""

    name: str
    size: int
    style: FontStyle
    font: ImageFont.FreeTypeFont = field(repr=False)
    codepoints: frozenset[int] = field(repr=False)
    # One FreeType face is shared by every worker thread.
    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )

    def can_display(self, codepoint: int) -> bool:
        return codepoint in self.codepoints

    def draw(
        self,
        draw: ImageDraw.ImageDraw,
        text: str,
        origin: tuple[float, float],
        fill: tuple[int, int, int, int],
    ) -> None:
        # "ls": origin is the left edge of the pen position on the baseline.
        with self._lock:
            draw.text(origin, text, font=self.font, fill=fill, anchor="ls")


class Typeface:
    """A font family resolved to files on disk."""

    def __init__(self, name: str, files: FontFiles, *, codepoints: Iterable[int] | None = None) -> None:
        primary = files.primary()
        if primary is None:
            raise TypefaceNotFoundError(f"Typeface '{name}' has no font files.")
        self.name = name
        self.files = files
        self._codepoints = frozenset(codepoints) if codepoints is not None else None
        self._faces: dict[tuple[int, FontStyle], FontFace] = {}

    @property
    def codepoints(self) -> frozenset[int]:
        if self._codepoints is None:
            primary = self.files.primary()
            assert primary is not None
            self._codepoints = read_codepoints(primary)
            logger.debug("%s maps %d code points", self.name, len(self._codepoints))
        return self._codepoints

    def can_display(self, codepoint: int) -> bool:
        return codepoint in self.codepoints

    def _path_for(self, style: FontStyle) -> Path:
        candidates = {
            FontStyle.PLAIN: (self.files.regular,),
            FontStyle.BOLD: (self.files.bold,),
            FontStyle.ITALIC: (self.files.italic,),
            FontStyle.BOLD_ITALIC: (self.files.bold_italic, self.files.bold, self.files.italic),
        }[style]
        for candidate in candidates:
            if candidate is not None:
                return candidate
        fallback = self.files.primary()
        assert fallback is not None
        logger.debug("%s has no %s face; using %s", self.name, style.value, fallback.name)
        return fallback

    def derive(self, size: int, style: FontStyle = FontStyle.PLAIN) -> FontFace:
        """Return the renderable face for ``size`` and ``style``."""
        key = (size, style)
        face = self._faces.get(key)
        if face is None:
            path = self._path_for(style)
            face = FontFace(
                name=self.name,
                size=size,
                style=style,
                font=ImageFont.truetype(str(path), size),
                codepoints=self.codepoints,
            )
            self._faces[key] = face
        return face

    def __repr__(self) -> str:
        return f"Typeface({self.name!r})"


class TypefaceRegistry:
    """Resolve typeface names through a `FontLocator`, caching the results."""

    def __init__(self, locator: FontLocator | None = None) -> None:
        self.locator = locator or FontLocator()
        self._cache: dict[str, Typeface] = {}

    def resolve(self, name: str) -> Typeface:
        key = normalize_family(name)
        cached = self._cache.get(key)
        if cached is not None:
            return cached
        files = self.locator.locate_family(name)
        if not files.any_files():
            raise TypefaceNotFoundError(f"Font selection '{name}' is not a valid font option.")
        typeface = Typeface(name, files)
        self._cache[key] = typeface
        return typeface

    def families(self) -> list[str]:
        """Return the numbered-list order of discovered families."""
        return sorted(self.locator.available_families(), key=str.casefold)


__all__ = [
    "FontFace",
    "FontStyle",
    "RenderableFace",
    "Typeface",
    "TypefaceHandle",
    "TypefaceRegistry",
    "read_codepoints",
]
