from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
import math
from pathlib import Path
from typing import Any

from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen
import pytest

from glyphsmith.fonts.typeface import FontStyle
from glyphsmith.ui.cli import state as cli_state


@dataclass
class BlockFace:
    """Renderable face drawing every glyph as a solid, pixel-aligned rectangle.

    Ink covers rows ``[y - ascent - lift, y + descent - lift)`` and columns
    ``[x + bearing, x + bearing + ink_width)`` for a baseline origin ``(x, y)``.
    """

    name: str = "Block"
    ascent: int = 21
    descent: int = 2
    ink_width: int = 21
    bearing: int = 0
    lift: int = 0
    codepoints: frozenset[int] | None = None
    draws: int = 0

    def can_display(self, codepoint: int) -> bool:
        return self.codepoints is None or codepoint in self.codepoints

    def draw(self, draw: Any, text: str, origin: tuple[float, float], fill: Any) -> None:
        self.draws += 1
        x = math.floor(origin[0]) + self.bearing
        y = math.floor(origin[1]) - self.lift
        draw.rectangle(
            [x, y - self.ascent, x + self.ink_width - 1, y + self.descent - 1], fill=fill
        )


@dataclass
class FakeTypeface:
    """Typeface handle deriving `BlockFace` instances."""

    name: str
    codepoints: frozenset[int] | None = None
    face_options: dict[str, Any] = field(default_factory=dict)
    probes: list[int] = field(default_factory=list)
    derived: list[tuple[int, FontStyle]] = field(default_factory=list)

    def can_display(self, codepoint: int) -> bool:
        self.probes.append(codepoint)
        return self.codepoints is None or codepoint in self.codepoints

    def derive(self, size: int, style: FontStyle) -> BlockFace:
        self.derived.append((size, style))
        return BlockFace(name=self.name, codepoints=self.codepoints, **self.face_options)


@pytest.fixture
def make_face() -> Callable[..., BlockFace]:
    return BlockFace


@pytest.fixture
def make_typeface() -> Callable[..., FakeTypeface]:
    def _make(
        name: str = "Block",
        codepoints: Iterable[int] | None = None,
        **face_options: Any,
    ) -> FakeTypeface:
        cps = frozenset(codepoints) if codepoints is not None else None
        return FakeTypeface(name=name, codepoints=cps, face_options=face_options)

    return _make


def _box_glyph(x0: int, y0: int, x1: int, y1: int) -> Any:
    pen = TTGlyphPen(None)
    pen.moveTo((x0, y0))
    pen.lineTo((x0, y1))
    pen.lineTo((x1, y1))
    pen.lineTo((x1, y0))
    pen.closePath()
    return pen.glyph()


@pytest.fixture(scope="session")
def block_font_dir(tmp_path_factory: pytest.TempPathFactory) -> Path:
    """Directory holding ``DemoBlock-Regular.ttf``, mapping only ``A`` to a box."""
    directory = tmp_path_factory.mktemp("fonts")
    builder = FontBuilder(1000, isTTF=True)
    builder.setupGlyphOrder([".notdef", "A"])
    builder.setupCharacterMap({0x41: "A"})
    builder.setupGlyf({".notdef": _box_glyph(50, 0, 450, 700), "A": _box_glyph(100, 0, 600, 700)})
    builder.setupHorizontalMetrics({".notdef": (500, 50), "A": (700, 100)})
    builder.setupHorizontalHeader(ascent=800, descent=-200)
    builder.setupNameTable({"familyName": "DemoBlock", "styleName": "Regular"})
    builder.setupOS2(sTypoAscender=800, usWinAscent=800, usWinDescent=200)
    builder.setupPost()
    builder.save(str(directory / "DemoBlock-Regular.ttf"))
    return directory


@pytest.fixture(autouse=True)
def _no_fontconfig(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GLYPHSMITH_SKIP_FONTCONFIG", "1")
    monkeypatch.delenv("GLYPHSMITH_FONT_DIRS", raising=False)


@pytest.fixture(autouse=True)
def _fresh_cli_state() -> Iterator[None]:
    """Isolate the process-global CLI state between tests."""
    token = cli_state._STATE_VAR.set(None)
    yield
    cli_state._STATE_VAR.reset(token)
