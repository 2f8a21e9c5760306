from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from PIL import Image, ImageDraw

from glyphsmith.render.canvas import RenderedCanvas
from glyphsmith.render.export import export_canvas


class RecordingEmitter:
    debug_enabled = False

    def __init__(self) -> None:
        self.errors: list[tuple[str, BaseException | None]] = []
        self.events: list[tuple[str, dict[str, Any]]] = []

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        return

    def error(self, message: str, exc: BaseException | None = None) -> None:
        self.errors.append((message, exc))

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        self.events.append((name, dict(payload)))


def _canvas() -> RenderedCanvas:
    canvas = RenderedCanvas.blank(16, 12)
    ImageDraw.Draw(canvas.image).rectangle([4, 3, 9, 7], fill=(255, 0, 0, 200))
    return canvas


def test_export_writes_png(tmp_path: Path) -> None:
    target = tmp_path / "glyph.png"

    assert export_canvas(_canvas(), target) is True

    with Image.open(target) as image:
        assert image.format == "PNG"
        assert image.size == (16, 12)
        assert image.getpixel((5, 5)) == (255, 0, 0, 200)
        assert image.getpixel((0, 0))[3] == 0


def test_export_failure_is_reported_not_raised(tmp_path: Path) -> None:
    emitter = RecordingEmitter()
    target = tmp_path / "missing" / "glyph.png"

    assert export_canvas(_canvas(), target, emitter=emitter) is False

    assert not target.exists()
    ((message, exc),) = emitter.errors
    assert str(target) in message
    assert isinstance(exc, OSError)
    ((name, payload),) = emitter.events
    assert name == "export_failed"
    assert payload["path"] == str(target)
    assert payload["reason"]


def test_export_failure_without_emitter_returns_false(tmp_path: Path) -> None:
    target = tmp_path / "is-a-directory"
    target.mkdir()

    assert export_canvas(_canvas(), target) is False
