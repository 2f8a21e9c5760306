"""Write rendered canvases to disk."""

from __future__ import annotations

import logging
from pathlib import Path

from glyphsmith.core.diagnostics import DiagnosticEmitter, NullEmitter
from glyphsmith.render.canvas import RenderedCanvas


logger = logging.getLogger(__name__)


def export_canvas(
    canvas: RenderedCanvas,
    path: Path,
    *,
    emitter: DiagnosticEmitter | None = None,
) -> bool:
    """Encode ``canvas`` as PNG at ``path``.

    Write failures are reported through ``emitter`` and answered with ``False``
    so a failing file never aborts the surrounding run.
    """
    emitter = emitter or NullEmitter()
    try:
        canvas.image.save(path, format="PNG")
    except OSError as exc:
        reason = exc.strerror or str(exc)
        emitter.error(f"Could not write image file '{path}': {reason}", exc)
        emitter.event("export_failed", {"path": str(path), "reason": reason})
        return False
    logger.debug("Wrote %s", path)
    return True


__all__ = ["export_canvas"]
