"""CLI command implementations exposed via `glyphsmith.ui.cli`."""

from __future__ import annotations

from .fonts import fonts
from .generate import generate
from .range import range_command


__all__ = ["fonts", "generate", "range_command"]
