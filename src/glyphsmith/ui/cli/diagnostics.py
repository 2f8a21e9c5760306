"""Diagnostic emitter bridging the export pipeline with CLI rendering utilities."""

from __future__ import annotations

from collections.abc import Mapping
import threading
from typing import Any

from glyphsmith.core.diagnostics import DiagnosticEmitter, format_event_message

from .state import CLIState, emit_error, emit_warning, get_cli_state, render_message


# Per-glyph events are only echoed in verbose mode; the run summary lists them.
_VERBOSE_EVENTS = frozenset({"glyph_unavailable", "glyph_oversized"})
# Rendered elsewhere: export errors by export_canvas, the summary by the presenter.
_PRESENTED_EVENTS = frozenset({"export_failed", "run_complete"})


class CliEmitter(DiagnosticEmitter):
    """Emit diagnostics using the rich-enabled CLI helpers.

    Safe to call from dispatcher worker threads.
    """

    def __init__(self, state: CLIState | None = None, *, debug_enabled: bool | None = None) -> None:
        self._state = state or get_cli_state()
        self._lock = threading.Lock()
        if debug_enabled is None:
            debug_enabled = self._state.show_tracebacks
        self.debug_enabled = bool(debug_enabled)

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        emit_warning(message, exception=exc, state=self._state)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        emit_error(message, exception=exc, state=self._state)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        data = dict(payload)
        with self._lock:
            self._state.record_event(name, data)
        if name in _VERBOSE_EVENTS and self._state.verbosity < 1:
            return
        if name in _PRESENTED_EVENTS:
            return
        message = format_event_message(name, data)
        if message:
            render_message("info", message, state=self._state)


__all__ = ["CliEmitter"]
