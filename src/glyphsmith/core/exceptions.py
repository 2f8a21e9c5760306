"""Custom exception hierarchy for the glyph export pipeline."""

from __future__ import annotations


class GlyphsmithError(RuntimeError):
    """Base exception for glyph export failures."""


class PlanError(GlyphsmithError):
    """Raised when a generation plan or request violates its invariants."""


class TypefaceNotFoundError(GlyphsmithError):
    """Raised when a typeface name cannot be resolved to font files."""


class DispatchRejectedError(GlyphsmithError):
    """Raised when the worker pool refuses a task instead of dropping it."""


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


def exception_hint(exc: BaseException) -> str | None:
    """Return the most specific message available for an exception chain."""
    messages = exception_messages(exc)
    return messages[-1] if messages else None


__all__ = [
    "DispatchRejectedError",
    "GlyphsmithError",
    "PlanError",
    "TypefaceNotFoundError",
    "exception_hint",
    "exception_messages",
]
