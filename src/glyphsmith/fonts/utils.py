"""Shared helpers for font handling."""

from __future__ import annotations

from typing import Any


FONT_SUFFIXES = frozenset({".otf", ".ttf", ".ttc"})


def normalize_family(name: str) -> str:
    """Return a normalised font family key suitable for lookups."""
    return "".join(ch for ch in name.casefold() if ch not in {" ", "-", "_"})


def filename_base(filename: str) -> str:
    """Return the family part of a font file stem, stripping style suffixes."""
    return filename.split("-")[0]


def parse_codepoint(value: Any) -> int:
    """Parse ``65``, ``"65"``, ``"U+0041"`` or ``"0x41"`` into an integer."""
    if isinstance(value, bool):
        raise TypeError(f"Unsupported codepoint value: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        val = value.strip()
        if val.upper().startswith("U+"):
            return int(val[2:], 16)
        if val.lower().startswith("0x"):
            return int(val, 16)
        return int(val, 10)
    raise TypeError(f"Unsupported codepoint value: {value!r}")


def unicode_label(codepoint: int) -> str:
    """Return the ``U+XXXX`` label used in file and directory names."""
    return f"U+{codepoint:04X}"


__all__ = [
    "FONT_SUFFIXES",
    "filename_base",
    "normalize_family",
    "parse_codepoint",
    "unicode_label",
]
