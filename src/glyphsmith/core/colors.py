"""Named colors accepted by generation plans.

Each color carries a filesystem-friendly ``name`` used in output directories and
a readable ``label``. ``COLOR_OPTIONS`` is an immutable lookup built once at
import time; plans and commands receive it by reference.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True, slots=True)
class NamedColor:
    """An RGBA color that knows its name."""

    red: int
    green: int
    blue: int
    alpha: int = 255
    name: str = ""
    label: str = ""

    def __post_init__(self) -> None:
        for channel in (self.red, self.green, self.blue, self.alpha):
            if not 0 <= channel <= 255:
                raise ValueError(f"Color channel out of range: {channel}")
        custom = not self.name
        if custom:
            object.__setattr__(
                self, "name", f"RGBA_{self.red}_{self.green}_{self.blue}_{self.alpha}"
            )
        if not self.label:
            label = (
                f"RGBA({self.red},{self.green},{self.blue},{self.alpha})" if custom else self.name
            )
            object.__setattr__(self, "label", label)

    @property
    def rgba(self) -> tuple[int, int, int, int]:
        return (self.red, self.green, self.blue, self.alpha)

    @property
    def rgba_label(self) -> str:
        return f"({self.red}, {self.green}, {self.blue}, {self.alpha})"

    @classmethod
    def from_rgba(cls, red: int, green: int, blue: int, alpha: int = 255) -> NamedColor:
        """Build a custom color named after its channels."""
        return cls(red, green, blue, alpha)


WHITE = NamedColor(255, 255, 255, 255, "white")
BLACK = NamedColor(0, 0, 0, 255, "black")
RED = NamedColor(255, 0, 0, 255, "red")
BLUE = NamedColor(0, 0, 255, 255, "blue")
GREEN = NamedColor(0, 255, 0, 255, "green")
YELLOW = NamedColor(255, 255, 0, 255, "yellow")
PINK = NamedColor(255, 175, 175, 255, "pink")
ORANGE = NamedColor(255, 200, 0, 255, "orange")
MAGENTA = NamedColor(255, 0, 255, 255, "magenta")
CYAN = NamedColor(0, 255, 255, 255, "cyan")
LIGHT_GRAY = NamedColor(192, 192, 192, 255, "lightGray", "light gray")
GRAY = NamedColor(128, 128, 128, 255, "gray")
DARK_GRAY = NamedColor(64, 64, 64, 255, "darkGray", "dark gray")

# Opaque probe color used while measuring ink; only alpha matters.
PROBE_COLOR = BLUE


def _build_options(colors: tuple[NamedColor, ...]) -> Mapping[str, NamedColor]:
    options: dict[str, NamedColor] = {}
    for color in colors:
        options[color.label] = color
        options.setdefault(color.name, color)
    return MappingProxyType(options)


COLOR_OPTIONS: Mapping[str, NamedColor] = _build_options(
    (
        WHITE,
        BLACK,
        RED,
        BLUE,
        GREEN,
        YELLOW,
        PINK,
        ORANGE,
        MAGENTA,
        CYAN,
        LIGHT_GRAY,
        GRAY,
        DARK_GRAY,
    )
)


def color_option(
    name: str, options: Mapping[str, NamedColor] = COLOR_OPTIONS
) -> NamedColor | None:
    """Return the color registered under ``name`` (case-insensitive)."""
    if name in options:
        return options[name]
    lowered = name.strip().casefold()
    for key, color in options.items():
        if key.casefold() == lowered:
            return color
    return None


__all__ = [
    "COLOR_OPTIONS",
    "PROBE_COLOR",
    "NamedColor",
    "color_option",
]
