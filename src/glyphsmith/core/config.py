"""Generation plan models.

GeneratorPlan

`target_directory` (`Path`)
: Base directory receiving `{selection}/{color}/{U+min}_{U+max}` folders.
  Relative paths resolve against the working directory.

`font_dirs` (`list[Path]`)
: Extra directories scanned for `.ttf`, `.otf` and `.ttc` files before
  fontconfig is consulted.

`selections` (`list[SelectionConfig]`)
: Batches to generate. Selection names must be unique.

SelectionConfig

`name` (`str`)
: Folder name of the selection.

`fonts` (`FontsConfig`)
: Typeface names in fallback order, point size and style. Styles accept
  `plain`, `bold`, `italic`, `bold_italic` or the numeric codes `1`, `2`, `3`.

`pixel_width`, `pixel_height` (`int`)
: Canvas dimensions of every exported image.

`colors` (`list[ColorConfig]`)
: Either a color name (`black`, `light gray`, ...) or a mapping of `red`,
  `green`, `blue` and optional `alpha` channels.

`ranges` (`list[RangeConfig]`)
: Code point ranges with an inclusive `start` and exclusive `end`, written
  as integers or `U+XXXX` labels.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)
import yaml

from glyphsmith.core.colors import COLOR_OPTIONS, NamedColor, color_option
from glyphsmith.core.exceptions import PlanError, TypefaceNotFoundError
from glyphsmith.fonts.locator import FontLocator
from glyphsmith.fonts.typeface import FontStyle, TypefaceRegistry
from glyphsmith.fonts.utils import parse_codepoint
from glyphsmith.render.jobs import GenerationRequest


DEFAULT_PLAN_PATH = Path("config") / "generator_plan.yaml"


class ColorConfig(BaseModel):
    """A named color or an explicit RGBA quadruple."""

    model_config = ConfigDict(extra="forbid")

    name: str | None = None
    red: int | None = Field(default=None, ge=0, le=255)
    green: int | None = Field(default=None, ge=0, le=255)
    blue: int | None = Field(default=None, ge=0, le=255)
    alpha: int = Field(default=255, ge=0, le=255)

    @model_validator(mode="before")
    @classmethod
    def _coerce_name(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"name": data}
        return data

    @model_validator(mode="after")
    def _check_color(self) -> ColorConfig:
        channels = (self.red, self.green, self.blue)
        if self.name is not None:
            if any(channel is not None for channel in channels):
                raise ValueError("give either a color name or RGBA channels, not both")
            if color_option(self.name) is None:
                known = ", ".join(sorted({color.label for color in COLOR_OPTIONS.values()}))
                raise ValueError(f"unknown color '{self.name}' (expected one of: {known})")
        elif any(channel is None for channel in channels):
            raise ValueError("custom colors need red, green and blue channels")
        return self

    def to_color(self) -> NamedColor:
        if self.name is not None:
            color = color_option(self.name)
            assert color is not None
            return color
        assert self.red is not None and self.green is not None and self.blue is not None
        return NamedColor.from_rgba(self.red, self.green, self.blue, self.alpha)


class RangeConfig(BaseModel):
    """Code point range ``[start, end)``."""

    model_config = ConfigDict(extra="forbid")

    start: int = Field(ge=0, le=0x10FFFF)
    end: int = Field(ge=0, le=0x110000)

    @field_validator("start", "end", mode="before")
    @classmethod
    def _parse_codepoint(cls, value: Any) -> int:
        try:
            return parse_codepoint(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"invalid code point {value!r}") from exc

    @model_validator(mode="after")
    def _check_order(self) -> RangeConfig:
        if self.end < self.start:
            raise ValueError(f"range end {self.end} must not be less than start {self.start}")
        return self

    def as_tuple(self) -> tuple[int, int]:
        return (self.start, self.end)


class FontsConfig(BaseModel):
    """Typefaces of a selection, in fallback order."""

    model_config = ConfigDict(extra="forbid")

    names: list[str] = Field(min_length=1)
    size: int = Field(gt=0)
    style: FontStyle = FontStyle.PLAIN

    @field_validator("names", mode="before")
    @classmethod
    def _coerce_names(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [value]
        return value

    @field_validator("style", mode="before")
    @classmethod
    def _parse_style(cls, value: Any) -> FontStyle:
        return FontStyle.parse(value)


class SelectionConfig(BaseModel):
    """One batch of glyphs sharing fonts, canvas size and colors."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)
    fonts: FontsConfig
    pixel_width: int = Field(gt=0)
    pixel_height: int = Field(gt=0)
    colors: list[ColorConfig] = Field(min_length=1)
    ranges: list[RangeConfig] = Field(min_length=1)

    def to_request(self, registry: TypefaceRegistry) -> GenerationRequest:
        """Resolve the typefaces and return the immutable request."""
        typefaces = []
        for font_name in self.fonts.names:
            try:
                typefaces.append(registry.resolve(font_name))
            except TypefaceNotFoundError as exc:
                raise PlanError(f"Selection '{self.name}': {exc}") from exc
        return GenerationRequest(
            name=self.name,
            typefaces=tuple(typefaces),
            size=self.fonts.size,
            style=self.fonts.style,
            width=self.pixel_width,
            height=self.pixel_height,
            colors=tuple(color.to_color() for color in self.colors),
            ranges=tuple(item.as_tuple() for item in self.ranges),
        )


class GeneratorPlan(BaseModel):
    """Validated generation plan."""

    model_config = ConfigDict(extra="forbid")

    target_directory: Path = Path("png")
    font_dirs: list[Path] = Field(default_factory=list)
    selections: list[SelectionConfig] = Field(min_length=1)

    @model_validator(mode="after")
    def _unique_names(self) -> GeneratorPlan:
        seen: set[str] = set()
        for selection in self.selections:
            if selection.name in seen:
                raise ValueError(f"duplicate selection name '{selection.name}'")
            seen.add(selection.name)
        return self

    def font_locator(self, *, use_fontconfig: bool = True) -> FontLocator:
        return FontLocator(search_paths=self.font_dirs, use_fontconfig=use_fontconfig)

    def build_requests(self, registry: TypefaceRegistry | None = None) -> list[GenerationRequest]:
        """Return one `GenerationRequest` per selection, in plan order."""
        registry = registry or TypefaceRegistry(self.font_locator())
        return [selection.to_request(registry) for selection in self.selections]


def _format_validation_error(exc: ValidationError) -> str:
    lines = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())) or "<plan>"
        lines.append(f"  {location}: {error.get('msg', 'invalid value')}")
    return "\n".join(lines)


def parse_plan(data: Any, *, source: str = "<plan>") -> GeneratorPlan:
    """Validate an already loaded mapping."""
    if not isinstance(data, dict):
        raise PlanError(f"Generation plan '{source}' must be a mapping.")
    try:
        return GeneratorPlan.model_validate(data)
    except ValidationError as exc:
        raise PlanError(
            f"Invalid generation plan '{source}':\n{_format_validation_error(exc)}"
        ) from exc


def load_plan(path: Path = DEFAULT_PLAN_PATH) -> GeneratorPlan:
    """Read and validate the YAML plan at ``path``."""
    path = Path(path)
    try:
        payload = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise PlanError(f"Failed to read generation plan '{path}': {exc}") from exc

    try:
        data = yaml.safe_load(payload)
    except yaml.YAMLError as exc:
        raise PlanError(f"Invalid YAML in generation plan '{path}': {exc}") from exc
    return parse_plan(data, source=str(path))


__all__ = [
    "DEFAULT_PLAN_PATH",
    "ColorConfig",
    "FontsConfig",
    "GeneratorPlan",
    "RangeConfig",
    "SelectionConfig",
    "load_plan",
    "parse_plan",
]
