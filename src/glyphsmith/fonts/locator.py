"""Locate font files available to the exporter."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
import logging
import os
from pathlib import Path
import shutil
import subprocess

from glyphsmith.fonts.utils import FONT_SUFFIXES, filename_base, normalize_family


logger = logging.getLogger(__name__)

FONT_DIRS_ENV = "GLYPHSMITH_FONT_DIRS"
SKIP_FONTCONFIG_ENV = "GLYPHSMITH_SKIP_FONTCONFIG"

_REGULAR_STYLES = ("regular", "book", "normal", "roman")
_BOLD_STYLES = ("bold", "bold regular", "semibold", "demibold", "medium")
_ITALIC_STYLES = ("italic", "oblique")
_BOLD_ITALIC_STYLES = (
    "bold italic",
    "bolditalic",
    "bold oblique",
    "boldoblique",
    "semibold italic",
    "medium italic",
    "medium oblique",
)


def _style_key(value: str | None) -> str:
    return (value or "Regular").strip().casefold() or "regular"


def _guess_style_from_filename(path: Path) -> str:
    name = path.name.casefold()
    if "bold" in name and ("italic" in name or "oblique" in name):
        return "bold italic"
    if "bold" in name:
        return "bold"
    if "italic" in name or "oblique" in name:
        return "italic"
    return "regular"


@dataclass(frozen=True, slots=True)
class FontFiles:
    """Resolved file paths for a font family."""

    family: str
    regular: Path | None = None
    bold: Path | None = None
    italic: Path | None = None
    bold_italic: Path | None = None

    def any_files(self) -> bool:
        """Return True when at least one face is present."""
        return any([self.regular, self.bold, self.italic, self.bold_italic])

    def available(self) -> dict[str, Path]:
        """Return a mapping of the available face names to their paths."""
        entries = {
            "regular": self.regular,
            "bold": self.bold,
            "italic": self.italic,
            "bold_italic": self.bold_italic,
        }
        return {key: value for key, value in entries.items() if value is not None}

    def primary(self) -> Path | None:
        """Return the face used for glyph availability checks."""
        return self.regular or self.bold or self.italic or self.bold_italic


def env_search_paths() -> list[Path]:
    """Return the extra font directories declared in the environment."""
    raw = os.environ.get(FONT_DIRS_ENV, "")
    return [Path(item).expanduser() for item in raw.split(os.pathsep) if item.strip()]


class FontLocator:
    """Discover fonts from search directories and fontconfig."""

    def __init__(
        self,
        *,
        search_paths: Iterable[Path] | None = None,
        use_fontconfig: bool = True,
    ) -> None:
        self._fonts: dict[str, dict[str, Path]] = {}
        self._names: dict[str, set[str]] = {}

        for path in [*(search_paths or ()), *env_search_paths()]:
            self.register_directory(path)

        if use_fontconfig:
            self._load_from_fontconfig()

    def _register_entry(self, family: str, style: str, path: Path) -> None:
        key = normalize_family(family)
        self._fonts.setdefault(key, {}).setdefault(_style_key(style), path)
        self._names.setdefault(key, set()).add(family)

    def register_file(self, path: Path, *, family: str | None = None, style: str | None = None) -> None:
        """Register a single font file, guessing family and style from its name."""
        resolved = path.resolve()
        self._register_entry(
            family or filename_base(resolved.stem),
            style or _guess_style_from_filename(resolved),
            resolved,
        )

    def register_directory(self, path: Path) -> None:
        """Register every font file found below ``path``."""
        if not path.exists():
            logger.debug("Font directory %s does not exist.", path)
            return
        for file_path in sorted(path.rglob("*")):
            if file_path.suffix.lower() not in FONT_SUFFIXES:
                continue
            self.register_file(file_path)

    def _load_from_fontconfig(self) -> None:
        if shutil.which("fc-list") is None or os.environ.get(SKIP_FONTCONFIG_ENV):
            return

        try:
            proc = subprocess.run(
                ["fc-list", "-f", "%{file}|%{family}|%{style}\n"],
                check=True,
                capture_output=True,
                text=True,
            )
        except (OSError, subprocess.SubprocessError) as exc:
            logger.debug("fc-list failed: %s", exc)
            return

        for line in proc.stdout.splitlines():
            parts = line.split("|")
            if len(parts) != 3:
                continue
            file_part, families_part, styles_part = parts
            path = Path(file_part).expanduser()
            if path.suffix.lower() not in FONT_SUFFIXES or not path.exists():
                continue
            families = [fam.strip() for fam in families_part.split(",") if fam.strip()]
            styles = [sty.strip() for sty in styles_part.split(",") if sty.strip()]
            style_value = styles[0] if styles else "Regular"
            for family in families:
                self._register_entry(family, style_value, path)

    def available_families(self) -> set[str]:
        """Return the discovered family names (raw values as reported)."""
        names: set[str] = set()
        for bucket in self._names.values():
            names.update(bucket)
        return names

    def locate_family(self, family: str) -> FontFiles:
        """Return resolved files for the requested family, if available."""
        styles = self._fonts.get(normalize_family(family))
        if not styles:
            return FontFiles(family=family)

        def _pick(candidates: tuple[str, ...]) -> Path | None:
            for candidate in candidates:
                if candidate in styles:
                    return styles[candidate]
            return None

        return FontFiles(
            family=family,
            regular=_pick(_REGULAR_STYLES),
            bold=_pick(_BOLD_STYLES),
            italic=_pick(_ITALIC_STYLES),
            bold_italic=_pick(_BOLD_ITALIC_STYLES),
        )


__all__ = ["FONT_DIRS_ENV", "SKIP_FONTCONFIG_ENV", "FontFiles", "FontLocator", "env_search_paths"]
