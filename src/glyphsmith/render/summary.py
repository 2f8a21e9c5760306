"""Run summaries printed once every task has finished."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


def _runs(codepoints: Iterable[int]) -> list[tuple[int, int]]:
    runs: list[tuple[int, int]] = []
    for codepoint in sorted(set(codepoints)):
        if runs and codepoint == runs[-1][1] + 1:
            runs[-1] = (runs[-1][0], codepoint)
        else:
            runs.append((codepoint, codepoint))
    return runs


def codepoint_report(description: str, codepoints: Iterable[int]) -> str:
    """Compress code points into runs, e.g. ``"No font support: 1, 3-5"``.

    Returns an empty string when there is nothing to report.
    """
    runs = _runs(codepoints)
    if not runs:
        return ""
    parts = [str(start) if start == end else f"{start}-{end}" for start, end in runs]
    return f"{description}: {', '.join(parts)}"


@dataclass(frozen=True, slots=True)
class RunSummary:
    """Outcome of a dispatched run."""

    elapsed_ms: int
    files: int
    no_font: tuple[int, ...] = ()
    no_image: tuple[int, ...] = ()

    def lines(self) -> list[str]:
        lines = [f"Run time (millis): {self.elapsed_ms}"]
        for report in (
            codepoint_report("No font support", self.no_font),
            codepoint_report("No image created", self.no_image),
        ):
            if report:
                lines.append(report)
        return lines

    def format(self) -> str:
        return "\n".join(self.lines())

    def as_payload(self) -> dict[str, object]:
        return {
            "elapsed_ms": self.elapsed_ms,
            "files": self.files,
            "no_font": list(self.no_font),
            "no_image": list(self.no_image),
        }


__all__ = ["RunSummary", "codepoint_report"]
