"""Turn generation requests into per-color render tasks.

The build phase runs on the calling thread. For every code point it picks the
first typeface able to display it, measures the glyph once, and groups one
`RenderTask` per color into a `GlyphJob`. Jobs accumulate in a `BuildReport`
that the dispatcher later drains.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass, field
import logging
from pathlib import Path

from glyphsmith.core.colors import NamedColor
from glyphsmith.core.diagnostics import DiagnosticEmitter, NullEmitter
from glyphsmith.core.exceptions import PlanError, exception_hint, exception_messages
from glyphsmith.fonts.typeface import FontStyle, RenderableFace, TypefaceHandle
from glyphsmith.fonts.utils import unicode_label
from glyphsmith.render.centering import (
    UNRENDERABLE,
    Centering,
    CenteringResult,
    render_centered,
    solve_centering,
)
from glyphsmith.render.export import export_canvas


logger = logging.getLogger(__name__)

Solver = Callable[[RenderableFace, str, int, int], Centering]

PNG_SUFFIX = ".png"


@dataclass(frozen=True, slots=True)
class GenerationRequest:
    """Immutable parameters of one selection."""

    name: str
    typefaces: tuple[TypefaceHandle, ...]
    size: int
    style: FontStyle
    width: int
    height: int
    colors: tuple[NamedColor, ...]
    ranges: tuple[tuple[int, int], ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "typefaces", tuple(self.typefaces))
        object.__setattr__(self, "colors", tuple(self.colors))
        object.__setattr__(
            self, "ranges", tuple((int(start), int(end)) for start, end in self.ranges)
        )
        if not self.name:
            raise PlanError("Selection name must not be empty.")
        if self.size <= 0:
            raise PlanError(f"Font size must be positive, got {self.size}.")
        if self.width <= 0 or self.height <= 0:
            raise PlanError(f"Canvas must be at least 1x1, got {self.width}x{self.height}.")
        if not self.typefaces:
            raise PlanError(f"Selection '{self.name}' lists no typefaces.")
        if not self.colors:
            raise PlanError(f"Selection '{self.name}' lists no colors.")
        for start, end in self.ranges:
            if start < 0 or end < start:
                raise PlanError(f"Invalid code point range [{start}, {end}).")
        if not any(end > start for start, end in self.ranges):
            raise PlanError(f"Selection '{self.name}' has no non-empty range.")

    @property
    def min_codepoint(self) -> int:
        return min(start for start, _ in self.ranges)

    @property
    def max_codepoint(self) -> int:
        return max(end for _, end in self.ranges)

    def codepoints(self) -> Iterator[int]:
        """Yield every code point once, in range order.

        Overlapping ranges are allowed; a code point already covered by an
        earlier range is skipped.
        """
        seen: set[int] = set()
        for start, end in self.ranges:
            for codepoint in range(start, end):
                if codepoint in seen:
                    continue
                seen.add(codepoint)
                yield codepoint

    def codepoint_count(self) -> int:
        count = 0
        reach = -1
        for start, end in sorted(self.ranges):
            start = max(start, reach)
            if end > start:
                count += end - start
                reach = end
        return count


@dataclass(frozen=True, slots=True)
class RenderTask:
    """One glyph in one color, bound to its output path."""

    codepoint: int
    face: RenderableFace
    centering: CenteringResult
    color: NamedColor
    path: Path
    width: int
    height: int

    @property
    def text(self) -> str:
        return chr(self.codepoint)

    def execute(self, emitter: DiagnosticEmitter | None = None) -> bool:
        canvas = render_centered(
            self.face, self.text, self.centering, self.color, self.width, self.height
        )
        return export_canvas(canvas, self.path, emitter=emitter)


def describe_failure(task: RenderTask, exc: BaseException, *, debug: bool = False) -> str:
    """Summarise a task failure: the root cause, or the whole chain in debug mode."""
    summary = f"Rendering {task.path.name} failed"
    if debug:
        chain = exception_messages(exc)
        if chain:
            detail_lines = "\n".join(f"- {line}" for line in chain)
            return f"{summary}:\n{detail_lines}"
        return f"{summary}."
    hint = exception_hint(exc)
    return f"{summary}: {hint}" if hint else f"{summary}."


@dataclass(frozen=True, slots=True)
class GlyphJob:
    """All color tasks of one glyph, executed as a single unit of work."""

    codepoint: int
    tasks: tuple[RenderTask, ...]

    def __len__(self) -> int:
        return len(self.tasks)

    def run(
        self,
        *,
        emitter: DiagnosticEmitter | None = None,
        on_task_done: Callable[[RenderTask, bool], None] | None = None,
    ) -> int:
        """Render and export every task; return how many files were written.

        A task that raises is reported through ``emitter`` and the remaining
        colors still run. ``on_task_done`` is called exactly once per task.
        """
        emitter = emitter or NullEmitter()
        written = 0
        for task in self.tasks:
            ok = False
            try:
                ok = task.execute(emitter)
                written += int(ok)
            except Exception as exc:
                emitter.error(describe_failure(task, exc, debug=emitter.debug_enabled), exc)
            finally:
                if on_task_done is not None:
                    on_task_done(task, ok)
        return written


@dataclass(slots=True)
class BuildReport:
    """Jobs and bookkeeping gathered while building one or more requests."""

    jobs: list[GlyphJob] = field(default_factory=list)
    expected: int = 0
    no_font: list[int] = field(default_factory=list)
    no_image: list[int] = field(default_factory=list)
    directories: set[Path] = field(default_factory=set)

    def add_job(self, job: GlyphJob) -> None:
        self.jobs.append(job)
        self.expected += len(job)

    def __iter__(self) -> Iterator[GlyphJob]:
        return iter(self.jobs)


def output_directory(base_directory: Path, request: GenerationRequest, color: NamedColor) -> Path:
    """Return ``{base}/{selection}/{color}/{U+min}_{U+max}``."""
    span = f"{unicode_label(request.min_codepoint)}_{unicode_label(request.max_codepoint)}"
    return Path(base_directory) / request.name / color.name / span


def output_filename(
    directory: Path, face_name: str, codepoint: int, suffix: str = PNG_SUFFIX
) -> Path:
    """Return ``{directory}/{face}_{U+XXXX}{suffix}``."""
    return Path(directory) / f"{face_name}_{unicode_label(codepoint)}{suffix}"


def select_typeface(
    typefaces: Sequence[TypefaceHandle], codepoint: int
) -> TypefaceHandle | None:
    """Return the first typeface able to display ``codepoint``."""
    for typeface in typefaces:
        if typeface.can_display(codepoint):
            return typeface
    return None


def _prepare_directories(
    base_directory: Path, request: GenerationRequest
) -> dict[NamedColor, Path]:
    directories: dict[NamedColor, Path] = {}
    for color in request.colors:
        directory = output_directory(base_directory, request, color)
        directory.mkdir(parents=True, exist_ok=True)
        directories[color] = directory
    return directories


def generate_image_files(
    base_directory: Path,
    request: GenerationRequest,
    *,
    report: BuildReport | None = None,
    solver: Solver = solve_centering,
    emitter: DiagnosticEmitter | None = None,
    progress: Callable[[int], None] | None = None,
) -> set[Path]:
    """Build the render jobs of ``request`` and return its output directories.

    Jobs, skipped code points and the expected task count are recorded in
    ``report``; pass the same report for every request of a plan and hand it
    to the dispatcher afterwards. Nothing is rendered to disk here.
    """
    report = report if report is not None else BuildReport()
    emitter = emitter or NullEmitter()
    directories = _prepare_directories(Path(base_directory), request)

    for codepoint in request.codepoints():
        try:
            job = _build_job(codepoint, request, directories, report, solver, emitter)
            if job is not None:
                report.add_job(job)
        finally:
            if progress is not None:
                progress(1)

    created = set(directories.values())
    report.directories.update(created)
    logger.debug(
        "Selection %s: %d job(s), %d task(s) expected so far",
        request.name,
        len(report.jobs),
        report.expected,
    )
    return created


def _build_job(
    codepoint: int,
    request: GenerationRequest,
    directories: dict[NamedColor, Path],
    report: BuildReport,
    solver: Solver,
    emitter: DiagnosticEmitter,
) -> GlyphJob | None:
    typeface = select_typeface(request.typefaces, codepoint)
    if typeface is None:
        report.no_font.append(codepoint)
        emitter.event("glyph_unavailable", {"codepoint": codepoint})
        return None

    face = typeface.derive(request.size, request.style)
    centering = solver(face, chr(codepoint), request.width, request.height)
    if centering is UNRENDERABLE:
        report.no_image.append(codepoint)
        emitter.event("glyph_oversized", {"codepoint": codepoint, "typeface": face.name})
        return None

    tasks = tuple(
        RenderTask(
            codepoint=codepoint,
            face=face,
            centering=centering,
            color=color,
            path=output_filename(directories[color], face.name, codepoint),
            width=request.width,
            height=request.height,
        )
        for color in request.colors
    )
    return GlyphJob(codepoint=codepoint, tasks=tasks)


def iter_tasks(jobs: Iterable[GlyphJob]) -> Iterator[RenderTask]:
    for job in jobs:
        yield from job.tasks


__all__ = [
    "PNG_SUFFIX",
    "BuildReport",
    "GenerationRequest",
    "GlyphJob",
    "RenderTask",
    "Solver",
    "describe_failure",
    "generate_image_files",
    "iter_tasks",
    "output_directory",
    "output_filename",
    "select_typeface",
]
