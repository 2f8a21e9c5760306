"""Rich-aware presenters for CLI output."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import TYPE_CHECKING

import typer

from glyphsmith.render.summary import RunSummary, codepoint_report

from .state import CLIState


if TYPE_CHECKING:  # pragma: no cover - typing only
    from rich.console import Console


def _get_console(state: CLIState, *, stderr: bool = False) -> Console | None:
    """Return the Rich console when writing to a terminal, else ``None``."""
    console = state.err_console if stderr else state.console
    if getattr(console, "is_terminal", False):
        return console
    return None


def _format_path(path: Path) -> str:
    """Format a path relative to the current working directory for display."""
    resolved = path.resolve()
    try:
        return str(resolved.relative_to(Path.cwd()))
    except ValueError:
        return str(resolved)


def present_run_plan(state: CLIState, file_count: int, directories: Iterable[Path]) -> None:
    """Show how many files will be written and where."""
    locations = sorted(_format_path(directory) for directory in directories)
    console = _get_console(state)
    if console is not None:
        from rich import box
        from rich.table import Table

        table = Table(
            title=f"File count: {file_count}",
            box=box.SQUARE,
            header_style="bold cyan",
        )
        table.add_column("Output directory", style="magenta")
        for location in locations:
            table.add_row(location)
        console.print(table)
        return

    typer.echo(f"File count: {file_count}")
    typer.echo("Output directories:")
    for location in locations:
        typer.echo(f"\t{location}")


def present_run_summary(state: CLIState, summary: RunSummary) -> None:
    """Print elapsed time, written files and skipped code points."""
    console = _get_console(state)
    if console is not None:
        from rich import box
        from rich.table import Table

        table = Table(title="Run summary", box=box.SQUARE, header_style="bold cyan")
        table.add_column("Item", style="cyan")
        table.add_column("Value")
        table.add_row("Run time (millis)", str(summary.elapsed_ms))
        table.add_row("Files written", str(summary.files))
        for label, codepoints in (
            ("No font support", summary.no_font),
            ("No image created", summary.no_image),
        ):
            report = codepoint_report(label, codepoints)
            if report:
                table.add_row(label, report.split(": ", 1)[1])
        console.print(table)
        return

    for line in summary.lines():
        typer.echo(line)
    typer.echo(f"Files written: {summary.files}")


def present_font_families(state: CLIState, families: Sequence[str]) -> None:
    """List discovered families, numbered."""
    if not families:
        typer.echo("No fonts found.")
        return

    console = _get_console(state)
    if console is not None:
        from rich import box
        from rich.table import Table

        table = Table(title="Available fonts", box=box.SQUARE, header_style="bold cyan")
        table.add_column("#", justify="right", style="cyan")
        table.add_column("Family")
        for index, family in enumerate(families, start=1):
            table.add_row(str(index), family)
        console.print(table)
        return

    for index, family in enumerate(families, start=1):
        typer.echo(f"{index}. {family}")


__all__ = ["present_font_families", "present_run_plan", "present_run_summary"]
