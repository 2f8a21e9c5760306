"""Implementation of the `glyphsmith generate` command."""

from __future__ import annotations

from pathlib import Path
import time
from typing import Annotated

import typer

from glyphsmith.core.config import DEFAULT_PLAN_PATH, load_plan
from glyphsmith.core.exceptions import PlanError
from glyphsmith.core.logging import PipelineLogger
from glyphsmith.fonts.typeface import TypefaceRegistry
from glyphsmith.render.dispatch import Dispatcher
from glyphsmith.render.jobs import BuildReport, generate_image_files

from .._options import NoFontconfigOption, OutputDirOption, WorkersOption
from ..diagnostics import CliEmitter
from ..presenter import present_run_plan, present_run_summary
from ..state import emit_error, get_cli_state


PLAN_EXIT_CODE = 2


def generate(
    plan_path: Annotated[
        Path,
        typer.Argument(
            metavar="PLAN",
            help="YAML generation plan.",
            dir_okay=False,
        ),
    ] = DEFAULT_PLAN_PATH,
    output: OutputDirOption = None,
    workers: WorkersOption = None,
    no_fontconfig: NoFontconfigOption = False,
) -> None:
    """Export every selection of a generation plan."""
    state = get_cli_state()
    emitter = CliEmitter(state)
    logger = PipelineLogger(verbose=state.verbosity >= 1)

    logger.info("Evaluating work requirements...")
    start_time = time.perf_counter()
    try:
        plan = load_plan(plan_path)
        registry = TypefaceRegistry(plan.font_locator(use_fontconfig=not no_fontconfig))
        requests = plan.build_requests(registry)
    except PlanError as exc:
        emit_error(f"Plan creation failed [{plan_path.resolve()}]: {exc}", exception=exc)
        raise typer.Exit(code=PLAN_EXIT_CODE) from exc

    base_directory = output or plan.target_directory
    report = BuildReport()
    total = sum(request.codepoint_count() for request in requests)
    with logger.progress("Centering glyphs", total=total) as advance:
        for request in requests:
            generate_image_files(
                base_directory, request, report=report, emitter=emitter, progress=advance
            )

    present_run_plan(state, report.expected, report.directories)
    logger.info("Generating files...")
    with Dispatcher(workers, emitter=emitter) as dispatcher:
        dispatcher.run(report, start_time=start_time)
        summary = dispatcher.wait()
    present_run_summary(state, summary)


__all__ = ["generate"]
