"""Parallel export of built render jobs.

`Dispatcher` runs in two phases. The whole `BuildReport` is enumerated first
and the `WorkCounter` is set to the total task count; only then are the jobs
queued for the worker threads. Every finished task decrements the counter and
the task that brings it to zero publishes the `RunSummary` and resolves the
completion future that `Dispatcher.wait` blocks on.
"""

from __future__ import annotations

from collections.abc import Callable
from concurrent.futures import Future
import logging
import os
import queue
import threading
import time
from typing import cast

from glyphsmith.core.diagnostics import DiagnosticEmitter, LoggingEmitter
from glyphsmith.core.exceptions import DispatchRejectedError
from glyphsmith.render.jobs import BuildReport, GlyphJob, RenderTask
from glyphsmith.render.summary import RunSummary


logger = logging.getLogger(__name__)

_STOP = object()


def default_workers(requested: int | None = None, *, cpu_count: int | None = None) -> int:
    """Clamp ``requested`` to ``[cpu, 4 * cpu]``; default to the CPU count."""
    cpu = cpu_count or os.cpu_count() or 1
    if requested is None:
        return cpu
    return max(cpu, min(requested, 4 * cpu))


class WorkCounter:
    """Outstanding task count shared by the worker threads."""

    def __init__(self, value: int = 0) -> None:
        self._value = value
        self._lock = threading.Lock()

    @property
    def value(self) -> int:
        with self._lock:
            return self._value

    def initialize(self, total: int) -> None:
        if total < 0:
            raise ValueError(f"Task count must not be negative, got {total}")
        with self._lock:
            self._value = total

    def decrement(self) -> int:
        """Decrement and return the new value; exactly one caller sees zero."""
        with self._lock:
            self._value -= 1
            return self._value


class Dispatcher:
    """Fixed pool of daemon threads draining an unbounded job queue."""

    def __init__(
        self,
        workers: int | None = None,
        *,
        emitter: DiagnosticEmitter | None = None,
        on_complete: Callable[[RunSummary], None] | None = None,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self.workers = default_workers(workers)
        self.counter = WorkCounter()
        self._emitter = emitter or LoggingEmitter()
        self._on_complete = on_complete
        self._clock = clock
        self._queue: queue.SimpleQueue[object] = queue.SimpleQueue()
        self._threads: list[threading.Thread] = []
        self._state_lock = threading.Lock()
        self._closed = False
        self._completion: Future[RunSummary] | None = None
        self._start = 0.0
        self._written = 0
        self._no_font: tuple[int, ...] = ()
        self._no_image: tuple[int, ...] = ()

    def __enter__(self) -> Dispatcher:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()

    @property
    def closed(self) -> bool:
        return self._closed

    def _ensure_workers(self) -> None:
        with self._state_lock:
            if self._threads:
                return
            for index in range(self.workers):
                thread = threading.Thread(
                    target=self._work, name=f"glyphsmith-worker-{index}", daemon=True
                )
                thread.start()
                self._threads.append(thread)
        logger.debug("Started %d worker thread(s)", self.workers)

    def _work(self) -> None:
        while True:
            item = self._queue.get()
            if item is _STOP:
                return
            job = cast(GlyphJob, item)
            job.run(emitter=self._emitter, on_task_done=self._task_done)

    def _task_done(self, task: RenderTask, written: bool) -> None:
        if written:
            with self._state_lock:
                self._written += 1
        if self.counter.decrement() == 0:
            self._complete()

    def _complete(self) -> None:
        completion = self._completion
        if completion is None:
            raise RuntimeError("Dispatcher completed without an active run.")
        elapsed_ms = int(round((self._clock() - self._start) * 1000))
        with self._state_lock:
            files = self._written
        summary = RunSummary(
            elapsed_ms=elapsed_ms,
            files=files,
            no_font=self._no_font,
            no_image=self._no_image,
        )
        # Resolve the future even when a completion hook fails.
        try:
            self._emitter.event("run_complete", summary.as_payload())
            if self._on_complete is not None:
                self._on_complete(summary)
        except Exception as exc:
            logger.debug("Completion hook failed: %s", exc)
            completion.set_exception(exc)
        else:
            completion.set_result(summary)

    def submit(self, job: GlyphJob) -> None:
        """Queue ``job`` for the workers; a closed pool refuses it."""
        if self._closed:
            raise DispatchRejectedError(
                f"Dispatcher is shut down; job for U+{job.codepoint:04X} rejected."
            )
        self._queue.put(job)

    def run(self, report: BuildReport, *, start_time: float | None = None) -> Future[RunSummary]:
        """Dispatch every job of ``report`` and return the completion future."""
        if self._closed:
            raise DispatchRejectedError("Dispatcher is shut down.")
        if self._completion is not None and not self._completion.done():
            raise DispatchRejectedError("Dispatcher is already running a batch.")

        jobs = list(report.jobs)
        total = sum(len(job) for job in jobs)
        self._completion = Future()
        self._start = self._clock() if start_time is None else start_time
        self._written = 0
        self._no_font = tuple(report.no_font)
        self._no_image = tuple(report.no_image)
        self.counter.initialize(total)

        if total == 0:
            self._complete()
            return self._completion

        self._ensure_workers()
        logger.debug("Dispatching %d job(s), %d task(s)", len(jobs), total)
        for job in jobs:
            self.submit(job)
        return self._completion

    def wait(self) -> RunSummary:
        """Block until the current run has drained.

        A failing `on_complete` hook or emitter is re-raised here.
        """
        if self._completion is None:
            raise RuntimeError("Dispatcher.wait() called before run().")
        return self._completion.result()

    def shutdown(self, *, wait: bool = False) -> None:
        """Refuse new work and let the workers exit once the queue drains."""
        with self._state_lock:
            if self._closed:
                return
            self._closed = True
            threads = list(self._threads)
        for _ in threads:
            self._queue.put(_STOP)
        if wait:
            for thread in threads:
                thread.join()


__all__ = ["Dispatcher", "WorkCounter", "default_workers"]
