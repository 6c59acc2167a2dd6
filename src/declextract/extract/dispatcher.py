"""
extract.dispatcher - Parallel invocation of the analysis binary.

A fixed pool of worker threads pulls source files from a work queue and
pushes one ``ExtractionResult`` per file onto a result queue sized to
the unit count, so workers never block on the consumer.
"""

from __future__ import annotations

import os
import queue
import signal
import subprocess
import threading
from typing import Iterator, List, Optional, Sequence

from ..core.log import debug_print
from ..core.models import CompileCommand, ExtractionResult

SOURCE_SUFFIX = ".c"


def _exit_description(returncode: int) -> str:
    if returncode < 0:
        try:
            return f"signal: {signal.Signals(-returncode).name}"
        except ValueError:
            return f"signal: {-returncode}"
    return f"exit status {returncode}"


def _decode(data: bytes) -> str:
    # The tool echoes kernel source text, which is not always UTF-8.
    return data.decode("utf-8", errors="replace")


def run_extraction(file: str, binary: str, database: str) -> ExtractionResult:
    """Run ``<binary> -p <database> <file>`` and capture its output."""
    if not file.endswith(SOURCE_SUFFIX):
        return ExtractionResult(file=file)
    try:
        proc = subprocess.run(
            [binary, "-p", database, file],
            capture_output=True,
        )
    except OSError as e:
        return ExtractionResult(file=file, stderr=str(e))
    out = _decode(proc.stdout)
    err = _decode(proc.stderr)
    stderr = ""
    if proc.returncode != 0:
        stderr = err if err else f"{file}: {_exit_description(proc.returncode)}"
    return ExtractionResult(file=file, stdout=out, stderr=stderr)


def _worker(
    files: "queue.Queue[Optional[str]]",
    results: "queue.Queue[ExtractionResult]",
    binary: str,
    database: str,
) -> None:
    while True:
        file = files.get()
        if file is None:
            return
        try:
            res = run_extraction(file, binary, database)
        except Exception as e:
            res = ExtractionResult(file=file, stderr=f"{file}: {type(e).__name__}: {e}")
        results.put(res)


def _stop(files: "queue.Queue[Optional[str]]", n_workers: int) -> None:
    """Drop pending work so every worker reaches a stop sentinel."""
    while True:
        try:
            files.get_nowait()
        except queue.Empty:
            break
    for _ in range(n_workers):
        files.put(None)


def dispatch(
    units: Sequence[CompileCommand],
    binary: str,
    database: str,
    *,
    workers: Optional[int] = None,
) -> Iterator[ExtractionResult]:
    """
    Analyse every unit in parallel and yield exactly one result per unit.

    Results come back in completion order; later stages sort, so the
    order does not matter.  Closing the generator early discards the
    files not yet started and waits for the running invocations.
    """
    n_workers = workers or os.cpu_count() or 1
    files: "queue.Queue[Optional[str]]" = queue.Queue(maxsize=len(units) + n_workers)
    results: "queue.Queue[ExtractionResult]" = queue.Queue(maxsize=max(len(units), 1))
    for unit in units:
        files.put(unit.file)
    for _ in range(n_workers):
        files.put(None)

    debug_print("dispatcher", f"{len(units)} units, {n_workers} workers")
    threads: List[threading.Thread] = [
        threading.Thread(
            target=_worker,
            args=(files, results, binary, database),
            name=f"declextract-worker-{i}",
            daemon=True,
        )
        for i in range(n_workers)
    ]
    for t in threads:
        t.start()

    try:
        for _ in range(len(units)):
            yield results.get()
    finally:
        _stop(files, n_workers)
        for t in threads:
            t.join()
