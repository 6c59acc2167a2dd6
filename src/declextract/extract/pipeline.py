"""
extract.pipeline - Coordinator for a full extraction run.

    catalog -> tables -> dispatcher -> collector/renamer -> merger
            -> netlink union -> output

Each stage hands its result to the next; nothing is shared between
runs and any failure propagates before the output file is touched.
"""

from __future__ import annotations

from contextlib import closing
from typing import Optional

from ..core import log
from ..core.config import Config, load_config
from ..core.errors import FatalConfigError
from ..core.models import ExtractionSummary
from .catalog import load_compile_commands
from .collector import collect
from .dispatcher import dispatch
from .merge import merge
from .netlink import synthesize_netlink_union
from .output import assemble, write_output
from .tables import read_syscall_names


def run_extraction_pipeline(cfg: Optional[Config] = None) -> ExtractionSummary:
    """Run every stage and write ``cfg.output``."""
    cfg = cfg or load_config()
    if cfg.kernel_dir is None:
        raise FatalConfigError("path to kernel directory is required")
    log.configure(debug=cfg.debug)

    units = load_compile_commands(cfg.compile_commands)
    log.stage(f"Loaded {len(units)} compilation units")

    # Built before any worker starts; read-only afterwards.
    rename_table = read_syscall_names(cfg.arch_dir)
    log.debug_print("pipeline", f"rename table: {len(rename_table)} entry points")

    log.stage(f"Running {cfg.binary} with {cfg.workers} workers")
    # closing() stops the workers as soon as collect() fails.
    with closing(
        dispatch(units, cfg.binary, str(cfg.compile_commands), workers=cfg.workers)
    ) as results:
        buckets = collect(results, rename_table)

    log.stage("Merging declarations")
    merged = merge(buckets)
    union = synthesize_netlink_union(merged.syscalls, merged.netlinks)
    log.debug_print(
        "pipeline",
        f"{len(union.unused)} unused netlink policies, {union.dropped} dangling sendmsg calls",
    )

    write_output(assemble(merged, union), cfg.output)
    log.detail(f"Wrote {cfg.output}")

    return ExtractionSummary(
        units=len(units),
        analysed_files=buckets.analysed_files,
        syscalls=len(union.syscalls),
        dropped_syscalls=buckets.dropped_syscalls + union.dropped,
        netlink_structs=len(merged.netlinks),
        unused_policies=len(union.unused),
        includes=len(merged.includes),
        type_defs=len(merged.type_defs),
        resources=len(merged.resources),
        output=str(cfg.output),
    )
