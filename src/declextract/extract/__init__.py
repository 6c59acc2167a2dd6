"""
extract - The declaration extraction pipeline.

Stages, leaf to root: catalog, tables, dispatcher, collector (with the
renamer), merge, netlink union synthesis, output assembly.
"""

from .catalog import load_compile_commands
from .collector import Buckets, classify, collect
from .dispatcher import dispatch, run_extraction
from .merge import MergedDeclarations, merge, merge_syscalls, sendmsg_policy
from .netlink import NetlinkUnion, synthesize_netlink_union
from .output import assemble, render, write_output
from .pipeline import run_extraction_pipeline
from .rename import rename_syscall
from .tables import LINUX_ARCHES, RenameTable, parse_table_line, read_syscall_names

__all__ = [
    "load_compile_commands",
    "Buckets",
    "classify",
    "collect",
    "dispatch",
    "run_extraction",
    "MergedDeclarations",
    "merge",
    "merge_syscalls",
    "sendmsg_policy",
    "NetlinkUnion",
    "synthesize_netlink_union",
    "assemble",
    "render",
    "write_output",
    "run_extraction_pipeline",
    "rename_syscall",
    "LINUX_ARCHES",
    "RenameTable",
    "parse_table_line",
    "read_syscall_names",
]
