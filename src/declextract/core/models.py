"""
core.models - Data models shared by the extraction pipeline.

Compilation units come straight from a ``compile_commands.json``;
extraction results and the run summary are produced by the pipeline.
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field


# ── Compilation database ──────────────────────────────────────────────


class CompileCommand(BaseModel):
    """One translation unit as recorded by the build-capture database."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    arguments: List[str] = Field(default_factory=list)
    directory: str = ""
    file: str
    output: str = ""


# ── Dispatcher output ─────────────────────────────────────────────────


class ExtractionResult(BaseModel):
    """Raw output of one analysis-tool invocation."""

    file: str = ""
    stdout: str = ""
    stderr: str = ""

    @property
    def failed(self) -> bool:
        return self.stderr != ""


# ── Run summary ───────────────────────────────────────────────────────


class ExtractionSummary(BaseModel):
    """Counters reported after a successful run."""

    units: int = 0
    analysed_files: int = 0
    syscalls: int = 0
    dropped_syscalls: int = 0
    netlink_structs: int = 0
    unused_policies: int = 0
    includes: int = 0
    type_defs: int = 0
    resources: int = 0
    output: str = ""

    def rows(self) -> List[tuple[str, str]]:
        return [
            ("Compilation units", str(self.units)),
            ("Analysed files", str(self.analysed_files)),
            ("Syscalls", str(self.syscalls)),
            ("Dropped syscalls", str(self.dropped_syscalls)),
            ("Netlink structs", str(self.netlink_structs)),
            ("Unused policies", str(self.unused_policies)),
            ("Includes", str(self.includes)),
            ("Type definitions", str(self.type_defs)),
            ("Resources", str(self.resources)),
            ("Output", self.output),
        ]
