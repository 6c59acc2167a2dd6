"""
extract.tables - Per-architecture syscall table reader.

Builds the rename table: kernel entry point -> sorted syscall names that
alias it on any supported architecture.  ``SYSCALL_DEFINE1(setuid16, ...)``
for instance is exposed as ``setuid`` in the ``.tbl`` files.
"""

from __future__ import annotations

import os
import stat
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from ..core.errors import TableIOError

RenameTable = Dict[str, List[str]]

# syzkaller Linux targets -> kernel header arch directory
LINUX_ARCHES: Dict[str, str] = {
    "amd64": "x86",
    "386": "x86",
    "arm64": "arm64",
    "arm": "arm",
    "mips64le": "mips",
    "ppc64le": "powerpc",
    "s390x": "s390",
    "riscv64": "riscv",
}

TABLE_SUFFIX = ".tbl"
_ENTRY_PREFIX = "sys_"


def parse_table_line(line: str) -> Optional[Tuple[str, str]]:
    """Return ``(entry_point, name)`` for a usable table line, else None."""
    fields = line.split()
    if len(fields) < 4 or fields[0].startswith("#"):
        return None
    name, entry = fields[2], fields[3]
    # ia32 entry points conflict between the 32 and 64 bit tables.
    if (
        name.startswith("unused")
        or entry == "-"
        or entry.startswith("compat")
        or entry.startswith("sys_ia32")
        or entry == "sys_ni_syscall"
    ):
        return None
    if entry.startswith(_ENTRY_PREFIX):
        entry = entry[len(_ENTRY_PREFIX):]
    return entry, name


def _read_table(path: str, rename: RenameTable) -> None:
    try:
        st = os.lstat(path)
    except OSError as e:
        raise TableIOError(path, e.strerror or str(e)) from e
    # Some tables are symlinked from outside the arch directory.
    if stat.S_ISLNK(st.st_mode):
        return
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            for line in f:
                parsed = parse_table_line(line)
                if parsed is None:
                    continue
                entry, name = parsed
                rename.setdefault(entry, []).append(name)
    except OSError as e:
        raise TableIOError(path, e.strerror or str(e)) from e


def _walk_errors(e: OSError) -> None:
    # A missing arch directory just contributes nothing.
    if isinstance(e, FileNotFoundError):
        return
    raise TableIOError(e.filename or "", e.strerror or str(e)) from e


def read_syscall_names(arch_dir: Union[str, Path]) -> RenameTable:
    """Scan every supported architecture under *arch_dir* (``<kernel>/arch``)."""
    rename: RenameTable = {}
    for header_arch in sorted(set(LINUX_ARCHES.values())):
        root = os.path.join(str(arch_dir), header_arch)
        for dirpath, dirnames, filenames in os.walk(root, onerror=_walk_errors):
            dirnames.sort()
            for fname in sorted(filenames):
                if fname.endswith(TABLE_SUFFIX):
                    _read_table(os.path.join(dirpath, fname), rename)

    for entry, names in rename.items():
        rename[entry] = sorted(set(names))
    return rename
