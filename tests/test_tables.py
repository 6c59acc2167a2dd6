import os

import pytest

from declextract.core.errors import TableIOError
from declextract.extract import tables
from declextract.extract.tables import parse_table_line, read_syscall_names
from tests.helpers import write_tbl

X86_64 = """\
# 64-bit system call numbers and entry vectors
#
# <number> <abi> <name> <entry point>
0	common	read			sys_read
1	common	write			sys_write
105	common	setuid			sys_setuid
169	common	reboot			sys_reboot
180	common	nfsservctl		-
512	x32	rt_sigaction		compat_sys_rt_sigaction
"""

X86_32 = """\
0	i386	restart_syscall		sys_restart_syscall
3	i386	read			sys_read
23	i386	setuid			sys_setuid16
17	i386	break
222	i386	unused222		sys_unused
31	i386	stty			sys_ni_syscall
101	i386	ioperm			sys_ia32_ioperm
"""

ARM = """\
0	common	restart_syscall		sys_restart_syscall
3	common	read			sys_read
213	common	setuid32		sys_setuid
"""


def test_parse_table_line():
    assert parse_table_line("0\tcommon\tread\tsys_read") == ("read", "read")
    assert parse_table_line("23 i386 setuid sys_setuid16 __ia32_sys_setuid16") == ("setuid16", "setuid")
    assert parse_table_line("# 0 common read sys_read") is None
    assert parse_table_line("17 i386 break") is None
    assert parse_table_line("222 i386 unused222 sys_foo") is None
    assert parse_table_line("180 common nfsservctl -") is None
    assert parse_table_line("512 x32 rt_sigaction compat_sys_rt_sigaction") is None
    assert parse_table_line("101 i386 ioperm sys_ia32_ioperm") is None
    assert parse_table_line("31 i386 stty sys_ni_syscall") is None
    assert parse_table_line("") is None


def test_read_syscall_names(tmp_path):
    write_tbl(tmp_path, "x86/entry/syscalls/syscall_64.tbl", X86_64)
    write_tbl(tmp_path, "x86/entry/syscalls/syscall_32.tbl", X86_32)
    write_tbl(tmp_path, "arm/tools/syscall.tbl", ARM)
    # Not a table.
    write_tbl(tmp_path, "arm/tools/Makefile", "0 common bogus sys_bogus\n")
    # Unsupported architecture.
    write_tbl(tmp_path, "sparc/kernel/syscalls/syscall.tbl", "0 common sparc_only sys_sparc_only\n")

    table = read_syscall_names(tmp_path / "arch")

    assert table == {
        "read": ["read"],
        "write": ["write"],
        "setuid": ["setuid", "setuid32"],
        "setuid16": ["setuid"],
        "reboot": ["reboot"],
        "restart_syscall": ["restart_syscall"],
    }


def test_symlinked_tables_are_skipped(tmp_path):
    outside = tmp_path / "outside.tbl"
    outside.write_text("0 common linked sys_linked\n")
    write_tbl(tmp_path, "arm64/tools/syscall.tbl", "0 common read sys_read\n")
    os.symlink(outside, tmp_path / "arch" / "arm64" / "tools" / "linked.tbl")

    table = read_syscall_names(tmp_path / "arch")

    assert table == {"read": ["read"]}


def test_missing_arch_dir_is_empty(tmp_path):
    assert read_syscall_names(tmp_path / "arch") == {}


def test_unstattable_table_is_fatal(tmp_path, monkeypatch):
    write_tbl(tmp_path, "riscv/kernel/syscall.tbl", "0 common read sys_read\n")

    def boom(path):
        raise PermissionError(13, "Permission denied", path)

    monkeypatch.setattr(tables.os, "lstat", boom)
    with pytest.raises(TableIOError) as exc:
        read_syscall_names(tmp_path / "arch")
    assert exc.value.path.endswith("syscall.tbl")
