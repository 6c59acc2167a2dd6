"""
extract.output - Assemble and write the final description.
"""

from __future__ import annotations

from pathlib import Path
from typing import Union

from ..core.errors import OutputWriteError
from ..syzlang import format_description, parse
from ..syzlang.ast import Description
from .merge import MergedDeclarations
from .netlink import NetlinkUnion

GENERATED_NOTICE = "# Code generated by syz-declextract. DO NOT EDIT.\n"
COMMON_KERNEL_HEADERS = "include <include/vdso/bits.h>\ninclude <include/linux/types.h>"
# Keeps __NR_mmap2 referenced so the description compiles on every arch.
MMAP2_COMPAT = "_ = __NR_mmap2\n"


def assemble(merged: MergedDeclarations, union: NetlinkUnion) -> Description:
    """Concatenate every section in the fixed output order."""
    desc = parse(GENERATED_NOTICE + COMMON_KERNEL_HEADERS, "<header>")
    desc.nodes.extend(merged.includes)
    desc.nodes.extend(merged.resources)
    desc.nodes.extend(merged.type_defs)
    desc.nodes.extend(union.syscalls)
    desc.nodes.extend(parse(MMAP2_COMPAT, "<compat>").nodes)
    desc.nodes.extend(merged.netlinks)
    desc.nodes.extend(union.nodes)
    return desc


def render(desc: Description) -> str:
    """Format, re-parse and format again.

    The first pass introduces blank lines the AST did not carry; only
    after re-parsing them is the text a fixed point.
    """
    return format_description(parse(format_description(desc), "<generated>"))


def write_output(desc: Description, path: Union[str, Path]) -> str:
    text = render(desc)
    try:
        Path(path).write_text(text, encoding="utf-8")
    except OSError as e:
        raise OutputWriteError(f"cannot write {path}: {e}") from e
    return text
