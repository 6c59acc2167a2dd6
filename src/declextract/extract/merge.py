"""
extract.merge - Deterministic sort and dedup of collected declarations.

Every bucket is sorted on an explicit total order so the output does not
depend on which file or worker produced a declaration first.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Optional, Sequence, Tuple

from ..syzlang.ast import Call, Include, Resource, Struct, TypeDef
from ..syzlang.formatter import format_node
from .collector import Buckets
from .rename import SENDMSG


@dataclass(frozen=True)
class MergedDeclarations:
    syscalls: Tuple[Call, ...]
    netlinks: Tuple[Struct, ...]
    includes: Tuple[Include, ...]
    type_defs: Tuple[TypeDef, ...]
    resources: Tuple[Resource, ...]


def sendmsg_policy(call: Call) -> Optional[str]:
    """Policy ident of ``sendmsg(_, msg ptr[_, msghdr_x[_, Policy]], _)``, if any."""
    if call.call_name != SENDMSG or len(call.args) < 2:
        return None
    ptr_args = call.args[1].type.args
    if len(ptr_args) != 2:
        return None
    msg_args = ptr_args[1].args
    if len(msg_args) < 2 or not msg_args[1].ident:
        return None
    return msg_args[1].ident


def _syscall_key(call: Call) -> Tuple[str, Tuple[str, ...], str]:
    if call.call_name == SENDMSG:
        detail: Tuple[str, ...] = (sendmsg_policy(call) or "",)
    else:
        # Same call extracted from different files may name its
        # parameters differently; this fixes which one dedup keeps.
        detail = tuple(arg.name for arg in call.args)
    return call.name, detail, format_node(call)


def merge_syscalls(syscalls: Sequence[Call]) -> List[Call]:
    ordered = sorted(syscalls, key=_syscall_key)

    # One sendmsg command may be issued for several policies; number them
    # so the dedup below keeps each one.
    numbered: List[Call] = []
    sendmsg_no = 0
    for call in ordered:
        if call.call_name == SENDMSG:
            call = replace(call, name=f"{call.name}{sendmsg_no}")
            sendmsg_no += 1
        numbered.append(call)

    # Names only: variants that differ just in parameter names share the
    # same syzkaller type.
    # TODO: compare argument types once extraction reports them reliably.
    merged: List[Call] = []
    for call in numbered:
        if merged and merged[-1].name == call.name:
            continue
        merged.append(call)
    return merged


def merge_includes(includes: Sequence[Include]) -> List[Include]:
    merged: List[Include] = []
    for inc in sorted(includes, key=lambda i: i.file):
        if merged and merged[-1].file == inc.file:
            continue
        merged.append(inc)
    return merged


def _by_name(nodes):
    return sorted(nodes, key=lambda n: (n.name, format_node(n)))


def merge(buckets: Buckets) -> MergedDeclarations:
    """Sort and dedup every bucket."""
    return MergedDeclarations(
        syscalls=tuple(merge_syscalls(buckets.syscalls)),
        netlinks=tuple(_by_name(buckets.netlinks)),
        includes=tuple(merge_includes(buckets.includes)),
        type_defs=tuple(_by_name(buckets.type_defs)),
        resources=tuple(_by_name(buckets.resources)),
    )
