"""
extract.rename - Architecture-aware syscall renaming.

Extracted calls are named after their kernel entry point; the fuzzer
needs the names the architectures actually expose.
"""

from __future__ import annotations

from dataclasses import replace
from typing import FrozenSet, List, Mapping, Sequence

from ..syzlang.ast import Call

SENDMSG = "sendmsg"
GET_FAMILY_ID = "syz_genetlink_get_family_id"

# Never renamed: both already carry their final names.
EXEMPT: FrozenSet[str] = frozenset({SENDMSG, GET_FAMILY_ID})

# ``utimesat`` is not defined on every architecture.
PROHIBITED: FrozenSet[str] = frozenset({"reboot", "utimesat"})


def should_rename(call_name: str) -> bool:
    return call_name not in EXEMPT


def is_prohibited(name: str) -> bool:
    return name in PROHIBITED


def rename_syscall(call: Call, table: Mapping[str, Sequence[str]]) -> List[Call]:
    """
    Expand *call* into one ``<name>$auto`` variant per table alias.

    Returns an empty list when no supported architecture exposes the
    entry point.
    """
    if not should_rename(call.call_name):
        return [call]
    names = table.get(call.call_name)
    if not names:
        return []
    # call_name differs from the exposed name so later comparisons never
    # split it on '$'.
    return [
        replace(call, name=f"{name}$auto", call_name=name)
        for name in names
        if not is_prohibited(name)
    ]
