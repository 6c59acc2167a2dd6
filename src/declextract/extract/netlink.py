"""
extract.netlink - Synthesized dispatch union for unreached netlink policies.

A policy that no extracted ``sendmsg`` call references is still reachable
by the fuzzer through ``sendmsg$autorun`` and one ``auto_union`` arm.
"""

from __future__ import annotations

import bisect
from dataclasses import dataclass
from typing import List, Sequence, Set, Tuple

from ..syzlang import parse
from ..syzlang.ast import Call, Node, Struct
from .merge import sendmsg_policy

UNION_TEMPLATE = """
type msghdr_auto[POLICY] msghdr_netlink[netlink_msg_t[autogenerated_netlink, genlmsghdr, POLICY]]
resource autogenerated_netlink[int16]
syz_genetlink_get_family_id$auto(name ptr[in, string], fd sock_nl_generic) autogenerated_netlink
sendmsg$autorun(fd sock_nl_generic, msg ptr[in, auto_union], f flags[send_flags])
auto_union [
{arms}]"""


@dataclass(frozen=True)
class NetlinkUnion:
    syscalls: Tuple[Call, ...]
    used: frozenset
    unused: Tuple[str, ...]
    nodes: Tuple[Node, ...]
    dropped: int = 0


def union_text(policies: Sequence[str]) -> str:
    arms = "".join(f"\tpolicy{i} msghdr_auto[{name}]\n" for i, name in enumerate(policies))
    return UNION_TEMPLATE.format(arms=arms)


def synthesize_netlink_union(
    syscalls: Sequence[Call],
    netlinks: Sequence[Struct],
) -> NetlinkUnion:
    """
    Filter *syscalls* and build the union block.

    *netlinks* must be sorted by name.  A ``sendmsg`` whose policy is not
    among them is dropped; its policy still counts as used.
    """
    names = [s.name for s in netlinks]
    used: Set[str] = set()
    kept: List[Call] = []
    dropped = 0
    for call in syscalls:
        policy = sendmsg_policy(call)
        if policy is not None:
            used.add(policy)
            idx = bisect.bisect_left(names, policy)
            if idx == len(names) or names[idx] != policy:
                dropped += 1
                continue
        kept.append(call)

    unused = tuple(name for name in names if name not in used)
    desc = parse(union_text(unused), "<netlink union>")
    return NetlinkUnion(
        syscalls=tuple(kept),
        used=frozenset(used),
        unused=unused,
        nodes=tuple(desc.nodes),
        dropped=dropped,
    )
