import pytest

from declextract.core.errors import OutputWriteError
from declextract.extract.collector import Buckets
from declextract.extract.merge import merge
from declextract.extract.netlink import synthesize_netlink_union
from declextract.extract.output import assemble, render, write_output
from declextract.syzlang import Call, Include, Resource, Struct, TypeDef, format_description, parse

TOOL_OUTPUT = """\
include <include/uapi/linux/foo.h>
resource fd_foo[fd]
type foo_t int32
foo$auto(fd fd_foo, b foo_t) fd_foo
sendmsg$nl_foo(fd sock_nl_generic, msg ptr[in, msghdr_nl_foo[fam, foo_policy]], f flags[send_flags])
sendmsg$nl_foo(fd sock_nl_generic, msg ptr[in, msghdr_nl_foo[fam, gone_policy]], f flags[send_flags])
foo_policy [
	a nlattr[FOO_A, int32]
]
bar_policy [
	b nlattr[BAR_B, int32]
]
"""

EXPECTED = """\
# Code generated by syz-declextract. DO NOT EDIT.
include <include/vdso/bits.h>
include <include/linux/types.h>
include <include/uapi/linux/foo.h>
resource fd_foo[fd]
type foo_t int32
foo$auto(fd fd_foo, b foo_t) fd_foo
sendmsg$nl_foo0(fd sock_nl_generic, msg ptr[in, msghdr_nl_foo[fam, foo_policy]], f flags[send_flags])
_ = __NR_mmap2
bar_policy [
	b nlattr[BAR_B, int32]
]

foo_policy [
	a nlattr[FOO_A, int32]
]

type msghdr_auto[POLICY] msghdr_netlink[netlink_msg_t[autogenerated_netlink, genlmsghdr, POLICY]]
resource autogenerated_netlink[int16]
syz_genetlink_get_family_id$auto(name ptr[in, string], fd sock_nl_generic) autogenerated_netlink
sendmsg$autorun(fd sock_nl_generic, msg ptr[in, auto_union], f flags[send_flags])
auto_union [
	policy0 msghdr_auto[bar_policy]
]
"""


def _description():
    nodes = parse(TOOL_OUTPUT).nodes
    buckets = Buckets(
        syscalls=[n for n in nodes if isinstance(n, Call)],
        netlinks=[n for n in nodes if isinstance(n, Struct)],
        includes=[n for n in nodes if isinstance(n, Include)],
        type_defs=[n for n in nodes if isinstance(n, TypeDef)],
        resources=[n for n in nodes if isinstance(n, Resource)],
    )
    merged = merge(buckets)
    return assemble(merged, synthesize_netlink_union(merged.syscalls, merged.netlinks))


def test_assembled_output():
    assert render(_description()) == EXPECTED


def test_rendering_is_a_fixed_point():
    text = render(_description())
    assert format_description(parse(text)) == text


def test_write_output(tmp_path):
    out = tmp_path / "out.txt"
    write_output(_description(), out)
    assert out.read_text(encoding="utf-8") == EXPECTED


def test_write_failure_is_fatal(tmp_path):
    with pytest.raises(OutputWriteError):
        write_output(_description(), tmp_path / "missing" / "out.txt")
