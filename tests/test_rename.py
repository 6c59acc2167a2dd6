from declextract.extract.rename import rename_syscall
from declextract.syzlang import format_node, parse


def _call(text):
    (node,) = parse(text).nodes
    return node


TABLE = {
    "setuid16": ["setuid"],
    "foo": ["bar", "foo"],
    "reboot": ["reboot"],
    "utimes": ["utimes", "utimesat"],
}


def test_rename_expands_every_alias():
    call = _call("foo(a int32, b ptr[in, int8])")
    renamed = rename_syscall(call, TABLE)
    assert [c.name for c in renamed] == ["bar$auto", "foo$auto"]
    assert [c.call_name for c in renamed] == ["bar", "foo"]
    assert all(c.args == call.args for c in renamed)


def test_rename_uses_exposed_name():
    (renamed,) = rename_syscall(_call("setuid16(uid int32)"), TABLE)
    assert format_node(renamed) == "setuid$auto(uid int32)"
    assert renamed.call_name == "setuid"


def test_unknown_entry_point_is_dropped():
    assert rename_syscall(_call("frobnicate(x int32)"), TABLE) == []


def test_prohibited_names_are_skipped():
    assert rename_syscall(_call("reboot(magic int32)"), TABLE) == []
    assert [c.name for c in rename_syscall(_call("utimes(p ptr[in, string])"), TABLE)] == ["utimes$auto"]


def test_exempt_calls_are_kept_unchanged():
    send = _call("sendmsg$nl_foo(fd sock_nl_generic, msg ptr[in, msghdr_foo[fam, foo_policy]], f flags[send_flags])")
    family = _call("syz_genetlink_get_family_id$foo(name ptr[in, string], fd sock_nl_generic) genl_foo_family")
    assert rename_syscall(send, {}) == [send]
    assert rename_syscall(family, {}) == [family]


def test_clones_do_not_alias_source():
    call = _call("foo(a int32)")
    renamed = rename_syscall(call, TABLE)
    assert call.name == "foo"
    assert call.call_name == "foo"
    assert all(c is not call for c in renamed)
