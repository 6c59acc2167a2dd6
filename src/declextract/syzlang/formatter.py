"""
syzlang.formatter - Serialize AST nodes back to description text.
"""

from __future__ import annotations

from typing import List, Sequence

from .ast import (
    Call,
    Comment,
    Description,
    Field,
    Include,
    IntFlags,
    NewLine,
    Node,
    Resource,
    Struct,
    Type,
    TypeDef,
)


def format_type(t: Type) -> str:
    if t.ident:
        s = t.ident
    elif t.number:
        s = t.number
    else:
        s = f'"{t.string or ""}"'
    for c in t.colon:
        s += ":" + format_type(c)
    if t.args:
        s += "[" + _join(t.args) + "]"
    return s


def _join(types: Sequence[Type]) -> str:
    return ", ".join(format_type(t) for t in types)


def _field(f: Field) -> str:
    s = f"{f.name} {format_type(f.type)}"
    if f.attrs:
        s += f" ({_join(f.attrs)})"
    return s


def _body(node: Struct) -> List[str]:
    opener, closer = ("[", "]") if node.is_union else ("{", "}")
    lines = [f"{node.name} {opener}"]
    width = max((len(f.name) for f in node.fields if isinstance(f, Field)), default=0)
    for f in node.fields:
        if isinstance(f, Comment):
            lines.append(f"\t#{f.text}")
            continue
        line = f"\t{f.name.ljust(width)} {format_type(f.type)}"
        if f.attrs:
            line += f" ({_join(f.attrs)})"
        lines.append(line)
    close = closer
    if node.attrs:
        close += f" [{_join(node.attrs)}]"
    lines.append(close)
    return lines


def format_node(node: Node) -> str:
    """Return the text of a single node (multi-line for structs and unions)."""
    if isinstance(node, NewLine):
        return ""
    if isinstance(node, Comment):
        return f"#{node.text}"
    if isinstance(node, Include):
        return f"include <{node.file}>"
    if isinstance(node, Resource):
        s = f"resource {node.name}[{format_type(node.base)}]"
        if node.values:
            s += f": {_join(node.values)}"
        return s
    if isinstance(node, TypeDef):
        params = f"[{', '.join(node.params)}]" if node.params else ""
        return f"type {node.name}{params} {format_type(node.type)}"
    if isinstance(node, IntFlags):
        return f"{node.name} = {_join(node.values)}"
    if isinstance(node, Call):
        s = f"{node.name}({', '.join(_field(a) for a in node.args)})"
        if node.ret is not None:
            s += f" {format_type(node.ret)}"
        if node.attrs:
            s += f" ({_join(node.attrs)})"
        return s
    if isinstance(node, Struct):
        return "\n".join(_body(node))
    raise TypeError(f"unknown description node {type(node).__name__}")


def format_description(desc: Description) -> str:
    """Serialize *desc*.

    A struct or union body is followed by a blank line unless the next
    node already is one; parsing that blank line back yields a
    ``NewLine`` node, so a second format pass is stable.
    """
    lines: List[str] = []
    nodes = desc.nodes
    for i, node in enumerate(nodes):
        lines.append(format_node(node))
        if isinstance(node, Struct) and i + 1 < len(nodes) and not isinstance(nodes[i + 1], NewLine):
            lines.append("")
    return "\n".join(lines) + "\n"
