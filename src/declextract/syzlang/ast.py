"""
syzlang.ast - Node types for the syzkaller description language.

Nodes are immutable; transformations build new nodes with
``dataclasses.replace`` so a clone never aliases its source.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union


@dataclass(frozen=True)
class Type:
    """A type expression: ``ident``, ``123``, ``"str"``, ``int32:3``, ``ptr[in, foo]``.

    Exactly one of ``ident``, ``number`` or ``string`` is set.  ``number``
    keeps the literal as written so hex constants and character literals
    such as ``'a'`` survive formatting.
    """

    ident: str = ""
    number: str = ""
    string: Optional[str] = None
    colon: Tuple["Type", ...] = ()
    args: Tuple["Type", ...] = ()


@dataclass(frozen=True)
class Field:
    name: str
    type: Type
    attrs: Tuple[Type, ...] = ()


@dataclass(frozen=True)
class NewLine:
    pass


@dataclass(frozen=True)
class Comment:
    text: str  # everything after the leading '#'


@dataclass(frozen=True)
class Include:
    file: str


@dataclass(frozen=True)
class Resource:
    name: str
    base: Type
    values: Tuple[Type, ...] = ()


@dataclass(frozen=True)
class TypeDef:
    name: str
    type: Type
    params: Tuple[str, ...] = ()


@dataclass(frozen=True)
class IntFlags:
    name: str
    values: Tuple[Type, ...] = ()


@dataclass(frozen=True)
class Call:
    """A syscall declaration.

    ``call_name`` is the kernel entry point; for a freshly parsed call it
    is the part of ``name`` before ``$``.
    """

    name: str
    call_name: str
    args: Tuple[Field, ...] = ()
    ret: Optional[Type] = None
    attrs: Tuple[Type, ...] = ()


@dataclass(frozen=True)
class Struct:
    """A struct (``name { ... }``) or union (``name [ ... ]``)."""

    name: str
    fields: Tuple[Union[Field, Comment], ...] = ()
    is_union: bool = False
    attrs: Tuple[Type, ...] = ()


Node = Union[NewLine, Comment, Include, Resource, TypeDef, IntFlags, Call, Struct]


@dataclass
class Description:
    """An ordered sequence of top-level nodes."""

    nodes: List[Node] = field(default_factory=list)
