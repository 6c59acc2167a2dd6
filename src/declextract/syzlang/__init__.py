"""
syzlang - The subset of the syzkaller description language declextract
reads and writes: AST nodes, a line-oriented parser and a formatter.
"""

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
from .formatter import format_description, format_node, format_type
from .parser import parse

__all__ = [
    "Call",
    "Comment",
    "Description",
    "Field",
    "Include",
    "IntFlags",
    "NewLine",
    "Node",
    "Resource",
    "Struct",
    "Type",
    "TypeDef",
    "format_description",
    "format_node",
    "format_type",
    "parse",
]
