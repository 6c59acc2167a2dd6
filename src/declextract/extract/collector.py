"""
extract.collector - Parse tool output and bucket declarations by kind.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Mapping, Sequence

from ..core.errors import DescriptionParseError, ExtractionError
from ..core.log import debug_print, echo_raw
from ..core.models import ExtractionResult
from ..syzlang import parse
from ..syzlang.ast import (
    Call,
    Comment,
    Include,
    IntFlags,
    NewLine,
    Node,
    Resource,
    Struct,
    TypeDef,
)
from .rename import rename_syscall


@dataclass
class Buckets:
    """Declarations gathered from every file, one list per kind."""

    syscalls: List[Call] = field(default_factory=list)
    netlinks: List[Struct] = field(default_factory=list)
    includes: List[Include] = field(default_factory=list)
    type_defs: List[TypeDef] = field(default_factory=list)
    resources: List[Resource] = field(default_factory=list)
    analysed_files: int = 0
    dropped_syscalls: int = 0


def classify(
    nodes: Iterable[Node],
    buckets: Buckets,
    rename_table: Mapping[str, Sequence[str]],
) -> Buckets:
    for node in nodes:
        if isinstance(node, Call):
            renamed = rename_syscall(node, rename_table)
            if not renamed:
                buckets.dropped_syscalls += 1
            buckets.syscalls.extend(renamed)
        elif isinstance(node, Struct):
            buckets.netlinks.append(node)
        elif isinstance(node, Include):
            buckets.includes.append(node)
        elif isinstance(node, TypeDef):
            buckets.type_defs.append(node)
        elif isinstance(node, Resource):
            buckets.resources.append(node)
        elif isinstance(node, (NewLine, Comment)):
            continue
        elif isinstance(node, IntFlags):
            debug_print("collector", f"ignoring flags {node.name}")
        else:
            raise TypeError(f"unhandled declaration kind {type(node).__name__}")
    return buckets


def collect(
    results: Iterable[ExtractionResult],
    rename_table: Mapping[str, Sequence[str]],
) -> Buckets:
    """
    Drain *results* into ``Buckets``.

    The first failed result aborts collection; so does output that does
    not parse, after echoing it for diagnosis.
    """
    buckets = Buckets()
    for res in results:
        if res.failed:
            raise ExtractionError(res.stderr, file=res.file)
        if not res.stdout:
            continue
        try:
            desc = parse(res.stdout, res.file)
        except DescriptionParseError:
            echo_raw(res.stdout)
            raise
        buckets.analysed_files += 1
        classify(desc.nodes, buckets, rename_table)
    return buckets
