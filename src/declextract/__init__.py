"""
declextract - Merge syz-declextract output into one syzkaller description.

Architecture:
    core/     Shared models, configuration, logging, error types
    syzlang/  Description-language AST, parser and formatter
    extract/  Catalog, syscall tables, dispatcher, collector, renamer,
              merger, netlink union synthesis, output assembly
    cli/      Typer CLI entry-point
"""

__version__ = "0.1.0"
