"""
cli.app - Typer application for declextract.
"""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..core.config import load_config
from ..core.errors import DeclExtractError
from ..core.models import ExtractionSummary

app = typer.Typer(
    name="declextract",
    help="Merge syz-declextract output into one syzkaller description.",
    add_completion=False,
)
console = Console()


def _print_summary(summary: ExtractionSummary) -> None:
    table = Table(title="declextract")
    table.add_column("Item", style="bold")
    table.add_column("Value", justify="right")
    for item, value in summary.rows():
        table.add_row(item, value)
    console.print(table)


@app.command()
def run(
    compile_commands: Optional[str] = typer.Option(
        None, "--compile-commands", "-c", help="Path to compilation database [default: compile_commands.json]"
    ),
    binary: Optional[str] = typer.Option(
        None, "--binary", "-b", help="Path to the syz-declextract binary [default: syz-declextract]"
    ),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Output file [default: out.txt]"),
    kernel: Optional[str] = typer.Option(None, "--kernel", "-k", help="Kernel source directory (required)"),
    workers: Optional[int] = typer.Option(None, "--workers", "-j", help="Parallel workers [default: CPU count]"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug output"),
) -> None:
    """Analyse every compiled source file and write the merged description."""
    from ..extract.pipeline import run_extraction_pipeline

    try:
        cfg = load_config(
            compile_commands=compile_commands,
            binary=binary,
            output=output,
            kernel_dir=kernel,
            workers=workers,
            debug=debug or None,
        )
        if cfg.kernel_dir is None:
            console.print("[red]path to kernel directory is required[/]")
            raise typer.Exit(1)
        summary = run_extraction_pipeline(cfg)
    except DeclExtractError as e:
        console.print(f"[red]{escape(str(e))}[/]", highlight=False)
        raise typer.Exit(1)

    _print_summary(summary)


def main() -> None:
    """Entry-point registered in pyproject.toml."""
    app()
