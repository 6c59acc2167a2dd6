"""
core.log - Console output for extraction runs.

Stage banners and details go to a shared stderr ``rich.Console`` so the
generated description and the CLI summary on stdout stay clean.  Debug
lines are off until ``configure(debug=True)``, normally called once from
``Config.debug`` at the start of a run.
"""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.markup import escape

console = Console(stderr=True)

_debug_enabled = False


def configure(*, debug: bool) -> None:
    global _debug_enabled
    _debug_enabled = debug


def debug_enabled() -> bool:
    return _debug_enabled


def stage(msg: str) -> None:
    """Announce a pipeline stage."""
    console.print(f"[bold]{escape(msg)}[/]")


def detail(msg: str) -> None:
    console.print(f"  [dim]{escape(msg)}[/]")


def echo_raw(text: str) -> None:
    """Print tool output verbatim, without markup or highlighting."""
    console.print(text, markup=False, highlight=False)


def debug_print(module: str, msg: str, *, enabled: Optional[bool] = None) -> None:
    """Print ``[DEBUG:module] msg`` when debugging is on.

    *enabled* overrides the run-wide setting for a single call.
    """
    if enabled is None:
        enabled = _debug_enabled
    if enabled:
        console.print(f"[DEBUG:{module}] {msg}", markup=False, highlight=False)
