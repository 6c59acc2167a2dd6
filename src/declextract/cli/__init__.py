"""
cli - Typer CLI entry-point for declextract.
"""

from .app import app, main

__all__ = ["app", "main"]
