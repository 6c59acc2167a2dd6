"""
core.errors - Fatal error types.

Every failure in the pipeline is fatal: a partial description is worse
than none.  Each stage raises a subclass of ``DeclExtractError`` and the
CLI turns it into a non-zero exit.
"""

from __future__ import annotations

from typing import Optional


class DeclExtractError(Exception):
    """Base class for all declextract failures."""


class FatalConfigError(DeclExtractError):
    """Compilation database or runtime configuration is unusable."""


class ExtractionError(DeclExtractError):
    """The external analysis tool failed on a source file."""

    def __init__(self, message: str, *, file: str = "") -> None:
        super().__init__(message)
        self.file = file


class DescriptionParseError(DeclExtractError):
    """Description text could not be parsed."""

    def __init__(
        self,
        message: str,
        *,
        filename: str = "",
        line: int = 0,
        text: Optional[str] = None,
    ) -> None:
        self.filename = filename
        self.line = line
        self.text = text
        loc = f"{filename or '<input>'}:{line}" if line else (filename or "<input>")
        super().__init__(f"{loc}: {message}")


class TableIOError(DeclExtractError):
    """A syscall table file could not be stat'ed or read."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path


class OutputWriteError(DeclExtractError):
    """The generated description could not be written."""
