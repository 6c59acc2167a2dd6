"""
core - Shared models, configuration, logging and error types.

This package is the foundation layer with zero intra-project dependencies.
"""

from .config import Config, load_config
from .errors import (
    DeclExtractError,
    DescriptionParseError,
    ExtractionError,
    FatalConfigError,
    OutputWriteError,
    TableIOError,
)
from .log import console, debug_print
from .models import CompileCommand, ExtractionResult, ExtractionSummary

__all__ = [
    "Config",
    "load_config",
    "DeclExtractError",
    "DescriptionParseError",
    "ExtractionError",
    "FatalConfigError",
    "OutputWriteError",
    "TableIOError",
    "console",
    "debug_print",
    "CompileCommand",
    "ExtractionResult",
    "ExtractionSummary",
]
