"""
extract.catalog - Compilation database loading.

Reads ``compile_commands.json`` into ``CompileCommand`` records.  No
filtering happens here; the dispatcher decides which files to analyse.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Union

from pydantic import ValidationError

from ..core.errors import FatalConfigError
from ..core.models import CompileCommand


def load_compile_commands(path: Union[str, Path]) -> List[CompileCommand]:
    """Load the ordered list of compilation units from *path*."""
    p = Path(path)
    try:
        raw = p.read_text(encoding="utf-8")
    except OSError as e:
        raise FatalConfigError(f"cannot read compilation database {p}: {e}") from e
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise FatalConfigError(f"malformed compilation database {p}: {e}") from e
    if not isinstance(data, list):
        raise FatalConfigError(f"malformed compilation database {p}: expected a JSON array")

    cmds: List[CompileCommand] = []
    for idx, entry in enumerate(data):
        try:
            cmds.append(CompileCommand.model_validate(entry))
        except ValidationError as e:
            raise FatalConfigError(f"malformed compilation database {p}: entry {idx}: {e}") from e
    return cmds
