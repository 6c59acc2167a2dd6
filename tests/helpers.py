"""Helpers for building fake kernel trees, sources and databases."""

import json
import os
import textwrap
from pathlib import Path


def write_tbl(kernel: Path, rel: str, body: str) -> Path:
    path = kernel / "arch" / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(body))
    return path


def write_sources(src_dir: Path, outputs: dict) -> list:
    """Create fake source files with canned tool output; return their paths."""
    files = []
    for name, out in outputs.items():
        src = src_dir / name
        src.parent.mkdir(parents=True, exist_ok=True)
        src.write_text("/* source */\n")
        if out is not None:
            Path(str(src) + ".out").write_text(textwrap.dedent(out))
        files.append(str(src))
    return files


def write_database(path: Path, files: list) -> Path:
    records = [
        {
            "arguments": ["cc", "-c", f],
            "directory": os.path.dirname(f),
            "file": f,
            "output": f + ".o",
        }
        for f in files
    ]
    path.write_text(json.dumps(records))
    return path
