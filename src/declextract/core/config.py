"""
core.config - Centralised configuration management.

Loads settings from environment variables and .env files.
Every other module accesses configuration through ``Config``.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, ValidationError

from .errors import FatalConfigError

_env_loaded = False

ENV_PREFIX = "DECLEXTRACT_"


def _env_files() -> List[Path]:
    """.env files to load, most specific first.

    ``DECLEXTRACT_ENV_FILE`` names one explicitly; otherwise the nearest
    ``.env`` at or above the working directory (usually the kernel build
    tree) is used.
    """
    explicit = os.environ.get(f"{ENV_PREFIX}ENV_FILE")
    if explicit:
        p = Path(explicit)
        if not p.is_file():
            raise FatalConfigError(f"{ENV_PREFIX}ENV_FILE does not exist: {p}")
        return [p]
    found = find_dotenv(usecwd=True)
    return [Path(found)] if found else []


def _load_dotenv() -> None:
    global _env_loaded
    if _env_loaded:
        return
    for p in _env_files():
        # Values already in the environment win.
        load_dotenv(p, override=False)
    _env_loaded = True


def _default_workers() -> int:
    return os.cpu_count() or 1


class Config(BaseModel):
    """
    Runtime configuration for one extraction run.

    Create via ``load_config()`` which pre-loads the env file.
    """

    # ── Inputs ───────────────────────────────────────────────────────
    compile_commands: Path = Field(
        default=Path("compile_commands.json"),
        description="Path to the compilation database",
    )
    binary: str = Field(default="syz-declextract", description="Path to the analysis binary")
    kernel_dir: Optional[Path] = Field(default=None, description="Kernel source root")

    # ── Output ───────────────────────────────────────────────────────
    output: Path = Field(default=Path("out.txt"), description="Generated description file")

    # ── Execution ────────────────────────────────────────────────────
    workers: int = Field(default_factory=_default_workers, gt=0)

    # ── Debug ────────────────────────────────────────────────────────
    debug: bool = False

    @property
    def arch_dir(self) -> Path:
        if self.kernel_dir is None:
            raise FatalConfigError("path to kernel directory is required")
        return self.kernel_dir / "arch"


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").lower() in ("1", "true", "yes")


def load_config(**overrides: object) -> Config:
    """
    Load ``Config`` from environment, applying optional overrides.

    ``None`` overrides are ignored so CLI defaults never mask env values.
    """
    _load_dotenv()
    defaults: dict = {"debug": _env_flag(f"{ENV_PREFIX}DEBUG")}
    for key, var in (
        ("compile_commands", "COMPILE_COMMANDS"),
        ("binary", "BINARY"),
        ("output", "OUTPUT"),
        ("kernel_dir", "KERNEL"),
        ("workers", "WORKERS"),
    ):
        val = os.environ.get(ENV_PREFIX + var)
        if val:
            defaults[key] = val
    defaults.update({k: v for k, v in overrides.items() if v is not None})
    if defaults.get("kernel_dir") == "":
        defaults.pop("kernel_dir")
    try:
        return Config(**defaults)  # type: ignore[arg-type]
    except ValidationError as e:
        raise FatalConfigError(f"invalid configuration: {e}") from e
