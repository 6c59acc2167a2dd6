import stat
import sys
import textwrap
from pathlib import Path

import pytest

from declextract.core import config, log

# Stands in for the syz-declextract binary: `tool -p <db> <file>` prints
# <file>.out, or fails with <file>.err on stderr, or exits silently with
# status 3 when <file>.fail exists.  <file>.bin is copied to stdout as raw
# bytes and <file>.kill makes the tool kill itself with SIGKILL.
FAKE_TOOL = textwrap.dedent(
    """\
    #!{python}
    import os
    import signal
    import sys

    assert sys.argv[1] == "-p", sys.argv
    src = sys.argv[3]
    if os.path.exists(src + ".kill"):
        os.kill(os.getpid(), signal.SIGKILL)
    if os.path.exists(src + ".fail"):
        sys.exit(3)
    if os.path.exists(src + ".err"):
        with open(src + ".err") as f:
            sys.stderr.write(f.read())
        sys.exit(1)
    if os.path.exists(src + ".bin"):
        with open(src + ".bin", "rb") as f:
            sys.stdout.buffer.write(f.read())
    if os.path.exists(src + ".out"):
        with open(src + ".out") as f:
            sys.stdout.write(f.read())
    """
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in (
        "DECLEXTRACT_COMPILE_COMMANDS",
        "DECLEXTRACT_BINARY",
        "DECLEXTRACT_OUTPUT",
        "DECLEXTRACT_KERNEL",
        "DECLEXTRACT_WORKERS",
        "DECLEXTRACT_DEBUG",
        "DECLEXTRACT_ENV_FILE",
    ):
        monkeypatch.delenv(var, raising=False)
    # Keep a .env in the developer's checkout out of the tests.
    monkeypatch.setattr(config, "_env_loaded", True)
    monkeypatch.setattr(log, "_debug_enabled", False)


@pytest.fixture
def fake_tool(tmp_path: Path) -> Path:
    tool = tmp_path / "fake-declextract"
    tool.write_text(FAKE_TOOL.format(python=sys.executable))
    tool.chmod(tool.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return tool
