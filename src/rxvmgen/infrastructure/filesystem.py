"""File I/O for declaration sources and generated output.

``-`` stands for stdin when reading; output files get their parent
directories created on demand.
"""

from __future__ import annotations

import sys
from pathlib import Path

STDIN_MARKER = "-"


def read_source(source: str | Path) -> str:
    """Read declaration text from a path, or from stdin for ``-``."""
    if str(source) == STDIN_MARKER:
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def write_output(path: Path, content: str) -> None:
    """Write generated source to *path*, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
