"""Rich console and theme for human-readable rxvmgen output.

Renderers print into an in-memory console and hand back the text, which
keeps ``format_result() -> str`` free of I/O. Rich emits no ANSI codes
when the console is not a terminal, which is always the case here.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

DEFAULT_WIDTH = 120

ROLES = ("once", "read_write", "output", "opaque")

RXV_THEME = Theme(
    {
        "rxv.ok": "bold green",
        "rxv.error": "bold red",
        "rxv.warning": "bold yellow",
        "rxv.op": "bold cyan",
        "rxv.key": "dim",
        "rxv.name": "bold blue",
        "rxv.path": "dim",
        "rxv.role.once": "magenta",
        "rxv.role.read_write": "green",
        "rxv.role.output": "cyan",
        "rxv.role.opaque": "dim",
    }
)


def create_console(*, width: int = DEFAULT_WIDTH) -> Console:
    """A themed console writing into a fresh StringIO buffer."""
    return Console(file=StringIO(), theme=RXV_THEME, highlight=False, width=width)


def get_output(console: Console) -> str:
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_role(role: str) -> str:
    """Theme style for a member role, or ``""`` for unknown roles."""
    return f"rxv.role.{role}" if role in ROLES else ""
