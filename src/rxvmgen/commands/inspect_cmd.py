"""Command: show how interface members are classified."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from rxvmgen.commands._base import RxvCommand

if TYPE_CHECKING:
    from rxvmgen.commands._context import AppContext


@click.command(
    "inspect",
    cls=RxvCommand,
    examples="""\
  rxvmgen inspect ILoginDialog.cs
  rxvmgen --json inspect ILoginDialog.cs
  rxvmgen -v inspect IColorPicker.cs""",
)
@click.argument("source")
@click.pass_obj
def inspect_cmd(app: AppContext, source: str) -> None:
    """Print the render model for SOURCE (use - for stdin)."""
    app.emit(app.service.inspect_file(source))
