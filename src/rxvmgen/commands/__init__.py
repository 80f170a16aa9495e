"""Subcommands of the ``rxvmgen`` group.

Command modules are imported inside :func:`register_commands` so the
root group loads without pulling in the rendering pipeline.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Attach ``render`` and ``inspect`` to *cli*."""
    from rxvmgen.commands.inspect_cmd import inspect_cmd
    from rxvmgen.commands.render import render

    for command in (render, inspect_cmd):
        cli.add_command(command)
