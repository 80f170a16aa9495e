"""Command: render ViewModel skeletons from interface declarations."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from rxvmgen.commands._base import RxvCommand

if TYPE_CHECKING:
    from rxvmgen.commands._context import AppContext


@click.command(
    cls=RxvCommand,
    examples="""\
  rxvmgen render ILoginDialog.cs
  rxvmgen render ILoginDialog.cs -o ViewModels/LoginDialog.cs
  cat IColorPicker.cs | rxvmgen render -
  rxvmgen render IColorPicker.cs --no-format --template my_viewmodel.cs.j2""",
)
@click.argument("source")
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write generated code to a file instead of stdout.",
)
@click.option("--template", "template_name", default=None, help="Template name to render with.")
@click.option(
    "--format/--no-format",
    "format_output",
    default=None,
    help="Re-indent the generated code (default from config).",
)
@click.pass_obj
def render(
    app: AppContext,
    source: str,
    output: Path | None,
    template_name: str | None,
    format_output: bool | None,
) -> None:
    """Render a ViewModel for every interface in SOURCE (use - for stdin)."""
    app.emit(
        app.service.render_file(
            source,
            output=output,
            template_name=template_name,
            format_output=format_output,
        )
    )
