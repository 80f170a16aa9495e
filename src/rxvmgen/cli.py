"""Entry point: the ``rxvmgen`` command group and its global options."""

from __future__ import annotations

import click

from rxvmgen import __version__
from rxvmgen.commands import register_commands
from rxvmgen.commands._base import RxvGroup
from rxvmgen.commands._context import AppContext
from rxvmgen.config.settings import RxvmgenSettings


@click.group(
    cls=RxvGroup,
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
    examples="""\
  rxvmgen render ILoginDialog.cs
  rxvmgen --json inspect ILoginDialog.cs
  rxvmgen -c tools/rxvmgen.toml render IColorPicker.cs -o ColorPicker.cs""",
)
@click.version_option(__version__, "-V", "--version", prog_name="rxvmgen")
@click.option("--json", "json_output", is_flag=True, help="Print results as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="Print only paths or interface names.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging and stage timings.")
@click.option("--log-json", is_flag=True, help="Write logs to stderr as JSON lines.")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Use this rxvmgen.toml instead of searching for one.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """rxvmgen — generate ReactiveUI ViewModels from interface declarations."""
    ctx.obj = AppContext(
        RxvmgenSettings.from_cli(
            config_path=config_path,
            json_output=json_output,
            quiet=quiet,
            verbose=verbose,
            log_json=log_json,
        )
    )
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
