"""Click command classes with an eager ``--examples`` flag.

``--help`` stays short; ``--examples`` prints invocation samples and exits
without touching config or input files.
"""

from __future__ import annotations

from typing import Any

import click


class ExamplesMixin:
    """Adds an ``examples`` keyword to Click commands and groups."""

    params: list[click.Parameter]

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=self._show_examples,
                    help="Show usage examples.",
                )
            )

    def _show_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(self.examples)
        ctx.exit(0)


class RxvCommand(ExamplesMixin, click.Command):
    """Click Command that supports ``--examples``."""


class RxvGroup(ExamplesMixin, click.Group):
    """Click Group that supports ``--examples``; subcommands default to RxvCommand."""

    command_class = RxvCommand
