"""AppContext — state shared by every subcommand via ``@click.pass_obj``.

Logging and telemetry are configured once, when the root group builds
the context. The render service is created on first use so ``--help``
and ``--examples`` never load the template machinery.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click
import structlog

from rxvmgen.config.logging import configure_logging
from rxvmgen.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from rxvmgen.config.settings import RxvmgenSettings
    from rxvmgen.services.render import RenderService
    from rxvmgen.services.result import ServiceResult


class AppContext:
    """Settings, output mode and the lazily built render service."""

    def __init__(self, settings: RxvmgenSettings) -> None:
        self.settings = settings
        self.output = OutputSettings(
            json_output=settings.json_output,
            quiet=settings.quiet,
            verbose=settings.verbose,
        )
        self._service: RenderService | None = None

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)
        if settings.verbose:
            from rxvmgen.services.telemetry import enable_telemetry

            enable_telemetry()

        structlog.get_logger(__name__).debug(
            "settings.loaded",
            config=str(settings.config_path) if settings.config_path else None,
            project_root=str(settings.project_root),
        )

    @property
    def service(self) -> RenderService:
        if self._service is None:
            from rxvmgen.services.render import RenderService

            self._service = RenderService(self.settings)
        return self._service

    def emit(self, result: ServiceResult) -> None:
        """Print *result*; exit with status 1 when it failed.

        Successful output goes to stdout so generated code can be piped or
        redirected. Errors and warnings go to stderr; in JSON mode the
        warnings are already part of the payload.
        """
        text = format_result(result, settings=self.output)
        if not result.ok:
            click.echo(text, err=True)
            raise SystemExit(1)

        click.echo(text)
        if not self.output.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)
