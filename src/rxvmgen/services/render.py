"""Rendering pipeline — declaration text in, ViewModel source out.

:class:`ViewModelRenderer` is the core orchestrator: it raises
:class:`InvalidInputError` / :class:`TemplateRenderError` and returns
plain text. :class:`RenderService` wraps it for the CLI, adding file I/O
and translating failures into :class:`ServiceResult` errors.

Data flows one way::

    source text -> DeclarationUnit -> InterfaceRenderRecord[] -> template -> formatter
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from rxvmgen.domain.classify import DEFAULT_RULES, ClassificationRules
from rxvmgen.domain.errors import InvalidInputError, TemplateRenderError
from rxvmgen.domain.interfaces import render_interface
from rxvmgen.domain.models import RenderModel
from rxvmgen.infrastructure.filesystem import STDIN_MARKER, read_source, write_output
from rxvmgen.infrastructure.syntax import format_source, parse_declarations
from rxvmgen.infrastructure.syntax.formatter import DEFAULT_INDENT
from rxvmgen.infrastructure.templates import (
    DEFAULT_TEMPLATE,
    build_template_environment,
    render_template,
)
from rxvmgen.services.result import ServiceResult
from rxvmgen.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from rxvmgen.config.settings import RxvmgenSettings

logger = logging.getLogger(__name__)


class ViewModelRenderer:
    """Turns interface declarations into ViewModel skeleton source.

    Holds no per-call state; one instance can render any number of inputs.
    """

    def __init__(
        self,
        *,
        rules: ClassificationRules = DEFAULT_RULES,
        template_name: str = DEFAULT_TEMPLATE,
        template_dir: Path | None = None,
        format_output: bool = True,
        indent: str = DEFAULT_INDENT,
    ) -> None:
        self.rules = rules
        self.template_name = template_name
        self.format_output = format_output
        self.indent = indent
        self._env = build_template_environment(override_dir=template_dir)

    @classmethod
    def from_settings(
        cls,
        settings: RxvmgenSettings,
        *,
        template_name: str | None = None,
        format_output: bool | None = None,
    ) -> ViewModelRenderer:
        """Build a renderer from settings, with optional per-call overrides."""
        return cls(
            rules=settings.classify.to_rules(),
            template_name=template_name or settings.templates.name,
            template_dir=settings.templates.directory,
            format_output=settings.format.enabled if format_output is None else format_output,
            indent=settings.format.indent,
        )

    def build_model(self, source: str) -> RenderModel:
        """Parse *source* and build the template input.

        Raises:
            InvalidInputError: If nothing parses, if any top-level
                declaration is not an interface, or if an interface name
                is too short to derive a class name from.
        """
        with trace_span("parse") as span:
            unit = parse_declarations(source)
            if span:
                span.annotate("declarations", len(unit.top_level_nodes))

        if unit.is_empty:
            msg = "Compilation failed or code is badly formatted"
            if unit.diagnostics:
                msg = f"{msg}: {'; '.join(unit.diagnostics)}"
            raise InvalidInputError(msg)

        others = [node for node in unit.top_level_nodes if not node.is_interface]
        if others:
            found = ", ".join(f"{node.kind} {node.identifier_text!r}" for node in others)
            msg = f"Code must be one or more interfaces (found {found})"
            raise InvalidInputError(msg)

        with trace_span("build_model"):
            interfaces = tuple(render_interface(decl, self.rules) for decl in unit.top_level_nodes)

        logger.debug("Built render model for %d interface(s)", len(interfaces))
        return RenderModel(interfaces=interfaces)

    def render(self, source: str) -> str:
        """Render ViewModel source for every interface in *source*.

        Raises:
            InvalidInputError: See :meth:`build_model`.
            TemplateRenderError: If the template is missing or fails.
        """
        return self.render_model(self.build_model(source))

    def render_model(self, model: RenderModel) -> str:
        """Render an already built model through the template and formatter."""
        with trace_span("render_template"):
            output = render_template(self._env, self.template_name, model.template_context())

        if not self.format_output:
            return output
        with trace_span("format"):
            return format_source(output, indent=self.indent)


class RenderService:
    """CLI-facing operations: render and inspect declaration files.

    Each call builds a fresh :class:`ViewModelRenderer` from the settings
    plus any per-call overrides.
    """

    def __init__(self, settings: RxvmgenSettings) -> None:
        self._settings = settings

    @traced
    def render_file(
        self,
        source: str | Path,
        *,
        output: Path | None = None,
        template_name: str | None = None,
        format_output: bool | None = None,
    ) -> ServiceResult:
        """Render the declarations in *source* (a path, or ``-`` for stdin).

        With *output*, the generated code is written there and only the
        path is reported; otherwise the code is returned in ``data["code"]``.
        Nothing is written when rendering fails.
        """
        op = "render"
        text = self._read(op, source)
        if isinstance(text, ServiceResult):
            return text

        renderer = ViewModelRenderer.from_settings(
            self._settings,
            template_name=template_name,
            format_output=format_output,
        )
        try:
            model = renderer.build_model(text)
            code = renderer.render_model(model)
        except InvalidInputError as exc:
            return ServiceResult.failure(op, "INVALID_INPUT", str(exc), source=str(source))
        except TemplateRenderError as exc:
            return ServiceResult.failure(
                op, "TEMPLATE_ERROR", str(exc), template=renderer.template_name
            )

        data: dict[str, object] = {
            "source": str(source),
            "interfaces": [iface.interface_name for iface in model.interfaces],
        }
        if output is None:
            data["code"] = code
        else:
            try:
                write_output(output, code)
            except OSError as exc:
                return ServiceResult.failure(op, "WRITE_ERROR", f"Cannot write {output}: {exc}")
            data["path"] = str(output)

        return ServiceResult.success(op, **data)

    @traced
    def inspect_file(self, source: str | Path) -> ServiceResult:
        """Report how every member of every interface in *source* is classified."""
        op = "inspect"
        text = self._read(op, source)
        if isinstance(text, ServiceResult):
            return text

        renderer = ViewModelRenderer.from_settings(self._settings)
        try:
            model = renderer.build_model(text)
        except InvalidInputError as exc:
            return ServiceResult.failure(op, "INVALID_INPUT", str(exc), source=str(source))

        return ServiceResult.success(op, source=str(source), **model.template_context())

    def _read(self, op: str, source: str | Path) -> str | ServiceResult:
        try:
            return read_source(source)
        except (OSError, UnicodeDecodeError) as exc:
            name = "stdin" if str(source) == STDIN_MARKER else str(source)
            return ServiceResult.failure(op, "READ_ERROR", f"Cannot read {name}: {exc}")
