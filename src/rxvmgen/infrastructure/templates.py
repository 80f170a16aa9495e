"""Shared Jinja2 template loading with a user override directory."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import (
    BaseLoader,
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    PackageLoader,
    StrictUndefined,
    TemplateError,
)

from rxvmgen.domain.errors import TemplateRenderError

DEFAULT_TEMPLATE = "viewmodel.cs.j2"


def camel_case(value: str) -> str:
    """Lower-case the first character: ``AppState`` -> ``appState``."""
    return value[:1].lower() + value[1:]


def comment_lines(value: str, prefix: str = "// ") -> str:
    """Prefix every line of *value* so it renders as a line comment."""
    return "\n".join(prefix + line for line in value.split("\n"))


def build_template_environment(*, override_dir: Path | None = None) -> Environment:
    """Build a Jinja2 environment with user overrides before packaged defaults.

    Templates in *override_dir* shadow the packaged ones by file name, so a
    project can replace ``viewmodel.cs.j2`` without touching the package.
    Undefined variables raise instead of rendering as empty strings.
    """
    loaders: list[BaseLoader] = []
    if override_dir is not None:
        loaders.append(FileSystemLoader(str(override_dir)))

    loaders.append(PackageLoader("rxvmgen", "templates"))
    env = Environment(
        loader=ChoiceLoader(loaders),
        undefined=StrictUndefined,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["camel_case"] = camel_case
    env.filters["comment"] = comment_lines
    return env


def render_template(env: Environment, name: str, context: dict[str, Any]) -> str:
    """Render template *name* with *context*.

    Raises:
        TemplateRenderError: If the template is missing, malformed, or
            references an undefined variable.
    """
    try:
        return env.get_template(name).render(**context)
    except TemplateError as exc:
        msg = f"Template {name!r} failed: {exc.message or type(exc).__name__}"
        raise TemplateRenderError(msg) from exc
