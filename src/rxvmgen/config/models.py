"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, rxvmgen.toml only contains
overrides. An empty (or missing) file reproduces the stock ReactiveUI
conventions.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from rxvmgen.domain.classify import DEFAULT_COMMAND_TYPES, ClassificationRules
from rxvmgen.infrastructure.syntax.formatter import DEFAULT_INDENT
from rxvmgen.infrastructure.templates import DEFAULT_TEMPLATE

# --- rxvmgen.toml sections ---


class ClassifyConfig(BaseModel):
    """[classify] section."""

    model_config = {"frozen": True, "extra": "forbid"}

    once_attribute: str = "Once"
    command_types: list[str] = Field(default_factory=lambda: sorted(DEFAULT_COMMAND_TYPES))
    routable_marker: str = "IRoutableViewModel"

    def to_rules(self) -> ClassificationRules:
        return ClassificationRules(
            once_attribute=self.once_attribute,
            command_types=frozenset(self.command_types),
            routable_marker=self.routable_marker,
        )


class TemplatesConfig(BaseModel):
    """[templates] section."""

    model_config = {"frozen": True, "extra": "forbid"}

    directory: Path | None = None
    name: str = DEFAULT_TEMPLATE


class FormatConfig(BaseModel):
    """[format] section."""

    model_config = {"frozen": True, "extra": "forbid"}

    enabled: bool = True
    indent: str = DEFAULT_INDENT


class RxvmgenConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True, "extra": "forbid"}

    classify: ClassifyConfig = Field(default_factory=ClassifyConfig)
    templates: TemplatesConfig = Field(default_factory=TemplatesConfig)
    format: FormatConfig = Field(default_factory=FormatConfig)
