"""Render models handed to the ViewModel template.

Field names are snake_case in Python; :meth:`RenderModel.template_context`
dumps them with the camelCase aliases the templates bind to
(``interfaceName``, ``implClassName``, ``isRoutableViewModel``,
``onceProperties`` ...).
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class MemberRole(StrEnum):
    """The role a classified member plays in the generated ViewModel."""

    ONCE = "once"
    READ_WRITE = "read_write"
    OUTPUT = "output"
    OPAQUE = "opaque"


class _TemplateModel(BaseModel):
    model_config = {
        "frozen": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }


class NameAndType(_TemplateModel):
    """A property name with its declared type text."""

    name: str
    type: str


class OnceProperty(NameAndType):
    """Assigned exactly once, at construction."""

    role: Literal["once"] = "once"


class ReadWriteProperty(NameAndType):
    """Two-way bindable state with change notification."""

    role: Literal["read_write"] = "read_write"


class OutputOnlyProperty(NameAndType):
    """Derived, read-only value backed by an observable helper."""

    role: Literal["output"] = "output"


class OpaqueMember(_TemplateModel):
    """Non-property member passed through as text."""

    role: Literal["opaque"] = "opaque"
    text: str


RenderedMember = Annotated[
    OnceProperty | ReadWriteProperty | OutputOnlyProperty | OpaqueMember,
    Field(discriminator="role"),
]


class InterfaceRenderRecord(_TemplateModel):
    """Everything the template needs to render one interface's ViewModel."""

    interface_name: str
    impl_class_name: str
    definition: str
    properties: tuple[RenderedMember, ...] = ()
    once_properties: tuple[NameAndType, ...] = ()
    is_routable_view_model: bool = False


class RenderModel(_TemplateModel):
    """Template input: every interface in source order."""

    interfaces: tuple[InterfaceRenderRecord, ...] = ()

    def template_context(self) -> dict[str, Any]:
        """Plain-data view of the model keyed by template binding names."""
        return self.model_dump(by_alias=True, mode="json")
