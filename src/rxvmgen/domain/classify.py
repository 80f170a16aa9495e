"""Member classification — decides which role each interface member plays.

Decision order (first match wins):

1. Not a property: ``opaque`` passthrough of the chomped source text.
2. Carries the once annotation, or its type is a command type: ``once``.
3. Has a ``set`` accessor: ``read_write``.
4. Otherwise: ``output``.

A property with both a setter and the once annotation is ``once``.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from rxvmgen.domain.models import (
    OnceProperty,
    OpaqueMember,
    OutputOnlyProperty,
    ReadWriteProperty,
    RenderedMember,
)
from rxvmgen.domain.syntax import DeclarationHeader, MemberNode, PropertyMember
from rxvmgen.domain.text import chomp

DEFAULT_COMMAND_TYPES: frozenset[str] = frozenset({"ReactiveCommand", "ReactiveAsyncCommand"})


@dataclass(frozen=True)
class ClassificationRules:
    """Names that drive classification and routability detection."""

    once_attribute: str = "Once"
    command_types: frozenset[str] = field(default_factory=lambda: DEFAULT_COMMAND_TYPES)
    routable_marker: str = "IRoutableViewModel"

    @property
    def once_marker(self) -> str:
        """Annotation text stripped from displayed definitions, e.g. ``[Once]``."""
        return f"[{self.once_attribute}]"

    def is_once(self, prop: PropertyMember) -> bool:
        return (
            self.once_attribute in prop.annotation_names
            or prop.type.plain_name in self.command_types
        )


DEFAULT_RULES = ClassificationRules()


def classify_member(
    node: DeclarationHeader | MemberNode,
    rules: ClassificationRules = DEFAULT_RULES,
) -> RenderedMember:
    """Classify one child node of an interface. Never raises."""
    if not isinstance(node, PropertyMember):
        return OpaqueMember(text=chomp(node.text))

    name = chomp(node.identifier_text)
    type_text = chomp(node.type.text)

    if rules.is_once(node):
        return OnceProperty(name=name, type=type_text)
    if node.has_setter:
        return ReadWriteProperty(name=name, type=type_text)
    return OutputOnlyProperty(name=name, type=type_text)
