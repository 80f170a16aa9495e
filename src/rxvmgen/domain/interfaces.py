"""Interface renderer — builds one :class:`InterfaceRenderRecord`."""

from __future__ import annotations

from rxvmgen.domain.classify import DEFAULT_RULES, ClassificationRules, classify_member
from rxvmgen.domain.errors import InvalidInputError
from rxvmgen.domain.models import InterfaceRenderRecord, NameAndType, OnceProperty
from rxvmgen.domain.syntax import TypeDeclaration
from rxvmgen.domain.text import chomp


def implementation_name(interface_name: str) -> str:
    """Drop the single-character marker prefix (``IFoo`` -> ``Foo``).

    The prefix itself is not validated.

    Raises:
        InvalidInputError: If the name has fewer than two characters.
    """
    if len(interface_name) < 2:
        msg = f"Interface name {interface_name!r} is too short to derive a class name"
        raise InvalidInputError(msg)
    return interface_name[1:]


def render_interface(
    decl: TypeDeclaration,
    rules: ClassificationRules = DEFAULT_RULES,
) -> InterfaceRenderRecord:
    """Assemble the render record for one interface declaration.

    The first child node is the declaration header (already captured as
    the interface name); every remaining child is classified in order.
    """
    interface_name = chomp(decl.identifier_text)
    impl_class_name = implementation_name(interface_name)

    routable = any(base.plain_name == rules.routable_marker for base in decl.base_types)
    definition = chomp(decl.text.replace(rules.once_marker, ""))

    properties = tuple(classify_member(child, rules) for child in decl.child_nodes[1:])
    once_properties = tuple(
        NameAndType(name=prop.name, type=prop.type)
        for prop in properties
        if isinstance(prop, OnceProperty)
    )

    return InterfaceRenderRecord(
        interface_name=interface_name,
        impl_class_name=impl_class_name,
        definition=definition,
        properties=properties,
        once_properties=once_properties,
        is_routable_view_model=routable,
    )
