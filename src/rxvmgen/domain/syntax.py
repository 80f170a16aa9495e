"""Parse-tree node shapes produced by the declaration parser.

The rendering core only reads these shapes; it never looks at tokens.
Every node keeps the exact source text it was parsed from in ``text``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class DeclarationKind(StrEnum):
    """Kinds of top-level declarations the parser recognizes."""

    INTERFACE = "interface"
    CLASS = "class"
    STRUCT = "struct"
    RECORD = "record"
    ENUM = "enum"
    DELEGATE = "delegate"
    NAMESPACE = "namespace"
    USING = "using"


class MemberKind(StrEnum):
    """Kinds of members found inside a declaration body."""

    PROPERTY = "property"
    METHOD = "method"
    EVENT = "event"
    INDEXER = "indexer"
    FIELD = "field"
    NESTED_TYPE = "nested_type"
    OTHER = "other"


@dataclass(frozen=True)
class TypeReference:
    """A type as written in source.

    Attributes:
        text: Full type text, e.g. ``IObservable<Unit>`` or ``int[]``.
        plain_name: Rightmost simple identifier without type arguments,
            e.g. ``IObservable`` for ``System.IObservable<Unit>``.
    """

    text: str
    plain_name: str


@dataclass(frozen=True)
class DeclarationHeader:
    """First child of every declaration: its name token plus header text."""

    identifier_text: str
    text: str


@dataclass(frozen=True)
class PropertyMember:
    """A property-shaped member (``Type Name { get; set; }``)."""

    identifier_text: str
    type: TypeReference
    has_setter: bool
    annotation_names: frozenset[str] = field(default_factory=frozenset)
    text: str = ""

    @property
    def type_name(self) -> str:
        return self.type.plain_name


@dataclass(frozen=True)
class OtherMember:
    """Any non-property member, kept as opaque source text."""

    text: str
    kind: MemberKind = MemberKind.OTHER


MemberNode = PropertyMember | OtherMember


@dataclass(frozen=True)
class TypeDeclaration:
    """A top-level declaration.

    ``child_nodes[0]`` is always the :class:`DeclarationHeader`; member
    nodes follow in source order. Non-type declarations (``using``,
    ``namespace``, ``delegate``) carry only the header.
    """

    kind: DeclarationKind
    identifier_text: str
    child_nodes: tuple[DeclarationHeader | MemberNode, ...]
    base_types: tuple[TypeReference, ...] = ()
    text: str = ""

    @property
    def is_interface(self) -> bool:
        return self.kind is DeclarationKind.INTERFACE


@dataclass(frozen=True)
class DeclarationUnit:
    """Root of a parse.

    A failed parse produces an empty unit with the parser's messages in
    ``diagnostics`` instead of raising.
    """

    top_level_nodes: tuple[TypeDeclaration, ...] = ()
    diagnostics: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.top_level_nodes
