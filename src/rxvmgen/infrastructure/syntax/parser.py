"""Recursive-descent parser for C#-style declaration files.

Produces the node shapes from :mod:`rxvmgen.domain.syntax`. Only interface
bodies are parsed member by member; other declarations (classes, enums,
namespaces, ``using`` directives, delegates) are recognized and skipped
as a whole so callers can reject them.

:func:`parse_declarations` is the adapter entry point: syntax errors are
caught and reported as an empty unit carrying diagnostics.
"""

from __future__ import annotations

import logging

from rxvmgen.domain.syntax import (
    DeclarationHeader,
    DeclarationKind,
    DeclarationUnit,
    MemberKind,
    MemberNode,
    OtherMember,
    PropertyMember,
    TypeDeclaration,
    TypeReference,
)
from rxvmgen.infrastructure.syntax.lexer import (
    DeclarationSyntaxError,
    Token,
    TokenType,
    tokenize,
)

logger = logging.getLogger(__name__)

MODIFIERS: frozenset[str] = frozenset(
    {
        "abstract",
        "async",
        "const",
        "extern",
        "file",
        "internal",
        "new",
        "override",
        "partial",
        "private",
        "protected",
        "public",
        "readonly",
        "ref",
        "required",
        "sealed",
        "static",
        "unsafe",
        "virtual",
        "volatile",
    }
)

_TYPE_KEYWORDS: dict[str, DeclarationKind] = {
    "interface": DeclarationKind.INTERFACE,
    "class": DeclarationKind.CLASS,
    "struct": DeclarationKind.STRUCT,
    "record": DeclarationKind.RECORD,
    "enum": DeclarationKind.ENUM,
}

_CLOSERS: dict[str, str] = {"(": ")", "[": "]", "{": "}"}


class DeclarationParser:
    """Recursive-descent parser over the token stream of one source text."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.tokens: list[Token] = tokenize(text)
        self.pos = 0

    # -- token helpers ----------------------------------------------------

    @property
    def current(self) -> Token:
        return self.tokens[self.pos]

    def peek(self, offset: int = 1) -> Token:
        return self.tokens[min(self.pos + offset, len(self.tokens) - 1)]

    @property
    def previous_end(self) -> int:
        return self.tokens[self.pos - 1].end if self.pos else 0

    def advance(self) -> Token:
        token = self.current
        if token.type is not TokenType.EOF:
            self.pos += 1
        return token

    def at_punct(self, value: str) -> bool:
        return self.current.is_punct(value)

    def accept_punct(self, value: str) -> bool:
        if self.at_punct(value):
            self.advance()
            return True
        return False

    def error(self, message: str) -> DeclarationSyntaxError:
        token = self.current
        found = "end of input" if token.type is TokenType.EOF else repr(token.value)
        return DeclarationSyntaxError(f"{message}, found {found}", token.line, token.column)

    def expect_punct(self, value: str) -> Token:
        if not self.at_punct(value):
            raise self.error(f"Expected {value!r}")
        return self.advance()

    def expect_identifier(self) -> Token:
        if self.current.type is not TokenType.IDENTIFIER:
            raise self.error("Expected an identifier")
        return self.advance()

    def span(self, start: int) -> str:
        """Source text from *start* to the end of the last consumed token."""
        return self.text[start : self.previous_end]

    # -- skipping ---------------------------------------------------------

    def skip_balanced(self) -> None:
        """Consume a bracketed group starting at the current open bracket."""
        opener = self.current.value
        closer = _CLOSERS[opener]
        self.expect_punct(opener)
        depth = 1
        while depth:
            token = self.advance()
            if token.type is TokenType.EOF:
                raise self.error(f"Expected {closer!r}")
            if token.is_punct(opener):
                depth += 1
            elif token.is_punct(closer):
                depth -= 1

    def skip_angle_brackets(self) -> None:
        """Consume a ``<...>`` type parameter or argument list."""
        self.expect_punct("<")
        depth = 1
        while depth:
            token = self.advance()
            if token.type is TokenType.EOF or token.is_punct(";") or token.is_punct("{"):
                raise self.error("Expected '>'")
            if token.is_punct("<"):
                depth += 1
            elif token.is_punct(">"):
                depth -= 1

    def skip_until(self, *stops: str) -> None:
        """Advance to the first top-level punctuation in *stops* (not consumed)."""
        while not any(self.at_punct(stop) for stop in stops):
            token = self.current
            if token.type is TokenType.EOF:
                raise self.error("Expected " + " or ".join(repr(s) for s in stops))
            if token.type is TokenType.PUNCT and token.value in _CLOSERS:
                self.skip_balanced()
            elif token.type is TokenType.PUNCT and token.value in (")", "]", "}"):
                raise self.error("Unbalanced " + repr(token.value))
            else:
                self.advance()

    def skip_statement(self) -> None:
        """Consume everything up to and including the next top-level ``;``."""
        self.skip_until(";")
        self.advance()

    def skip_body(self) -> None:
        """Consume a member body: ``;``, a ``{...}`` block, or ``=> expr;``."""
        if self.accept_punct(";"):
            return
        if self.at_punct("{"):
            self.skip_balanced()
            return
        if self.accept_punct("=>"):
            self.skip_statement()
            return
        raise self.error("Expected ';', '{' or '=>'")

    def skip_modifiers(self) -> None:
        while self.current.type is TokenType.IDENTIFIER and self.current.value in MODIFIERS:
            # ``new()`` / ``ref`` in type position are not modifiers here.
            if self.peek().is_punct("("):
                break
            self.advance()

    # -- names, types, attributes -----------------------------------------

    def parse_name(self) -> str:
        """Parse a possibly qualified, possibly generic name; return its plain name."""
        plain = self.expect_identifier().value
        if self.accept_punct("::"):
            plain = self.expect_identifier().value
        if self.at_punct("<"):
            self.skip_angle_brackets()
        while self.at_punct(".") and self.peek().type is TokenType.IDENTIFIER:
            self.advance()
            plain = self.advance().value
            if self.at_punct("<"):
                self.skip_angle_brackets()
        return plain

    def parse_type(self) -> TypeReference:
        start = self.current.start
        if self.at_punct("("):
            self.skip_balanced()
            plain = self.span(start)
        else:
            plain = self.parse_name()

        while True:
            if self.at_punct("?") or self.at_punct("*"):
                self.advance()
            elif self.at_punct("[") and (self.peek().is_punct("]") or self.peek().is_punct(",")):
                self.skip_balanced()
            else:
                break
        return TypeReference(text=self.span(start), plain_name=plain)

    def parse_attribute_lists(self) -> frozenset[str]:
        """Consume ``[...]`` attribute lists and return the attribute plain names."""
        names: set[str] = set()
        while self.accept_punct("["):
            if self.current.type is TokenType.IDENTIFIER and self.peek().is_punct(":"):
                self.advance()
                self.advance()
            while not self.at_punct("]"):
                names.add(self.parse_name())
                if self.at_punct("("):
                    self.skip_balanced()
                if not self.accept_punct(","):
                    break
            self.expect_punct("]")
        return frozenset(names)

    # -- top level ----------------------------------------------------------

    def parse_unit(self) -> DeclarationUnit:
        nodes: list[TypeDeclaration] = []
        while self.current.type is not TokenType.EOF:
            nodes.append(self.parse_top_level())
        return DeclarationUnit(top_level_nodes=tuple(nodes))

    def parse_top_level(self) -> TypeDeclaration:
        start = self.current.start

        if self.current.is_word("global") and self.peek().is_word("using"):
            self.advance()
        if self.current.is_word("using"):
            self.advance()
            name_start = self.current.start
            self.skip_until(";")
            name = self.text[name_start : self.previous_end]
            self.advance()
            return self._simple_node(DeclarationKind.USING, name, start)

        if self.current.is_word("namespace"):
            self.advance()
            name_start = self.current.start
            self.parse_name()
            name = self.span(name_start)
            if not self.accept_punct(";"):
                if not self.at_punct("{"):
                    raise self.error("Expected '{' or ';'")
                self.skip_balanced()
                self.accept_punct(";")
            return self._simple_node(DeclarationKind.NAMESPACE, name, start)

        self.parse_attribute_lists()
        self.skip_modifiers()

        if self.current.is_word("delegate"):
            self.advance()
            self.parse_type()
            name = self.expect_identifier().value
            self.skip_statement()
            return self._simple_node(DeclarationKind.DELEGATE, name, start)

        kind = None
        if self.current.type is TokenType.IDENTIFIER:
            kind = _TYPE_KEYWORDS.get(self.current.value)
        if kind is None:
            raise self.error("Expected a type declaration")
        return self.parse_type_declaration(kind, start)

    def _simple_node(self, kind: DeclarationKind, name: str, start: int) -> TypeDeclaration:
        text = self.span(start)
        return TypeDeclaration(
            kind=kind,
            identifier_text=name,
            child_nodes=(DeclarationHeader(identifier_text=name, text=text),),
            text=text,
        )

    def parse_type_declaration(self, kind: DeclarationKind, start: int) -> TypeDeclaration:
        self.advance()
        if kind is DeclarationKind.RECORD and (
            self.current.is_word("class") or self.current.is_word("struct")
        ):
            self.advance()
        name = self.expect_identifier().value

        if self.at_punct("<"):
            self.skip_angle_brackets()
        if self.at_punct("("):
            self.skip_balanced()

        base_types: list[TypeReference] = []
        if self.accept_punct(":"):
            while True:
                base_types.append(self.parse_type())
                if self.at_punct("("):
                    self.skip_balanced()
                if not self.accept_punct(","):
                    break

        if self.current.is_word("where"):
            self.skip_until("{", ";")

        header = DeclarationHeader(identifier_text=name, text=self.span(start))
        children: list[DeclarationHeader | MemberNode] = [header]

        if not self.accept_punct(";"):
            if kind is DeclarationKind.INTERFACE:
                self.expect_punct("{")
                while not self.at_punct("}"):
                    if self.current.type is TokenType.EOF:
                        raise self.error("Expected '}'")
                    children.append(self.parse_member())
                self.advance()
            else:
                if not self.at_punct("{"):
                    raise self.error("Expected '{'")
                self.skip_balanced()
            self.accept_punct(";")

        return TypeDeclaration(
            kind=kind,
            identifier_text=name,
            child_nodes=tuple(children),
            base_types=tuple(base_types),
            text=self.span(start),
        )

    # -- interface members --------------------------------------------------

    def parse_member(self) -> MemberNode:
        start = self.current.start
        annotations = self.parse_attribute_lists()
        self.skip_modifiers()

        if self.current.is_word("event"):
            self.skip_statement()
            return OtherMember(text=self.span(start), kind=MemberKind.EVENT)

        if self.current.is_word("delegate"):
            self.skip_statement()
            return OtherMember(text=self.span(start), kind=MemberKind.NESTED_TYPE)

        if self.current.type is TokenType.IDENTIFIER and self.current.value in _TYPE_KEYWORDS:
            self.skip_until("{", ";")
            if self.at_punct("{"):
                self.skip_balanced()
            self.accept_punct(";")
            return OtherMember(text=self.span(start), kind=MemberKind.NESTED_TYPE)

        member_type = self.parse_type()

        if self.current.is_word("this"):
            self.advance()
            if not self.at_punct("["):
                raise self.error("Expected '['")
            self.skip_balanced()
            self.skip_body()
            return OtherMember(text=self.span(start), kind=MemberKind.INDEXER)

        if self.current.is_word("operator") or member_type.plain_name in ("implicit", "explicit"):
            self.skip_until("(")
            self.skip_balanced()
            self.skip_body()
            return OtherMember(text=self.span(start), kind=MemberKind.METHOD)

        name = self.expect_identifier().value
        while self.at_punct(".") and self.peek().type is TokenType.IDENTIFIER:
            # Explicit interface implementation: ``IFoo.Bar``.
            self.advance()
            name = self.advance().value

        if self.at_punct("<"):
            self.skip_angle_brackets()
        if self.at_punct("("):
            self.skip_balanced()
            if self.current.is_word("where"):
                self.skip_until(";", "{", "=>")
            self.skip_body()
            return OtherMember(text=self.span(start), kind=MemberKind.METHOD)

        if self.at_punct("{"):
            has_setter = self.parse_accessor_list()
            if self.accept_punct("="):
                self.skip_statement()
            return PropertyMember(
                identifier_text=name,
                type=member_type,
                has_setter=has_setter,
                annotation_names=annotations,
                text=self.span(start),
            )

        if self.accept_punct("=>"):
            self.skip_statement()
            return PropertyMember(
                identifier_text=name,
                type=member_type,
                has_setter=False,
                annotation_names=annotations,
                text=self.span(start),
            )

        if self.at_punct(";") or self.at_punct("=") or self.at_punct(","):
            self.skip_statement()
            return OtherMember(text=self.span(start), kind=MemberKind.FIELD)

        raise self.error("Expected a member body")

    def parse_accessor_list(self) -> bool:
        """Consume ``{ get; set; }``; return whether a ``set`` accessor exists."""
        self.expect_punct("{")
        has_setter = False
        while not self.accept_punct("}"):
            self.parse_attribute_lists()
            self.skip_modifiers()
            keyword = self.expect_identifier().value
            if keyword not in ("get", "set", "init", "add", "remove"):
                raise DeclarationSyntaxError(
                    f"Unknown accessor {keyword!r}",
                    self.tokens[self.pos - 1].line,
                    self.tokens[self.pos - 1].column,
                )
            has_setter = has_setter or keyword == "set"
            self.skip_body()
        return has_setter


def parse_declarations(text: str) -> DeclarationUnit:
    """Parse *text* into a :class:`DeclarationUnit`.

    Never raises for malformed input: a syntax error yields an empty unit
    whose ``diagnostics`` hold the error message.
    """
    try:
        return DeclarationParser(text).parse_unit()
    except DeclarationSyntaxError as exc:
        logger.debug("Declaration parse failed: %s", exc)
        return DeclarationUnit(diagnostics=(str(exc),))
