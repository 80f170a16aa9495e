"""Declaration parser adapter and source formatter for C#-style declarations."""

from rxvmgen.infrastructure.syntax.formatter import format_source
from rxvmgen.infrastructure.syntax.lexer import DeclarationSyntaxError, Token, TokenType, tokenize
from rxvmgen.infrastructure.syntax.parser import DeclarationParser, parse_declarations

__all__ = [
    "DeclarationParser",
    "DeclarationSyntaxError",
    "Token",
    "TokenType",
    "format_source",
    "parse_declarations",
    "tokenize",
]
