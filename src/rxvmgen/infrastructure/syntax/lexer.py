"""Lexer for the C# declaration subset used by interface contracts.

Whitespace is dropped; comments and preprocessor directives (``#region``,
``#nullable enable``, ...) are trivia and only returned when asked for
(the formatter needs them, the parser does not). A directive must open
its line. A stray ``#`` or any other character outside the token grammar
is a syntax error unless the lexer runs in tolerant mode, where it
becomes an ``UNKNOWN`` token and unterminated literals run to the end of
their line or input.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum


class TokenType(StrEnum):
    IDENTIFIER = "identifier"
    NUMBER = "number"
    STRING = "string"
    CHAR = "char"
    PUNCT = "punct"
    COMMENT = "comment"
    UNKNOWN = "unknown"
    EOF = "eof"


@dataclass(frozen=True)
class Token:
    """A lexed token with its half-open source span ``[start, end)``."""

    type: TokenType
    value: str
    start: int
    end: int
    line: int
    column: int

    def is_punct(self, value: str) -> bool:
        return self.type is TokenType.PUNCT and self.value == value

    def is_word(self, value: str) -> bool:
        return self.type is TokenType.IDENTIFIER and self.value == value


class DeclarationSyntaxError(ValueError):
    """Raised when declaration text cannot be lexed or parsed."""

    def __init__(self, message: str, line: int, column: int) -> None:
        super().__init__(f"{message} (line {line}, column {column})")
        self.line = line
        self.column = column


# Longest operators first so ``??=`` wins over ``??`` and ``?``.
# ``>>`` and ``<<`` are deliberately absent: nested generics close with
# two separate ``>`` tokens.
_OPERATORS = [
    "??=", "<<=",
    "::", "=>", "??", "?.", "==", "!=", "<=", ">=", "&&", "||", "++", "--",
    "+=", "-=", "*=", "/=", "%=", "&=", "|=", "^=", "->",
]  # fmt: skip
_SINGLE_PUNCT = "{}()[];,.:?<>=+-*/%!~&|^"
_DIRECTIVES = [
    "region", "endregion", "nullable", "pragma", "define", "undef",
    "if", "elif", "else", "endif", "warning", "error", "line",
]  # fmt: skip

_TOKEN_SPEC: list[tuple[str, str]] = [
    ("ws", r"\s+"),
    ("line_comment", r"//[^\n]*"),
    ("block_comment", r"/\*.*?\*/"),
    ("directive", r"#[ \t]*(?:" + "|".join(_DIRECTIVES) + r")\b[^\n]*"),
    ("verbatim_string", r'(?:\$@|@\$|@)"(?:[^"]|"")*"'),
    ("string", r'\$?"(?:[^"\\\n]|\\.)*"'),
    ("char", r"'(?:[^'\\\n]|\\.)+'"),
    ("identifier", r"@?[^\W\d]\w*"),
    ("number", r"0[xXbB][0-9a-fA-F_]+[A-Za-z]*|\d[\d_]*(?:\.\d+)?(?:[eE][+-]?\d+)?[A-Za-z]*"),
    ("punct", "|".join(re.escape(op) for op in _OPERATORS) + "|[" + re.escape(_SINGLE_PUNCT) + "]"),
]
_MASTER = re.compile("|".join(f"(?P<{name}>{pattern})" for name, pattern in _TOKEN_SPEC), re.DOTALL)

_KIND_TO_TYPE: dict[str, TokenType] = {
    "line_comment": TokenType.COMMENT,
    "block_comment": TokenType.COMMENT,
    "directive": TokenType.COMMENT,
    "verbatim_string": TokenType.STRING,
    "string": TokenType.STRING,
    "char": TokenType.CHAR,
    "identifier": TokenType.IDENTIFIER,
    "number": TokenType.NUMBER,
    "punct": TokenType.PUNCT,
}

# Unterminated literals in tolerant mode.
_OPEN_BLOCK_COMMENT = re.compile(r"/\*.*", re.DOTALL)
_OPEN_VERBATIM = re.compile(r'(?:\$@|@\$|@)".*', re.DOTALL)
_OPEN_STRING = re.compile(r"""\$?["'][^\n]*""")


def tokenize(
    text: str,
    *,
    tolerant: bool = False,
    keep_comments: bool = False,
) -> list[Token]:
    """Split *text* into tokens, always ending with an ``EOF`` token.

    Raises:
        DeclarationSyntaxError: On an unexpected character or unterminated
            literal, unless *tolerant* is set.
    """
    tokens: list[Token] = []
    pos = 0
    line = 1
    line_start = 0
    length = len(text)

    while pos < length:
        match = _MASTER.match(text, pos)
        kind = match.lastgroup if match else None
        if kind == "punct" and text.startswith("/*", pos):
            # Only an unterminated block comment reaches here.
            match = kind = None
        elif kind == "directive" and text[line_start:pos].strip():
            # Mid-line ``#``.
            match = kind = None

        if match is None or kind is None:
            column = pos - line_start + 1
            if not tolerant:
                msg = (
                    "Unterminated comment"
                    if text.startswith("/*", pos)
                    else f"Unexpected character {text[pos]!r}"
                )
                raise DeclarationSyntaxError(msg, line, column)
            match = (
                _OPEN_BLOCK_COMMENT.match(text, pos)
                or _OPEN_VERBATIM.match(text, pos)
                or _OPEN_STRING.match(text, pos)
            )
            if match is None:
                token_type, end = TokenType.UNKNOWN, pos + 1
            else:
                token_type = TokenType.COMMENT if text.startswith("/*", pos) else TokenType.STRING
                end = match.end()
            if keep_comments or token_type is not TokenType.COMMENT:
                tokens.append(Token(token_type, text[pos:end], pos, end, line, column))
        else:
            end = match.end()
            if kind != "ws":
                token_type = _KIND_TO_TYPE[kind]
                if keep_comments or token_type is not TokenType.COMMENT:
                    column = pos - line_start + 1
                    tokens.append(Token(token_type, match.group(), pos, end, line, column))

        newlines = text.count("\n", pos, end)
        if newlines:
            line += newlines
            line_start = text.rfind("\n", pos, end) + 1
        pos = end

    tokens.append(Token(TokenType.EOF, "", length, length, line, length - line_start + 1))
    return tokens
