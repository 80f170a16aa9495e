"""Canonical re-indentation of generated C# source.

The formatter re-lexes the text (tolerantly, comments included) so braces
inside strings and comments never affect indentation, then rebuilds every
line from its brace depth:

- each line is indented by ``depth * indent``; a line starting with ``}``
  sits one level out
- runs of blank lines collapse to one, and blank lines directly after
  ``{`` or before ``}`` are dropped
- lines that start inside a multi-line token (block comment, verbatim
  string) are emitted untouched
- the result ends with exactly one newline

Formatting an already formatted text returns it unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass

from rxvmgen.infrastructure.syntax.lexer import tokenize

DEFAULT_INDENT = "    "


@dataclass(frozen=True)
class _Line:
    text: str
    verbatim: bool = False

    @property
    def blank(self) -> bool:
        return not self.verbatim and not self.text


def _layout(text: str, indent: str) -> list[_Line]:
    tokens = tokenize(text, tolerant=True, keep_comments=True)[:-1]  # without EOF
    lines: list[_Line] = []
    depth = 0
    index = 0
    offset = 0
    open_until = 0  # end offset of the last token seen

    for raw in text.split("\n"):
        line_end = offset + len(raw)
        starts_inside = open_until > offset

        on_line = []
        while index < len(tokens) and tokens[index].start < line_end:
            on_line.append(tokens[index])
            index += 1

        level = depth
        if not starts_inside and on_line and on_line[0].is_punct("}"):
            level = max(depth - 1, 0)

        for token in on_line:
            if token.is_punct("{"):
                depth += 1
            elif token.is_punct("}"):
                depth = max(depth - 1, 0)
            open_until = max(open_until, token.end)

        ends_inside = open_until > line_end
        if starts_inside:
            lines.append(_Line(raw, verbatim=True))
        else:
            body = raw.lstrip() if ends_inside else raw.strip()
            lines.append(_Line(indent * level + body if body else "", verbatim=ends_inside))

        offset = line_end + 1

    return lines


def format_source(text: str, *, indent: str = DEFAULT_INDENT) -> str:
    """Return *text* re-indented by brace depth with blank runs collapsed."""
    normalized = text.replace("\r\n", "\n")
    laid_out = _layout(normalized, indent)

    kept: list[_Line] = []
    for i, line in enumerate(laid_out):
        if line.blank:
            if not kept or kept[-1].blank or kept[-1].text.endswith("{"):
                continue
            following = next((n for n in laid_out[i + 1 :] if not n.blank), None)
            if following is None or following.text.lstrip().startswith("}"):
                continue
        kept.append(line)

    if not kept:
        return ""
    return "\n".join(line.text for line in kept) + "\n"
