"""Whitespace normalization shared by the classifier and interface renderer."""

from __future__ import annotations

_TRAILING = " \t"


def chomp(text: str) -> str:
    """Strip trailing spaces/tabs, and drop long blank lines from multi-line text.

    Single-line input only loses trailing spaces and tabs. Multi-line input
    is split on ``\\n``, each line is right-trimmed, and lines that are
    whitespace-only *and* longer than two characters are dropped. Short
    blank-ish lines (for example a lone ``\\r`` left over from CRLF input)
    survive. Non-whitespace content and line order are never changed.
    """
    if "\n" not in text:
        return text.rstrip(_TRAILING)

    lines = (line.rstrip(_TRAILING) for line in text.split("\n"))
    return "\n".join(line for line in lines if not (len(line) > 2 and line.isspace()))
