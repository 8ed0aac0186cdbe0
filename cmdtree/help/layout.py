"""Separators and section headers.

In godoc style, headers must be recognized as section titles by the
documentation generator, which builds a table of contents out of them.
A header is a single unindented line surrounded by paragraphs, starting
with an upper-case letter and free of most punctuation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..constants import DEFAULT_WIDTH, SEPARATOR_CHAR
from ..models import Style

if TYPE_CHECKING:
    from ..textwriter import LineWriter

__all__ = ["first_rune_to_upper", "godoc_header", "is_doc_heading", "line_break"]

# Characters which prevent a line from being a heading
_FORBIDDEN = frozenset(";:!?+*/=[]{}_^°&§~%#@<\">\\")


def first_rune_to_upper(text: str) -> str:
    """Upper-case the first character of `text`."""
    return text[:1].upper() + text[1:]


def is_doc_heading(line: str) -> bool:
    """Return True if the documentation generator turns `line` into a heading."""
    line = line.strip()
    if not line or "\n" in line:
        return False
    if not (line[0].isalpha() and line[0].isupper()):
        return False
    if not line[-1].isalnum():
        return False
    if any(char in _FORBIDDEN for char in line):
        return False
    # "'" only as a possessive "'s"
    rest = line
    while (index := rest.find("'")) >= 0:
        if rest[index + 1 : index + 2] != "s" or rest[index + 2 : index + 3] not in ("", " "):
            return False
        rest = rest[index + 2 :]
    # "." only when followed by a non-space, e.g. "v1.2"
    rest = line
    while (index := rest.find(".")) >= 0:
        if rest[index + 1 : index + 2] in ("", " "):
            return False
        rest = rest[index + 1 :]
    return True


def godoc_header(path: str, short: str) -> str:
    """Return the section header for a command or topic.

    Combines the command path with the short description when the result is
    a valid heading, else falls back to the command path alone.
    """
    if not path:
        return first_rune_to_upper(short)
    if not short:
        return first_rune_to_upper(path)
    header = first_rune_to_upper(f"{path} - {short}")
    if not is_doc_heading(header):
        return first_rune_to_upper(path)
    return header


def line_break(writer: LineWriter, style: Style) -> None:
    """Write the separator between two sections of a documentation dump."""
    writer.flush()
    if style in (Style.COMPACT, Style.FULL):
        width = writer.width
        if width < 0:
            width = DEFAULT_WIDTH
        writer.write(SEPARATOR_CHAR * width + "\n")
    elif style == Style.GODOC:
        writer.write("\n")
    writer.flush()
