"""Line-oriented text writer with word wrapping and indentation.

Text written to a `LineWriter` is laid out line by line:

- consecutive unindented lines form a paragraph, which is joined and
  word-wrapped to the target width;
- lines starting with whitespace are verbatim: emitted as-is, never wrapped;
- blank lines separate paragraphs; runs of blank lines collapse to one, and
  blank lines before the first output line or at the very end are dropped.

Indents apply to every output line: the first indent to the first line of a
paragraph, the second one to the following lines.
"""

from __future__ import annotations

import textwrap
from typing import TextIO

__all__ = ["LineWriter"]


class LineWriter:
    """Word-wrapping writer on top of a text stream.

    A negative width means unlimited: paragraphs are joined but never wrapped.
    """

    def __init__(self, out: TextIO, width: int) -> None:
        self._out = out
        self._width = width
        self._partial = ""  # text after the last newline
        self._paragraph: list[str] = []
        self._line_index = 0  # output lines emitted for the current paragraph
        self._indents: tuple[str, str] = ("", "")
        self._verbatim = False
        self._started = False
        self._blank_pending = False

    @property
    def width(self) -> int:
        return self._width

    def write(self, text: str) -> int:
        """Write `text`; complete lines are laid out immediately."""
        *lines, self._partial = (self._partial + text).split("\n")
        for line in lines:
            self._add_line(line.rstrip("\r"))
        return len(text)

    def flush(self) -> None:
        """Terminate the current line and paragraph."""
        if self._partial:
            line, self._partial = self._partial, ""
            self._add_line(line)
        self._end_paragraph()
        self._out.flush()

    def set_indents(self, *indents: str) -> None:
        """Flush, then indent subsequent lines.

        `set_indents()` removes the indentation, `set_indents(first)` indents
        every line the same way, `set_indents(first, rest)` uses `rest` for
        the continuation lines of a paragraph.
        """
        self.flush()
        if not indents:
            self._indents = ("", "")
        else:
            self._indents = (indents[0], indents[1] if len(indents) > 1 else indents[0])

    def force_verbatim(self, verbatim: bool) -> None:
        """Flush, then enable or disable verbatim mode.

        In verbatim mode every line is emitted as-is, unwrapped.
        """
        self.flush()
        self._verbatim = verbatim

    def write_line(self, text: str) -> None:
        """Flush, then emit `text` and a newline as-is, even when blank."""
        self.flush()
        self._emit(text)
        self.flush()

    def _add_line(self, line: str) -> None:
        if not line.strip():
            self._end_paragraph()
            if self._started:
                self._blank_pending = True
            return
        if self._verbatim or line[0].isspace():
            self._end_paragraph()
            self._emit(line)
        else:
            self._paragraph.append(line)

    def _end_paragraph(self) -> None:
        if self._paragraph:
            text, self._paragraph = " ".join(self._paragraph), []
            for line in self._wrap(text):
                self._emit(line, indented=True)
        self._line_index = 0

    def _wrap(self, text: str) -> list[str]:
        first, rest = self._indents
        if self._width < 0:
            return [first + text]
        wrapper = textwrap.TextWrapper(
            width=max(self._width, 1),
            initial_indent=first,
            subsequent_indent=rest,
            break_long_words=False,
            break_on_hyphens=False,
        )
        return wrapper.wrap(text) or [first]

    def _emit(self, line: str, indented: bool = False) -> None:
        if self._blank_pending:
            self._out.write("\n")
            self._blank_pending = False
        if not indented:
            line = self._indents[0 if self._line_index == 0 else 1] + line
        self._out.write(line.rstrip() + "\n")
        self._line_index += 1
        self._started = True
