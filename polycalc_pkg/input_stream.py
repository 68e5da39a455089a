"""Buffered character reader with line/column tracking.

The stream hands out one character at a time. ``line_number`` counts the
newlines consumed so far and ``column_number`` the characters consumed on
the current line, so the next unread character sits at
``(line_number + 1, column_number + 1)`` in 1-based terms.
"""

from __future__ import annotations

import io
from typing import TextIO

from . import config
from .types import ParseError

EOF = ""


class InputStream:
    """Character reader over a text source."""

    def __init__(self, source: TextIO, buffer_size: int | None = None) -> None:
        self._source = source
        self._buffer_size = max(1, buffer_size or config.INPUT_BUFFER_SIZE)
        self._buffer = ""
        self._position = 0
        self._exhausted = False
        self.line_number = 0
        self.column_number = 0

    @classmethod
    def from_string(cls, text: str) -> "InputStream":
        return cls(io.StringIO(text))

    @property
    def line(self) -> int:
        """1-based line of the next unread character."""
        return self.line_number + 1

    @property
    def next_column(self) -> int:
        """1-based column of the next unread character."""
        return self.column_number + 1

    def _fill(self) -> bool:
        if self._position < len(self._buffer):
            return True
        if self._exhausted:
            return False
        chunk = self._source.read(self._buffer_size)
        if not chunk:
            self._exhausted = True
            self._buffer = ""
            self._position = 0
            return False
        self._buffer = chunk
        self._position = 0
        return True

    def peek(self) -> str:
        """Return the next character without consuming it, or ``EOF``."""
        if not self._fill():
            return EOF
        return self._buffer[self._position]

    def read(self) -> str:
        """Consume and return the next character, or ``EOF``."""
        c = self.peek()
        if c == EOF:
            return c
        self._position += 1
        if c == "\n":
            self.line_number += 1
            self.column_number = 0
        else:
            self.column_number += 1
        return c

    def skip_line(self) -> None:
        """Discard everything up to and including the next newline."""
        c = self.read()
        while c not in ("\n", EOF):
            c = self.read()

    def at_eof(self) -> bool:
        return self.peek() == EOF

    def parse_error(
        self, column: int | None = None, code: str = "MALFORMED_LITERAL"
    ) -> ParseError:
        """Discard the rest of the current line and build the error to raise.

        Args:
            column: 1-based column of the offending character (defaults to the
                next unread character)
            code: Error code stored on the exception

        Returns:
            ParseError located on the current line
        """
        line = self.line
        if column is None:
            column = self.next_column
        self.skip_line()
        return ParseError(line, column, code)
