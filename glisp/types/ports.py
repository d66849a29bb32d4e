"""Port capability over Python text streams.

Closed ports raise OSError("port closed"); the port primitives turn OSErrors
into system-error values.
"""

from __future__ import annotations

import io
from typing import TextIO

from glisp.types.nil import EOF_OBJECT


class InputPort:
    """Character input with one character of lookahead and position tracking."""

    __slots__ = ("_stream", "_peeked", "_eof", "_owns_stream", "closed", "pos", "line", "column")

    def __init__(self, stream: TextIO, owns_stream: bool = False):
        self._stream = stream
        self._peeked: str | None = None
        self._eof = False
        self._owns_stream = owns_stream
        self.closed = False
        self.pos = 0
        self.line = 1
        self.column = 1

    @classmethod
    def from_string(cls, text: str) -> InputPort:
        return cls(io.StringIO(text), owns_stream=True)

    def _check_open(self) -> None:
        if self.closed:
            raise OSError("port closed")

    def peek_char(self):
        """Next character without consuming it, or EOF_OBJECT."""
        self._check_open()
        if self._peeked is None:
            if self._eof:
                return EOF_OBJECT
            c = self._stream.read(1)
            if c == "":
                self._eof = True
                return EOF_OBJECT
            self._peeked = c
        return self._peeked

    def read_char(self):
        c = self.peek_char()
        if c is EOF_OBJECT:
            return c
        self._peeked = None
        self.pos += 1
        if c == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return c

    def read_line(self):
        """Characters up to (not including) the next newline, or EOF_OBJECT at end."""
        if self.peek_char() is EOF_OBJECT:
            return EOF_OBJECT
        chars = []
        while True:
            c = self.read_char()
            if c is EOF_OBJECT or c == "\n":
                break
            chars.append(c)
        return "".join(chars)

    @property
    def eof(self) -> bool:
        return self.peek_char() is EOF_OBJECT

    def close(self) -> None:
        self._check_open()
        self.closed = True
        if self._owns_stream:
            self._stream.close()

    def __repr__(self):
        return "#<input-port>"


class OutputPort:
    __slots__ = ("_stream", "_owns_stream", "closed")

    def __init__(self, stream: TextIO, owns_stream: bool = False):
        self._stream = stream
        self._owns_stream = owns_stream
        self.closed = False

    def _check_open(self) -> None:
        if self.closed:
            raise OSError("port closed")

    def write(self, text: str) -> None:
        self._check_open()
        self._stream.write(text)

    def flush(self) -> None:
        self._check_open()
        self._stream.flush()

    def close(self) -> None:
        self._check_open()
        self._stream.flush()
        self.closed = True
        if self._owns_stream:
            self._stream.close()

    def __repr__(self):
        return "#<output-port>"
