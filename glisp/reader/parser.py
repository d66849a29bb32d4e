"""
  Lisp Reader, Lexer and Parser

- Streaming: reads characters from an InputPort on demand and stops right
  after the datum, so consecutive reads on one port see consecutive data.
- Emits the runtime value model directly:

    - lists -> chains of Pair ending in EMPTY_LIST (or the dotted tail)
    - [a b] -> same as (a b); brackets must close brackets
    - #(a b) -> Vector
    - symbols -> interned Symbol
    - strings -> str (escapes decoded)
    - integers -> int (arbitrary precision), decimals -> float
    - #t / #f / #v -> True / False / None
    - 'x `x ,x ,@x -> (quote x) (quasiquote x) (unquote x) (unquote-splicing x)

Symbol tokens are maximal runs of characters other than whitespace and
( ) [ ] " ; ' ` , -- a `#` or `@` inside a symbol is ordinary, a leading `#`
starts a hash token instead.
"""

from __future__ import annotations

import logging
import re
from typing import Iterator, NamedTuple, Optional

from glisp import SExpression
from glisp.errors import GlispSyntaxError
from glisp.types.nil import EOF_OBJECT
from glisp.types.pair import make_list
from glisp.types.ports import InputPort
from glisp.reader.reader_macros import ReadTable, default_read_table

logger = logging.getLogger(__name__)

DELIMITERS = frozenset("()[]\";'`,")

INT_RE = re.compile(r"-?[0-9]+")
FLOAT_RE = re.compile(r"-?[0-9]+\.[0-9]+")
ESCAPE_HEX_RE = re.compile(r"[0-9A-Fa-f]+")

SIMPLE_ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "0": "\0",
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "\\": "\\",
    '"': '"',
    "'": "'",
}

HEX_ESCAPE_WIDTHS: dict[str, int] = {"x": 2, "u": 4, "U": 8}

SINGLE_CHAR_TOKENS: dict[str, str] = {
    "(": "lparen",
    ")": "rparen",
    "[": "lbracket",
    "]": "rbracket",
    "'": "quote",
    "`": "quote",
}


class Token(NamedTuple):
    type: str
    value: str
    pos: int
    line: int
    column: int


def _is_symbol_char(c) -> bool:
    return c is not EOF_OBJECT and not c.isspace() and c not in DELIMITERS


class Lexer:
    """Token generator over an InputPort: whitespace and `;` comments are discarded."""

    def __init__(self, port: InputPort):
        self.port = port

    def _error(self, message: str, pos: int, line: int, column: int) -> GlispSyntaxError:
        return GlispSyntaxError(message, pos, line, column)

    def _skip_whitespace_and_comments(self) -> None:
        port = self.port
        while True:
            c = port.peek_char()
            if c is EOF_OBJECT:
                return
            if c.isspace():
                port.read_char()
            elif c == ";":
                while c is not EOF_OBJECT and c != "\n":
                    port.read_char()
                    c = port.peek_char()
            else:
                return

    def _read_run(self) -> str:
        chars = []
        while _is_symbol_char(self.port.peek_char()):
            chars.append(self.port.read_char())
        return "".join(chars)

    def _read_string(self, pos: int, line: int, column: int) -> str:
        port = self.port
        chars = []
        while True:
            c = port.read_char()
            if c is EOF_OBJECT:
                raise self._error("unterminated string", pos, line, column)
            if c == '"':
                return "".join(chars)
            if c != "\\":
                chars.append(c)
                continue
            esc = port.read_char()
            if esc is EOF_OBJECT:
                raise self._error("unterminated string", pos, line, column)
            if esc in SIMPLE_ESCAPES:
                chars.append(SIMPLE_ESCAPES[esc])
            elif esc in HEX_ESCAPE_WIDTHS:
                digits = "".join(
                    d for d in (port.read_char() for _ in range(HEX_ESCAPE_WIDTHS[esc])) if d is not EOF_OBJECT
                )
                if len(digits) != HEX_ESCAPE_WIDTHS[esc] or not ESCAPE_HEX_RE.fullmatch(digits):
                    raise self._error(f"invalid escape \\{esc}{digits}", port.pos, port.line, port.column)
                try:
                    chars.append(chr(int(digits, 16)))
                except ValueError:
                    raise self._error(f"invalid escape \\{esc}{digits}", port.pos, port.line, port.column) from None
            else:
                raise self._error(f"invalid escape \\{esc}", port.pos, port.line, port.column)

    def next_token(self) -> Optional[Token]:
        """Next token, or None at end of input."""
        self._skip_whitespace_and_comments()
        port = self.port
        pos, line, column = port.pos, port.line, port.column
        c = port.peek_char()
        if c is EOF_OBJECT:
            return None

        if c in SINGLE_CHAR_TOKENS:
            port.read_char()
            return Token(SINGLE_CHAR_TOKENS[c], c, pos, line, column)

        # ----------------------
        # Handle unquote / unquote-splicing
        # ----------------------
        if c == ",":
            port.read_char()
            if port.peek_char() == "@":
                port.read_char()
                return Token("quote", ",@", pos, line, column)
            return Token("quote", ",", pos, line, column)

        if c == '"':
            port.read_char()
            return Token("string", self._read_string(pos, line, column), pos, line, column)

        if c == "#":
            port.read_char()
            if port.peek_char() == "(":
                port.read_char()
                return Token("vector", "#(", pos, line, column)
            return Token("hash", "#" + self._read_run(), pos, line, column)

        text = self._read_run()
        if text == ".":
            return Token("dot", text, pos, line, column)
        if INT_RE.fullmatch(text):
            return Token("int", text, pos, line, column)
        if FLOAT_RE.fullmatch(text):
            return Token("float", text, pos, line, column)
        return Token("symbol", text, pos, line, column)

    def __iter__(self) -> Iterator[Token]:
        while (tok := self.next_token()) is not None:
            yield tok


def lex(source: str) -> Iterator[Token]:
    """Tokens of a whole string."""
    return iter(Lexer(InputPort.from_string(source)))


class Reader:
    """Reads one datum at a time from a port, dispatching through a read table."""

    def __init__(self, port: InputPort, read_table: Optional[ReadTable] = None):
        self.port = port
        self.lexer = Lexer(port)
        self.read_table: ReadTable = read_table if read_table is not None else default_read_table()
        self.buffer: list[Token] = []

    def peek(self) -> Optional[Token]:
        if not self.buffer:
            tok = self.lexer.next_token()
            if tok is None:
                return None
            self.buffer.append(tok)
        return self.buffer[0]

    def advance(self) -> Optional[Token]:
        if self.buffer:
            return self.buffer.pop(0)
        return self.lexer.next_token()

    def error(self, message: str, token: Token) -> GlispSyntaxError:
        return GlispSyntaxError(message, token.pos, token.line, token.column)

    def read_datum(self, context: Token) -> SExpression:
        """A datum that must be present, e.g. a list element or a quoted form."""
        tok = self.advance()
        if tok is None:
            raise GlispSyntaxError(
                f"unexpected end of input after {context.value!r}",
                self.port.pos, self.port.line, self.port.column,
            )
        return self.read_table.dispatch(tok, self)

    def read(self) -> SExpression:
        """Next datum, or EOF_OBJECT when no token remains."""
        tok = self.advance()
        if tok is None:
            return EOF_OBJECT
        return self.read_table.dispatch(tok, self)

    def read_all(self) -> list[SExpression]:
        return list(self)

    def __iter__(self) -> Iterator[SExpression]:
        while (expr := self.read()) is not EOF_OBJECT:
            yield expr


def read(port: InputPort, read_table: Optional[ReadTable] = None) -> SExpression:
    return Reader(port, read_table).read()


def read_string(source: str, read_table: Optional[ReadTable] = None) -> SExpression:
    return read(InputPort.from_string(source), read_table)


def read_all(port: InputPort, read_table: Optional[ReadTable] = None) -> SExpression:
    """All remaining data on the port as a Lisp list."""
    data = Reader(port, read_table).read_all()
    logger.debug("read %d top-level forms", len(data))
    return make_list(data)
