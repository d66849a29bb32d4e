"""Extensible read table.

The reader is an ordered choice over leading-token handlers: for each token,
the first registered entry whose token type (and, when given, token text)
matches builds the datum. Embedding code adds literal syntaxes by registering
more entries on a table before parsing, for example a new `#` constant:

    table = default_read_table()
    table.define("hash", lambda tok, reader: Symbol("nothing"), value="#n")

Every Reader gets its own table, so registrations never leak between
interpreters.
"""

from __future__ import annotations

from typing import Callable, NamedTuple, Optional, TYPE_CHECKING

from glisp import SExpression
from glisp.types.nil import EMPTY_LIST
from glisp.types.pair import Pair, make_list
from glisp.types.symbol import Symbol
from glisp.types.vector import Vector

if TYPE_CHECKING:
    from glisp.reader.parser import Reader, Token

ReadHandler = Callable[["Token", "Reader"], SExpression]

CLOSERS: dict[str, str] = {
    "lparen": "rparen",
    "lbracket": "rbracket",
    "vector": "rparen",
}

QUOTE_FORMS: dict[str, Symbol] = {
    "'": Symbol("quote"),
    "`": Symbol("quasiquote"),
    ",": Symbol("unquote"),
    ",@": Symbol("unquote-splicing"),
}

HASH_CONSTANTS: dict[str, SExpression] = {
    "#t": True,
    "#f": False,
    "#v": None,
}


class ReadEntry(NamedTuple):
    token_type: str
    value: Optional[str]
    handler: ReadHandler


class ReadTable:
    """Ordered registry of leading-token handlers."""

    def __init__(self, entries: Optional[list[ReadEntry]] = None):
        self.entries: list[ReadEntry] = list(entries or [])

    def define(
        self,
        token_type: str,
        handler: ReadHandler,
        value: Optional[str] = None,
        prepend: bool = False,
    ) -> None:
        """Register a handler for tokens of `token_type` (and text `value`, if given)."""
        entry = ReadEntry(token_type, value, handler)
        if prepend:
            self.entries.insert(0, entry)
        else:
            self.entries.append(entry)

    def copy(self) -> ReadTable:
        return ReadTable(self.entries)

    def dispatch(self, token: "Token", reader: "Reader") -> SExpression:
        for entry in self.entries:
            if entry.token_type == token.type and (entry.value is None or entry.value == token.value):
                return entry.handler(token, reader)
        if token.type == "hash":
            raise reader.error(f"unknown hash syntax: {token.value}", token)
        raise reader.error(f"failed to parse {token.value!r}", token)


# -------------------------
# Built-in handlers
# -------------------------

def read_int(token: "Token", reader: "Reader") -> int:
    # Python ints are arbitrary precision, so there is no overflow case
    return int(token.value)


def read_float(token: "Token", reader: "Reader") -> float:
    return float(token.value)


def read_string(token: "Token", reader: "Reader") -> str:
    # Escapes are decoded by the lexer
    return token.value


def read_symbol(token: "Token", reader: "Reader") -> Symbol:
    return Symbol(token.value)


def read_list(token: "Token", reader: "Reader") -> SExpression:
    """Elements, optional `. tail`, then the closer matching the opener."""
    close = CLOSERS[token.type]
    items: list[SExpression] = []
    tail: SExpression = EMPTY_LIST
    while True:
        nxt = reader.peek()
        if nxt is None:
            raise reader.error("unterminated list", token)
        if nxt.type == close:
            reader.advance()
            break
        if nxt.type in ("rparen", "rbracket"):
            raise reader.error(f"mismatched delimiter {nxt.value!r}", nxt)
        if nxt.type == "dot":
            if not items:
                raise reader.error("unexpected '.'", nxt)
            reader.advance()
            tail = reader.read_datum(nxt)
            end = reader.advance()
            if end is None:
                raise reader.error("unterminated list", token)
            if end.type != close:
                raise reader.error(f"expected closing delimiter after dotted tail, got {end.value!r}", end)
            break
        items.append(reader.read_datum(token))
    return make_list(items, tail)


def read_vector(token: "Token", reader: "Reader") -> Vector:
    items: list[SExpression] = []
    while True:
        nxt = reader.peek()
        if nxt is None:
            raise reader.error("unterminated vector", token)
        if nxt.type == "rparen":
            reader.advance()
            return Vector(items)
        if nxt.type in ("rbracket", "dot"):
            raise reader.error(f"unexpected {nxt.value!r} in vector", nxt)
        items.append(reader.read_datum(token))


def read_quote(token: "Token", reader: "Reader") -> Pair:
    return make_list([QUOTE_FORMS[token.value], reader.read_datum(token)])


def _hash_constant(token: "Token", reader: "Reader") -> SExpression:
    return HASH_CONSTANTS[token.value]


def default_read_table() -> ReadTable:
    """A fresh table with the standard syntax, in match order."""
    table = ReadTable()
    table.define("int", read_int)
    table.define("float", read_float)
    table.define("string", read_string)
    table.define("lparen", read_list)
    table.define("lbracket", read_list)
    table.define("vector", read_vector)
    table.define("quote", read_quote)
    table.define("symbol", read_symbol)
    for text in HASH_CONSTANTS:
        table.define("hash", _hash_constant, value=text)
    return table
