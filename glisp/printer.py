"""Printer: the written and displayed forms of Lisp values.

`to_write` produces text the reader parses back (strings re-quoted);
`to_display` is the human form (strings raw). Pairs that loop back onto a pair
still being printed are rendered as `...` so cyclic structure terminates.
"""

from __future__ import annotations

import math
from decimal import Decimal
from fractions import Fraction
from io import StringIO

from glisp import LispValue
from glisp.types.closure import Closure
from glisp.types.custom import Custom
from glisp.types.environment import Scope
from glisp.types.lisp_error import LispError
from glisp.types.macro import Macro
from glisp.types.nil import EMPTY_LIST, Constant
from glisp.types.pair import Pair
from glisp.types.ports import InputPort, OutputPort
from glisp.types.primitive import Primitive
from glisp.types.symbol import Symbol
from glisp.types.vector import Vector

STRING_ESCAPES: dict[str, str] = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\t": "\\t",
    "\r": "\\r",
    "\0": "\\0",
}


def quote_string(s: str) -> str:
    with StringIO() as buffer:
        buffer.write('"')
        for c in s:
            esc = STRING_ESCAPES.get(c)
            if esc is not None:
                buffer.write(esc)
            elif ord(c) < 0x20 or ord(c) == 0x7F:
                buffer.write(f"\\x{ord(c):02x}")
            else:
                buffer.write(c)
        buffer.write('"')
        return buffer.getvalue()


def format_float(x: float) -> str:
    """Shortest round-tripping digits, always positional: 1e-05 prints as 0.00001."""
    if not math.isfinite(x):
        return repr(x)
    text = format(Decimal(repr(x)), "f")
    return text if "." in text else text + ".0"


def _write(obj: LispValue, buffer: StringIO, write: bool, active: set[int]) -> None:
    if obj is None:
        buffer.write("#v")
    elif obj is True:
        buffer.write("#t")
    elif obj is False:
        buffer.write("#f")
    elif isinstance(obj, str):
        buffer.write(quote_string(obj) if write else obj)
    elif isinstance(obj, Symbol):
        buffer.write(obj.id)
    elif isinstance(obj, int):
        buffer.write(repr(obj))
    elif isinstance(obj, float):
        buffer.write(format_float(obj))
    elif isinstance(obj, Fraction):
        buffer.write(f"{obj.numerator}/{obj.denominator}")
    elif isinstance(obj, Pair):
        _write_pair(obj, buffer, write, active)
    elif isinstance(obj, Vector):
        if id(obj) in active:
            buffer.write("...")
            return
        active.add(id(obj))
        buffer.write("#(")
        for i, x in enumerate(obj.items):
            if i:
                buffer.write(" ")
            _write(x, buffer, write, active)
        buffer.write(")")
        active.discard(id(obj))
    elif isinstance(obj, Closure):
        buffer.write("#<closure ")
        _write(obj.params, buffer, write, active)
        buffer.write(">")
    elif isinstance(obj, LispError):
        buffer.write(f"{obj.kind}: ")
        _write(obj.message, buffer, False, active)
    elif isinstance(obj, (Constant, Primitive, Macro, Custom, InputPort, OutputPort)):
        buffer.write(repr(obj))
    elif isinstance(obj, Scope):
        buffer.write(str(obj))
    else:
        buffer.write(f"#<host {obj!r}>")


def _write_pair(obj: Pair, buffer: StringIO, write: bool, active: set[int]) -> None:
    """Iterate the rest chain; recurse only into elements."""
    entered: list[int] = []
    buffer.write("(")
    cur: LispValue = obj
    sep = False
    while isinstance(cur, Pair):
        if id(cur) in active:
            buffer.write(" . ..." if sep else "...")
            break
        active.add(id(cur))
        entered.append(id(cur))
        if sep:
            buffer.write(" ")
        _write(cur.first, buffer, write, active)
        sep = True
        cur = cur.rest
    else:
        if cur is not EMPTY_LIST:
            buffer.write(" . ")
            _write(cur, buffer, write, active)
    buffer.write(")")
    for i in entered:
        active.discard(i)


def to_write(obj: LispValue) -> str:
    with StringIO() as buffer:
        _write(obj, buffer, True, set())
        return buffer.getvalue()


def to_display(obj: LispValue) -> str:
    with StringIO() as buffer:
        _write(obj, buffer, False, set())
        return buffer.getvalue()
