"""Primitive bridge: host callables exposed as Lisp functions.

A Primitive wraps a Python function taking Lisp values positionally and
returning a Lisp value (None is the void value). The arity is read from the
function signature, so fixed arities of any size and `*args` variadics both
work. Arity is checked before the call; a mismatch yields an argument-error
value naming the primitive and the arguments it received. Primitives do no
implicit coercion: type problems inside them are reported as type-error
values by the primitive itself.
"""

from __future__ import annotations

import inspect
from typing import Callable, Mapping

from glisp import LispValue
from glisp.types.lisp_error import argument_error
from glisp.types.symbol import Symbol


def _arity_of(fn: Callable) -> tuple[int, bool]:
    """(required positional count, accepts *args)."""
    required = 0
    variadic = False
    for p in inspect.signature(fn).parameters.values():
        if p.kind == p.VAR_POSITIONAL:
            variadic = True
        elif p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD) and p.default is p.empty:
            required += 1
    return required, variadic


class Primitive:
    __slots__ = ("fn", "name", "arity", "variadic")

    def __init__(self, fn: Callable[..., LispValue], name: str | None = None):
        self.fn = fn
        self.name = name or fn.__name__
        self.arity, self.variadic = _arity_of(fn)

    def call(self, args: list[LispValue]) -> LispValue:
        n = len(args)
        if n < self.arity or (n > self.arity and not self.variadic):
            return argument_error(self, args)
        return self.fn(*args)

    def __repr__(self):
        return f"#<primitive {self.name}>"


def primitive(name: str) -> Callable[[Callable[..., LispValue]], Primitive]:
    """Decorator form: @primitive("car") def car(x): ..."""

    def wrap(fn: Callable[..., LispValue]) -> Primitive:
        return Primitive(fn, name)

    return wrap


def wrap_primitives(mapping: Mapping[str, Callable[..., LispValue]]) -> dict[Symbol, Primitive]:
    """Turn a name -> callable table into bindings ready for Scope.update."""
    return {Symbol(name): Primitive(fn, name) for name, fn in mapping.items()}


def is_function(x: LispValue) -> bool:
    from glisp.types.closure import Closure
    return isinstance(x, (Primitive, Closure))
