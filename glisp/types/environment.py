"""Lexical scopes for glisp.

A Scope stores bindings of Symbols to evaluated Lisp values and supports
nested scopes via an `outer` link. Closures share (never copy) the Scope they
were created in, so `define` and `set!` through any alias are visible to all
of them. Scopes are not internally synchronised; callers that share a scope
chain between threads must serialise access themselves.
"""

from __future__ import annotations

from io import StringIO
from typing import Optional

from glisp import LispValue
from glisp.errors import GlispFatalError
from glisp.types.lisp_error import LispError, error
from glisp.types.symbol import Symbol


class Scope:
    """Hierarchical mapping from Symbols to Lisp values."""

    __slots__ = ("vars", "outer")

    def __init__(self, outer: Optional[Scope] = None):
        self.vars: dict[Symbol, LispValue] = {}
        self.outer: Scope | None = outer

    def define(self, name: Symbol, value: LispValue) -> None:
        """Bind `name` to `value` in this frame only, creating or overwriting."""
        if not isinstance(name, Symbol):
            raise GlispFatalError(f"Cannot bind non-symbol {name!r}")
        self.vars[name] = value

    def find(self, name: Symbol) -> Optional[Scope]:
        """Find the nearest scope in the chain that binds `name`."""
        scope: Optional[Scope] = self
        while scope is not None:
            if name in scope.vars:
                return scope
            scope = scope.outer
        return None

    def lookup(self, name: Symbol) -> LispValue:
        """Value bound to `name`, or an `error` value if no frame binds it."""
        scope = self.find(name)
        if scope is None:
            return error(f"unknown variable: {name}")
        return scope.vars[name]

    def set(self, name: Symbol, value: LispValue) -> LispError | None:
        """Assign to an existing binding; never creates one."""
        scope = self.find(name)
        if scope is None:
            return error(f"unknown variable: {name}")
        scope.vars[name] = value
        return None

    def update(self, mapping: dict[Symbol, LispValue]) -> None:
        """Bulk-define a mapping of Symbol -> value in the current frame."""
        for k, v in mapping.items():
            self.define(k, v)

    def root(self) -> Scope:
        scope = self
        while scope.outer is not None:
            scope = scope.outer
        return scope

    def _write_vars(self, buffer: StringIO) -> None:
        """Write this frame's variable names into the buffer."""
        buffer.write("{")
        buffer.write(", ".join(str(k) for k in self.vars))
        buffer.write("}")

    def __str__(self) -> str:
        return "#<environment>"

    def __repr__(self) -> str:
        """Chain representation for debugging purposes."""
        with StringIO() as buffer:
            buffer.write("<Scope chain: ")
            scope: Optional[Scope] = self
            first = True
            while scope is not None:
                if not first:
                    buffer.write(" -> ")
                scope._write_vars(buffer)
                first = False
                scope = scope.outer
            buffer.write(">")
            return buffer.getvalue()
