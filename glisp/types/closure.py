"""Closure representation and argument binding."""

from __future__ import annotations

from glisp import SExpression, LispValue
from glisp.types.environment import Scope
from glisp.types.lisp_error import LispError, argument_error, type_error
from glisp.types.nil import EMPTY_LIST
from glisp.types.pair import Pair, make_list
from glisp.types.symbol import Symbol


class Closure:
    """A first-class function: captured scope, parameter pattern and body."""

    __slots__ = ("scope", "params", "body")

    def __init__(self, scope: Scope, params: SExpression, body: tuple[SExpression, ...]):
        self.scope = scope
        self.params = params
        self.body = body

    def bind_arguments(self, args: list[LispValue]) -> Scope | LispError:
        """
        Bind `args` against the parameter pattern in a new child of the
        captured scope.

        The pattern is a proper list of symbols (exact arity), a dotted list
        whose final symbol collects the remaining arguments, or a single
        symbol that collects all of them.
        """
        frame = Scope(outer=self.scope)
        params = self.params
        i = 0
        while True:
            if params is EMPTY_LIST:
                if i != len(args):
                    return argument_error(self, args)
                return frame
            if isinstance(params, Pair):
                if i >= len(args):
                    return argument_error(self, args)
                name = params.first
                if not isinstance(name, Symbol):
                    return type_error("symbol", name)
                frame.define(name, args[i])
                params = params.rest
                i += 1
                continue
            if not isinstance(params, Symbol):
                return type_error("symbol", params)
            frame.define(params, make_list(args[i:]))
            return frame

    def __repr__(self):
        from glisp.printer import to_write
        return to_write(self)
