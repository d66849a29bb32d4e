"""Macro expansion.

`expand` rewrites an expression until no macro calls remain:

- `quote` forms are left untouched.
- `if`, `set!` and `begin` keep their head and expand every other element.
- `lambda` expands only its body, in a scope nested under the current one, so
  macros defined inside a body are visible to the rest of that body only.
- `define` and `define-macro` first rewrite the `(define (f . args) body...)`
  shorthand to `(define f (lambda args body...))`, repeatedly for curried
  heads. `define-macro` then becomes `(define f (macro (lambda ...)))` and is
  evaluated immediately, so the macro is usable by the forms expanded after it.
- A call whose head symbol is bound to a Macro has the transformer applied to
  the unevaluated arguments; the result is expanded again. Any other list is
  expanded element by element.

Expansion is not hygienic: symbols introduced by a transformer can capture or
be captured by bindings at the call site.
"""

from __future__ import annotations

import logging

from glisp import SExpression, LispValue
from glisp.evaluation.apply import apply
from glisp.evaluation.evaluator import eval_expr
from glisp.evaluation.special_forms import (
    BEGIN,
    DEFINE,
    DEFINE_MACRO,
    IF,
    LAMBDA,
    MACRO,
    QUOTE,
    SET,
)
from glisp.types.environment import Scope
from glisp.types.lisp_error import failed
from glisp.types.macro import Macro
from glisp.types.nil import EMPTY_LIST
from glisp.types.pair import Pair, make_list, to_list
from glisp.types.symbol import Symbol

logger = logging.getLogger(__name__)


def expand(expr: SExpression, scope: Scope) -> SExpression:
    """Fully expand `expr`; returns a LispError if a transformer fails."""
    while True:
        if not isinstance(expr, Pair):
            return expr
        head = expr.first
        if not isinstance(head, Symbol):
            return expand_list(expr, scope)

        if head is QUOTE:
            return expr
        if head is IF or head is SET or head is BEGIN:
            body = expand_list(expr.rest, scope)
            return body if failed(body) else Pair(head, body)
        if head is LAMBDA:
            return _expand_lambda(expr, scope)
        if head is DEFINE:
            definition = expand_definition(expr.rest, scope)
            return definition if failed(definition) else Pair(head, definition)
        if head is DEFINE_MACRO:
            return _expand_define_macro(expr, scope)

        value = scope.lookup(head)
        if not isinstance(value, Macro):
            return expand_list(expr, scope)
        try:
            args = to_list(expr.rest)
        except ValueError:
            return expand_list(expr, scope)
        expr = apply(value.transformer, args)
        if failed(expr):
            return expr


def _expand_lambda(expr: Pair, scope: Scope) -> SExpression:
    if not isinstance(expr.rest, Pair):
        # malformed; the evaluator reports it
        return expr
    params = expr.rest.first
    body = expand_list(expr.rest.rest, Scope(outer=scope))
    if failed(body):
        return body
    return Pair(expr.first, Pair(params, body))


def _expand_define_macro(expr: Pair, scope: Scope) -> LispValue:
    definition = expand_definition(expr.rest, scope)
    if failed(definition):
        return definition
    if not isinstance(definition, Pair):
        return Pair(DEFINE, definition)
    rewritten = make_list([DEFINE, definition.first, Pair(MACRO, definition.rest)])
    result = eval_expr(rewritten, scope)
    if failed(result):
        return result
    logger.debug("defined macro %s", definition.first)
    return rewritten


def expand_definition(ls: SExpression, scope: Scope) -> SExpression:
    """(target value...) with curried targets unfolded into lambdas."""
    while True:
        if not isinstance(ls, Pair):
            return ls
        target = ls.first
        if isinstance(target, Pair):
            ls = make_list([target.first, Pair(LAMBDA, Pair(target.rest, ls.rest))])
            continue
        body = expand_list(ls.rest, scope)
        return body if failed(body) else Pair(target, body)


def expand_list(ls: SExpression, scope: Scope) -> SExpression:
    """Expand each element of a (possibly improper) list into a fresh chain."""
    items: list[SExpression] = []
    while isinstance(ls, Pair):
        x = expand(ls.first, scope)
        if failed(x):
            return x
        items.append(x)
        ls = ls.rest
    tail = ls
    if tail is not EMPTY_LIST:
        tail = expand(tail, scope)
        if failed(tail):
            return tail
    return make_list(items, tail)
