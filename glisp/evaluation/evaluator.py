"""Core evaluator for the glisp interpreter.

`eval_expr` evaluates an already-expanded expression. Calls in tail position
do not recurse: when the caller passes `is_tail_call=True`, a call returns a
TailCall describing the function and its evaluated arguments, and the
trampoline in `glisp.evaluation.apply` continues with it. Errors are values;
the first one produced by any sub-evaluation is returned unchanged.
"""

from __future__ import annotations

from glisp import SExpression, LispValue
from glisp.evaluation.apply import apply
from glisp.evaluation.special_forms import SPECIAL_FORMS
from glisp.types.environment import Scope
from glisp.types.lisp_error import failed, syntax_error, type_error
from glisp.types.nil import EMPTY_LIST
from glisp.types.pair import Pair, to_list
from glisp.types.primitive import is_function
from glisp.types.symbol import Symbol
from glisp.types.tail_call import TailCall


def eval_expr(expr: SExpression, scope: Scope, is_tail_call: bool = False) -> LispValue | TailCall:
    """
    Single evaluation step. Returns a value, or a TailCall only when
    `is_tail_call` is set and the expression is a function call.
    """
    if isinstance(expr, Symbol):
        return scope.lookup(expr)
    # Everything but pairs and symbols is self-evaluating
    if not isinstance(expr, Pair):
        return expr

    head = expr.first
    if isinstance(head, Symbol):
        form = SPECIAL_FORMS.get(head)
        if form is not None:
            try:
                tail = to_list(expr.rest)
            except ValueError:
                return syntax_error(f"malformed {head} form")
            return form(tail, scope, eval_expr, is_tail_call)

    return eval_call(expr, scope, is_tail_call)


def eval_call(expr: Pair, scope: Scope, is_tail_call: bool = False) -> LispValue | TailCall:
    """Evaluate operator then arguments left to right, then apply or defer."""
    fn = eval_expr(expr.first, scope)
    if failed(fn):
        return fn

    args: list[LispValue] = []
    cur = expr.rest
    while isinstance(cur, Pair):
        val = eval_expr(cur.first, scope)
        if failed(val):
            return val
        args.append(val)
        cur = cur.rest
    if cur is not EMPTY_LIST:
        return syntax_error("improper argument list in call")

    if not is_function(fn):
        return type_error("function", fn)
    if is_tail_call:
        return TailCall(fn, args)
    return apply(fn, args)
