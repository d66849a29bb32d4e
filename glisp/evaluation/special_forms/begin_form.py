from typing import Sequence

from glisp import EvaluatorFn
from glisp import SExpression, LispValue
from glisp.types.environment import Scope
from glisp.types.lisp_error import failed


def eval_sequence(
    body: Sequence[SExpression],
    scope: Scope,
    evaluate_fn: EvaluatorFn,
    is_tail_call: bool = False,
) -> LispValue:
    """Evaluate in order; only the last expression sees the caller's tail position."""
    if not body:
        return None
    for e in body[:-1]:
        result = evaluate_fn(e, scope)
        if failed(result):
            return result
    return evaluate_fn(body[-1], scope, is_tail_call)


def begin_form(
    tail: list[SExpression],
    scope: Scope,
    evaluate_fn: EvaluatorFn,
    is_tail_call: bool = False,
) -> LispValue:
    return eval_sequence(tail, scope, evaluate_fn, is_tail_call)
