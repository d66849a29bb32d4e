from glisp import EvaluatorFn
from glisp import SExpression, LispValue
from glisp.types.environment import Scope
from glisp.types.lisp_error import failed, syntax_error


def if_form(
    tail: list[SExpression],
    scope: Scope,
    evaluate_fn: EvaluatorFn,
    is_tail_call: bool = False,
) -> LispValue:
    """(if test then [else]); the chosen branch inherits the caller's tail position."""
    if len(tail) not in (2, 3):
        return syntax_error("if requires a test, a then-expression and an optional else-expression")

    test = evaluate_fn(tail[0], scope)
    if failed(test):
        return test

    # Only #f is false
    if test is not False:
        return evaluate_fn(tail[1], scope, is_tail_call)
    elif len(tail) > 2:
        return evaluate_fn(tail[2], scope, is_tail_call)
    else:
        return None
