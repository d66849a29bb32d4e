from glisp import EvaluatorFn, SExpression, LispValue
from glisp.types.environment import Scope
from glisp.types.lisp_error import syntax_error


def quote_form(
    tail: list[SExpression], scope: Scope, evaluate_fn: EvaluatorFn, _: bool
) -> LispValue:
    if len(tail) != 1:
        return syntax_error("quote expects exactly 1 argument")
    return tail[0]
