from glisp import EvaluatorFn
from glisp import SExpression, LispValue
from glisp.types.closure import Closure
from glisp.types.environment import Scope
from glisp.types.lisp_error import syntax_error


def lambda_form(
    tail: list[SExpression],
    scope: Scope,
    evaluate_fn: EvaluatorFn,
    _: bool,
) -> LispValue:
    # (lambda params body...): nothing is evaluated until the closure is applied.
    # An empty body makes the closure return #v.
    if not tail:
        return syntax_error("lambda requires at least a parameter list")

    return Closure(scope, tail[0], tuple(tail[1:]))
