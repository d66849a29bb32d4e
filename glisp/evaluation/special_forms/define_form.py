from glisp import EvaluatorFn
from glisp import SExpression, LispValue
from glisp.types.environment import Scope
from glisp.types.lisp_error import failed, syntax_error, type_error
from glisp.types.symbol import Symbol


def define_form(
    tail: list[SExpression],
    scope: Scope,
    evaluate_fn: EvaluatorFn,
    _: bool,
) -> LispValue:
    """
    (define name value)
    The curried (define (f . args) body...) shorthand is removed by the expander.
    """
    if len(tail) != 2:
        return syntax_error("define requires exactly 2 arguments")

    name, val_expr = tail
    if not isinstance(name, Symbol):
        return type_error("symbol", name)
    value = evaluate_fn(val_expr, scope)
    if failed(value):
        return value
    scope.define(name, value)
    return None
