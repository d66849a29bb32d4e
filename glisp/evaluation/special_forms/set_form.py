from glisp import EvaluatorFn
from glisp import SExpression, LispValue
from glisp.types.environment import Scope
from glisp.types.lisp_error import failed, syntax_error, type_error
from glisp.types.symbol import Symbol


def set_form(
    tail: list[SExpression],
    scope: Scope,
    evaluate_fn: EvaluatorFn,
    _: bool,
) -> LispValue:
    if len(tail) != 2:
        return syntax_error("set! requires exactly 2 arguments: (set! var value)")
    var_sym, val_expr = tail
    if not isinstance(var_sym, Symbol):
        return type_error("symbol", var_sym)
    value = evaluate_fn(val_expr, scope)
    if failed(value):
        return value
    # None on success, the unknown-variable error otherwise
    return scope.set(var_sym, value)
