"""Builtin macro transformers for glisp (implemented in Python).

Each transformer receives the unevaluated argument forms of the call and
returns the rewritten form (or a syntax-error value). They are bound in the
root scope as `Macro(Primitive(fn))`, so user code may shadow them like any
other binding.
"""

from __future__ import annotations

from itertools import count

from glisp import SExpression
from glisp.evaluation.special_forms import BEGIN, DEFINE, IF, LAMBDA, QUOTE
from glisp.types.environment import Scope
from glisp.types.lisp_error import failed, syntax_error
from glisp.types.macro import Macro
from glisp.types.nil import EMPTY_LIST
from glisp.types.pair import Pair, make_list, to_list
from glisp.types.primitive import Primitive
from glisp.types.symbol import Symbol
from glisp.types.vector import Vector

QUASIQUOTE = Symbol("quasiquote")
UNQUOTE = Symbol("unquote")
UNQUOTE_SPLICING = Symbol("unquote-splicing")
ELSE = Symbol("else")
LET = Symbol("let")
LET_STAR = Symbol("let*")
AND = Symbol("and")
OR = Symbol("or")

_CONS = Symbol("cons")
_LIST = Symbol("list")
_APPEND = Symbol("append")
_LIST_TO_VECTOR = Symbol("list->vector")


# -------------------------------
# quasiquote
# -------------------------------
def _single_operand(form: Pair, name: Symbol):
    rest = form.rest
    if not isinstance(rest, Pair) or rest.rest is not EMPTY_LIST:
        return syntax_error(f"{name} expects exactly 1 argument")
    return rest.first


def _is_form(x: SExpression, name: Symbol) -> bool:
    return isinstance(x, Pair) and x.first is name


def _qq(x: SExpression, depth: int) -> SExpression:
    if isinstance(x, Vector):
        items = _qq(make_list(x.items), depth)
        return items if failed(items) else make_list([_LIST_TO_VECTOR, items])
    if isinstance(x, Symbol) or x is EMPTY_LIST:
        return make_list([QUOTE, x])
    if not isinstance(x, Pair):
        return x

    if x.first is UNQUOTE:
        operand = _single_operand(x, UNQUOTE)
        if failed(operand) or depth == 1:
            return operand
        inner = _qq(operand, depth - 1)
        return inner if failed(inner) else make_list([_LIST, make_list([QUOTE, UNQUOTE]), inner])

    if x.first is QUASIQUOTE:
        operand = _single_operand(x, QUASIQUOTE)
        if failed(operand):
            return operand
        inner = _qq(operand, depth + 1)
        return inner if failed(inner) else make_list([_LIST, make_list([QUOTE, QUASIQUOTE]), inner])

    rest = _qq(x.rest, depth)
    if failed(rest):
        return rest
    if _is_form(x.first, UNQUOTE_SPLICING):
        operand = _single_operand(x.first, UNQUOTE_SPLICING)
        if failed(operand):
            return operand
        if depth == 1:
            return make_list([_APPEND, operand, rest])
        inner = _qq(operand, depth - 1)
        if failed(inner):
            return inner
        head = make_list([_LIST, make_list([QUOTE, UNQUOTE_SPLICING]), inner])
        return make_list([_CONS, head, rest])

    head = _qq(x.first, depth)
    return head if failed(head) else make_list([_CONS, head, rest])


def quasiquote_macro(template: SExpression) -> SExpression:
    """
    `(a ,b ,@c) => (cons 'a (cons b (append c '())))

    Nested quasiquotes raise the depth; only unquotes at depth one are evaluated.
    """
    return _qq(template, 1)


# -------------------------------
# Binding forms
# -------------------------------
def _parse_bindings(bindings: SExpression, name: str):
    try:
        items = to_list(bindings)
    except ValueError:
        return syntax_error(f"{name} bindings must be a list")
    names, values = [], []
    for b in items:
        try:
            pair = to_list(b)
        except ValueError:
            pair = None
        if pair is None or len(pair) != 2 or not isinstance(pair[0], Symbol):
            return syntax_error(f"{name} binding must be (name value)")
        names.append(pair[0])
        values.append(pair[1])
    return names, values


def let_macro(*args: SExpression) -> SExpression:
    """
    (let ((var1 val1) (var2 val2) ...) body...)
    => ((lambda (var1 var2 ...) body...) val1 val2 ...)

    (let loop ((var val) ...) body...)
    => ((lambda () (define loop (lambda (var ...) body...)) (loop val ...)))
    """
    if not args:
        return syntax_error("let requires a bindings list")
    if isinstance(args[0], Symbol):
        if len(args) < 2:
            return syntax_error("named let requires a bindings list")
        name, bindings, body = args[0], args[1], args[2:]
    else:
        name, bindings, body = None, args[0], args[1:]

    parsed = _parse_bindings(bindings, "let")
    if failed(parsed):
        return parsed
    names, values = parsed
    fn = make_list([LAMBDA, make_list(names), *body])
    if name is None:
        return make_list([fn, *values])
    return make_list([
        make_list([
            LAMBDA,
            EMPTY_LIST,
            make_list([DEFINE, name, fn]),
            make_list([name, *values]),
        ])
    ])


def let_star_macro(*args: SExpression) -> SExpression:
    """
    (let* ((v1 e1) (v2 e2) ...) body...)
    => (let ((v1 e1)) (let* ((v2 e2) ...) body...))
    Base case with no bindings => (let () body...)
    """
    if not args:
        return syntax_error("let* requires a bindings list")
    bindings, body = args[0], args[1:]
    if not isinstance(bindings, Pair):
        if bindings is not EMPTY_LIST:
            return syntax_error("let* bindings must be a list")
        return make_list([LET, EMPTY_LIST, *body])
    first = make_list([bindings.first])
    if bindings.rest is EMPTY_LIST:
        return make_list([LET, first, *body])
    inner = make_list([LET_STAR, bindings.rest, *body])
    return make_list([LET, first, inner])


# -------------------------------
# Conditionals
# -------------------------------
def and_macro(*args: SExpression) -> SExpression:
    """(and) => #t; (and x) => x; (and x y ...) => (if x (and y ...) #f)"""
    if not args:
        return True
    if len(args) == 1:
        return args[0]
    return make_list([IF, args[0], make_list([AND, *args[1:]]), False])


def when_macro(test: SExpression, *body: SExpression) -> SExpression:
    return make_list([IF, test, make_list([BEGIN, *body])])


def unless_macro(test: SExpression, *body: SExpression) -> SExpression:
    return make_list([IF, test, None, make_list([BEGIN, *body])])


def _make_or(gensym):
    def or_macro(*args: SExpression) -> SExpression:
        """(or x y ...) => (let ((tmp x)) (if tmp tmp (or y ...)))"""
        if not args:
            return False
        if len(args) == 1:
            return args[0]
        tmp = gensym()
        return make_list([
            LET,
            make_list([make_list([tmp, args[0]])]),
            make_list([IF, tmp, tmp, make_list([OR, *args[1:]])]),
        ])

    return or_macro


def _make_cond(gensym):
    def cond_macro(*clauses: SExpression) -> SExpression:
        """
        (cond (test body...) ... (else body...))

        Clauses are tried in order; a clause with no body yields its test
        value. With no matching clause the result is #v.
        """
        result: SExpression = None
        for i in range(len(clauses) - 1, -1, -1):
            try:
                clause = to_list(clauses[i])
            except ValueError:
                clause = []
            if not clause:
                return syntax_error("cond clause must be (test body...)")
            test, body = clause[0], clause[1:]
            if test is ELSE:
                if i != len(clauses) - 1:
                    return syntax_error("else must be the last cond clause")
                result = make_list([BEGIN, *body])
            elif not body:
                tmp = gensym()
                result = make_list([
                    LET,
                    make_list([make_list([tmp, test])]),
                    make_list([IF, tmp, tmp, result]),
                ])
            else:
                result = make_list([IF, test, make_list([BEGIN, *body]), result])
        return result

    return cond_macro


def register(scope: Scope) -> None:
    """Bind the builtin macros into `scope`."""
    counter = count()

    def gensym() -> Symbol:
        return Symbol(f"#macro-tmp{next(counter)}")

    macros = {
        "quasiquote": quasiquote_macro,
        "let": let_macro,
        "let*": let_star_macro,
        "and": and_macro,
        "or": _make_or(gensym),
        "when": when_macro,
        "unless": unless_macro,
        "cond": _make_cond(gensym),
    }
    for name, fn in macros.items():
        scope.define(Symbol(name), Macro(Primitive(fn, name)))
