import pytest

from glisp.types.closure import Closure
from glisp.types.lisp_error import LispError
from glisp.types.symbol import Symbol


def run(interp, code):
    return interp.write(interp.eval(code))


def test_self_evaluating_literals(bare):
    assert bare.eval("1") == 1
    assert bare.eval("3.14") == 3.14
    assert bare.eval('"hello"') == "hello"
    assert bare.eval("#v") is None
    assert run(bare, "#(1 2)") == "#(1 2)"


def test_quote(bare):
    assert run(bare, "'(1 2 3)") == "(1 2 3)"
    assert bare.eval("'a") is Symbol("a")


def test_simple_call(bare):
    assert bare.eval("(+ 1 2)") == 3
    assert bare.eval("((lambda (x) (* x x)) 5)") == 25


@pytest.mark.parametrize(
    "code,expected",
    [
        ("(if #t 1 2)", 1),
        ("(if #f 1 2)", 2),
        ("(if '() 1 2)", 1),
        ("(if 0 1 2)", 1),
        ('(if "" 1 2)', 1),
        ("(if #v 1 2)", 1),
    ]
)
def test_only_false_is_false(bare, code, expected):
    assert bare.eval(code) == expected


def test_if_without_else_is_void(bare):
    assert bare.eval("(if #f 1)") is None


def test_define_and_set_return_void(bare):
    assert bare.eval("(define x 1)") is None
    assert bare.eval("(set! x 2)") is None
    assert bare.eval("x") == 2


def test_set_unbound_is_an_error(bare):
    result = bare.eval("(set! nope 1)")
    assert isinstance(result, LispError)
    assert result.message == "unknown variable: nope"


def test_unbound_variable(bare):
    result = bare.eval("(+ 1 missing)")
    assert isinstance(result, LispError)
    assert result.kind is Symbol("error")
    assert result.message == "unknown variable: missing"


def test_lambda_builds_a_closure(bare):
    fn = bare.eval("(lambda (a b) (+ a b))")
    assert isinstance(fn, Closure)
    assert bare.write(fn) == "#<closure (a b)>"


def test_empty_lambda_body_returns_void(bare):
    assert bare.eval("((lambda ()))") is None


@pytest.mark.parametrize(
    "code,expected",
    [
        ("((lambda args args) 1 2 3)", "(1 2 3)"),
        ("((lambda args args))", "()"),
        ("((lambda (a . rest) rest) 1 2 3)", "(2 3)"),
        ("((lambda (a . rest) rest) 1)", "()"),
        ("((lambda (a b) (list b a)) 1 2)", "(2 1)"),
    ]
)
def test_parameter_patterns(bare, code, expected):
    assert run(bare, code) == expected


@pytest.mark.parametrize(
    "code",
    [
        "((lambda (x) x))",
        "((lambda (x) x) 1 2)",
        "((lambda (a . rest) a))",
        "(car 1 2)",
    ]
)
def test_arity_mismatch_is_argument_error(bare, code):
    result = bare.eval(code)
    assert isinstance(result, LispError)
    assert result.kind is Symbol("argument-error")
    assert result.message.startswith("wrong number of arguments to ")


def test_argument_error_message(bare):
    result = bare.eval("((lambda (x) x))")
    assert result.message == "wrong number of arguments to #<closure (x)>: ()"


def test_calling_a_non_function(bare):
    result = bare.eval("(1 2)")
    assert result.kind is Symbol("type-error")
    assert result.message == "expecting function: 1"


def test_begin_returns_last(bare):
    assert bare.eval("(begin 1 2 3)") == 3
    assert bare.eval("(begin)") is None


def test_lexical_shadowing(bare):
    bare.eval("(define x 1) (define (f x) x)")
    assert bare.eval("(f 2)") == 2
    assert bare.eval("x") == 1


def test_closures_share_their_scope(bare):
    bare.eval("(define x 1) (define (get) x)")
    bare.eval("(set! x 5)")
    assert bare.eval("(get)") == 5


def test_counter_closure(bare):
    bare.eval("""
    (define (make-counter)
      (define n 0)
      (lambda () (set! n (+ n 1)) n))
    (define c1 (make-counter))
    (define c2 (make-counter))
    """)
    assert bare.eval("(c1) (c1) (c1)") == 3
    assert bare.eval("(c2)") == 1


def test_curried_define(bare):
    bare.eval("(define ((adder a) b) (+ a b))")
    assert bare.eval("((adder 2) 3)") == 5


def test_errors_short_circuit(bare):
    bare.eval("(define y 0)")
    result = bare.eval("(list (set! y 1) (car 5) (set! y 2))")
    assert result.message == "expecting pair: 5"
    assert bare.eval("y") == 1


def test_eval_stops_at_first_error(bare):
    result = bare.eval("(define a 1) (car '()) (define b 2)")
    assert result.kind is Symbol("type-error")
    assert bare.eval("a") == 1
    assert isinstance(bare.eval("b"), LispError)


@pytest.mark.parametrize(
    "code",
    ["(if)", "(if 1 2 3 4)", "(quote)", "(define x)", "(set! 1 2)", "(lambda)", "(if . 1)"]
)
def test_malformed_special_forms(bare, code):
    result = bare.eval(code)
    assert isinstance(result, LispError)
    assert result.kind in (Symbol("syntax-error"), Symbol("type-error"))


def test_define_in_body_does_not_touch_outer_binding(bare):
    bare.eval("(define x 1) (define (f) (define x 2) x)")
    assert bare.eval("(f)") == 2
    assert bare.eval("x") == 1
