import logging

import pytest

from glisp.evaluation.expander import expand
from glisp.printer import to_write
from glisp.reader.parser import read_string
from glisp.types.lisp_error import LispError
from glisp.types.macro import Macro
from glisp.types.symbol import Symbol


def expand_src(src, scope):
    return expand(read_string(src), scope)


def test_atoms_are_unchanged(scope):
    assert expand_src("42", scope) == 42
    assert expand_src("x", scope) is Symbol("x")


def test_quote_is_not_expanded(scope):
    form = read_string("(quote (when a b))")
    assert expand(form, scope) is form


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(when a b c)", "(if a (begin b c))"),
        ("(unless a b)", "(if a #v (begin b))"),
        ("(if (when a b) 1 2)", "(if (if a (begin b)) 1 2)"),
        ("(f (when a b))", "(f (if a (begin b)))"),
        ("(begin (when a b))", "(begin (if a (begin b)))"),
        ("(set! x (when a b))", "(set! x (if a (begin b)))"),
        ("(let ((x 1)) x)", "((lambda (x) x) 1)"),
        ("(let* ((x 1) (y x)) y)", "((lambda (x) ((lambda (y) y) x)) 1)"),
        ("(and a b c)", "(if a (if b c #f) #f)"),
    ]
)
def test_builtin_macro_expansion(source, expected, scope):
    assert to_write(expand_src(source, scope)) == expected


def test_lambda_parameters_are_left_alone(scope):
    assert to_write(expand_src("(lambda (when) when)", scope)) == "(lambda (when) when)"
    assert to_write(expand_src("(lambda (x) (when x 1))", scope)) == "(lambda (x) (if x (begin 1)))"


def test_curried_define_is_unfolded(scope):
    result = expand_src("(define ((adder a) b) (+ a b))", scope)
    assert to_write(result) == "(define adder (lambda (a) (lambda (b) (+ a b))))"


def test_define_macro_is_usable_immediately(scope):
    rewritten = expand_src("(define-macro (my-if c a b) (list 'if c a b))", scope)
    assert to_write(rewritten) == "(define my-if (macro (lambda (c a b) (list (quote if) c a b))))"
    assert isinstance(scope.lookup(Symbol("my-if")), Macro)
    assert to_write(expand_src("(my-if #t 1 2)", scope)) == "(if #t 1 2)"


def test_expansion_runs_to_a_fixpoint(scope):
    expand_src("(define-macro (twice x) (list 'when x x))", scope)
    assert to_write(expand_src("(twice a)", scope)) == "(if a (begin a))"


def test_macro_defined_in_body_stays_in_body(scope):
    result = expand_src("(lambda () (define-macro (m) 1) (m))", scope)
    assert to_write(result) == "(lambda () (define m (macro (lambda () 1))) 1)"
    assert scope.find(Symbol("m")) is None


def test_transformer_errors_propagate(scope):
    expand_src("(define-macro (bad) (car 1))", scope)
    result = expand_src("(f (bad))", scope)
    assert isinstance(result, LispError)
    assert result.kind is Symbol("type-error")


def test_define_macro_is_logged(scope, caplog):
    with caplog.at_level(logging.DEBUG, logger="glisp.evaluation.expander"):
        expand_src("(define-macro (noop) #v)", scope)
    assert "defined macro noop" in caplog.text
