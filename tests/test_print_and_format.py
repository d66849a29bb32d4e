from fractions import Fraction

import pytest

from glisp.printer import to_display, to_write
from glisp.reader.parser import read_string
from glisp.types.lisp_error import error, type_error
from glisp.types.nil import EMPTY_LIST, EOF_OBJECT
from glisp.types.pair import make_list
from glisp.types.symbol import Symbol
from glisp.types.vector import Vector


@pytest.mark.parametrize(
    "value,written",
    [
        (None, "#v"),
        (True, "#t"),
        (False, "#f"),
        (42, "42"),
        (-7, "-7"),
        (2.5, "2.5"),
        (Fraction(1, 3), "1/3"),
        (Symbol("abc"), "abc"),
        (EMPTY_LIST, "()"),
        (EOF_OBJECT, "#eof-object"),
        ('say "hi"\n', '"say \\"hi\\"\\n"'),
        (make_list([1, 2, 3]), "(1 2 3)"),
        (make_list([1, 2], 3), "(1 2 . 3)"),
        (make_list([make_list([]), "a"]), '(() "a")'),
        (Vector([1, "a"]), '#(1 "a")'),
        (Vector(), "#()"),
    ]
)
def test_write_forms(value, written):
    assert to_write(value) == written


def test_display_leaves_strings_raw():
    assert to_display("hi there") == "hi there"
    assert to_display(make_list(["a", Symbol("b")])) == "(a b)"


def test_write_output_reads_back():
    src = '(define (f x . rest) (list "s" #t #f #(1 2) (quote x)))'
    assert to_write(read_string(src)) == src


def test_cyclic_rest_chain_terminates():
    ls = make_list([1, 2])
    ls.rest.rest = ls
    assert to_write(ls) == "(1 2 . ...)"


def test_self_containing_pair_terminates():
    ls = make_list([1])
    ls.first = ls
    assert to_write(ls) == "((...))"


def test_shared_but_acyclic_structure_prints_fully():
    shared = make_list([1])
    assert to_write(make_list([shared, shared])) == "((1) (1))"


def test_error_values():
    assert to_display(error("boom")) == "error: boom"
    assert to_write(type_error("pair", 5)) == "type-error: expecting pair: 5"
    assert str(error("boom")) == "error: boom"
