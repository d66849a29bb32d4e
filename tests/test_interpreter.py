import pytest

from glisp.errors import GlispError
from glisp.interpreter import Interpreter, new_root_scope
from glisp.printer import quote_string
from glisp.types.lisp_error import LispError
from glisp.types.nil import EOF_OBJECT
from glisp.types.pair import Pair, to_list
from glisp.types.symbol import Symbol


def test_interpreters_are_isolated():
    a = Interpreter(prelude=None)
    b = Interpreter(prelude=None)
    a.eval("(define x 1)")
    assert a.eval("x") == 1
    assert isinstance(b.eval("x"), LispError)


def test_root_scopes_are_fresh():
    first = new_root_scope()
    second = new_root_scope()
    assert first is not second
    assert first.lookup(Symbol("gensym")) is not second.lookup(Symbol("gensym"))
    first.define(Symbol("car"), 0)
    assert second.lookup(Symbol("car")) != 0


def test_eval_returns_last_value(bare):
    assert bare.eval("1 2 3") == 3
    assert bare.eval("") is None
    assert bare.eval("; nothing here") is None


def test_eval_string_is_an_alias(bare):
    assert bare.eval_string("(+ 40 2)") == 42


def test_macro_defined_earlier_in_the_same_source(bare):
    code = """
    (define-macro (my-if c a b) (list 'if c a b))
    (my-if #t 1 2)
    """
    assert bare.eval(code) == 1


def test_prelude_from_string():
    interp = Interpreter(prelude="(define answer 42)")
    assert interp.eval("answer") == 42
    assert isinstance(interp.eval("(map car '())"), LispError)


def test_broken_prelude_raises():
    with pytest.raises(GlispError):
        Interpreter(prelude="(car 1)")


def test_eval_prelude_adds_definitions(bare):
    bare.eval_prelude("(define (twice x) (* 2 x))")
    assert bare.eval("(twice 4)") == 8


def test_read_returns_unevaluated_data(bare):
    data = bare.read("(+ 1 2) ignored")
    assert isinstance(data, Pair)
    assert to_list(data) == [Symbol("+"), 1, 2]
    assert bare.read("") is EOF_OBJECT
    assert bare.read("(").kind is Symbol("syntax-error")


def test_write_and_display(bare):
    value = bare.eval("(list \"a\" 'b 1.5)")
    assert bare.write(value) == '("a" b 1.5)'
    assert bare.display(value) == "(a b 1.5)"


def test_load_file(bare, tmp_path):
    source = tmp_path / "lib.glisp"
    source.write_text("(define (sq x) (* x x))\n(sq 7)\n", encoding="utf-8")
    assert bare.load(source) == 49
    assert bare.eval("(sq 3)") == 9


def test_load_primitive(bare, tmp_path):
    source = tmp_path / "lib.glisp"
    source.write_text("(define loaded 'yes)", encoding="utf-8")
    assert bare.eval(f"(load {quote_string(str(source))} (root-environment))") is None
    assert bare.eval("loaded") is Symbol("yes")


def test_load_into_a_captured_environment(bare, tmp_path):
    source = tmp_path / "lib.glisp"
    source.write_text("(define hidden 1)", encoding="utf-8")
    bare.eval("(define e (capture-environment (root-environment)))")
    bare.eval(f"(load {quote_string(str(source))} e)")
    assert bare.eval("(eval 'hidden e)") == 1
    assert isinstance(bare.eval("hidden"), LispError)


def test_load_missing_file(bare):
    result = bare.eval('(load "/nonexistent/lib.glisp" (root-environment))')
    assert result.kind is Symbol("system-error")


def test_load_reports_syntax_errors(bare, tmp_path):
    source = tmp_path / "broken.glisp"
    source.write_text("(define ok 1)\n(define", encoding="utf-8")
    result = bare.load(source)
    assert result.kind is Symbol("syntax-error")
    assert "line 2" in result.message
    assert bare.eval("ok") == 1


def test_load_path_search(bare, tmp_path, monkeypatch):
    (tmp_path / "found.glisp").write_text("(define found #t)", encoding="utf-8")
    monkeypatch.setenv("GLISP_LOAD_PATH", str(tmp_path))
    assert bare.eval('(load "found.glisp" (root-environment))') is None
    assert bare.eval("found") is True


def test_missing_prelude_is_tolerated(tmp_path, monkeypatch):
    monkeypatch.setenv("GLISP_PRELUDE_PATH", str(tmp_path))
    interp = Interpreter()
    assert isinstance(interp.eval("map"), LispError)
    assert interp.eval("(car '(1))") == 1


def test_custom_prelude_directory(tmp_path, monkeypatch):
    (tmp_path / "core.glisp").write_text("(define custom-prelude #t)", encoding="utf-8")
    monkeypatch.setenv("GLISP_PRELUDE_PATH", str(tmp_path))
    assert Interpreter().eval("custom-prelude") is True
