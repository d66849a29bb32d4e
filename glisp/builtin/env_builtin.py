"""Built-in functions for the glisp runtime environment.

This module defines the control, syntax, type-system, symbol and port
primitives, plus the registration entry point that binds them (and the data
primitives from `data_builtin`) into a root Scope. Everything with
per-interpreter state (gensym counter, standard ports, the root scope
itself) is created inside `register`, so interpreters never share it.
"""

from __future__ import annotations

import logging
from fractions import Fraction
from itertools import count
from typing import Optional

from glisp import LispValue
from glisp.errors import GlispSyntaxError
from glisp.eval import evaluate, load_file
from glisp.evaluation.apply import apply as apply_engine
from glisp.printer import to_display, to_write
from glisp.reader.parser import Reader
from glisp.types.closure import Closure
from glisp.types.custom import Custom
from glisp.types.environment import Scope
from glisp.types.lisp_error import LispError, error, failed, syntax_error, system_error, throw as make_error, type_error
from glisp.types.macro import Macro
from glisp.types.nil import EMPTY_LIST, EOF_OBJECT
from glisp.types.pair import Pair, make_list, to_list
from glisp.types.ports import InputPort, OutputPort
from glisp.types.primitive import Primitive, is_function, wrap_primitives
from glisp.types.symbol import Symbol
from glisp.types.vector import Vector
from glisp.builtin import data_builtin

logger = logging.getLogger(__name__)


# -------------------------------
# Equality
# -------------------------------
def is_eq(a: LispValue, b: LispValue) -> bool:
    """Identity, except that numbers, strings and booleans compare by value within a kind."""
    if a is b:
        return True
    if isinstance(a, bool) or isinstance(b, bool):
        return False
    if isinstance(a, str) and isinstance(b, str):
        return a == b
    if data_builtin.is_number(a) and data_builtin.is_number(b):
        return type(a) is type(b) and a == b
    return False


def eq(a: LispValue, b: LispValue) -> bool:
    return is_eq(a, b)


# -------------------------------
# Syntax
# -------------------------------
def _read_from(port: InputPort, all_data: bool = False) -> LispValue:
    try:
        reader = Reader(port)
        return make_list(reader.read_all()) if all_data else reader.read()
    except GlispSyntaxError as ex:
        logger.debug("syntax error: %s", ex)
        return syntax_error(str(ex))
    except OSError as ex:
        return system_error(ex)


def read(port: LispValue) -> LispValue:
    if not isinstance(port, InputPort):
        return type_error("input-port", port)
    return _read_from(port)


def read_file(port: LispValue) -> LispValue:
    if not isinstance(port, InputPort):
        return type_error("input-port", port)
    return _read_from(port, all_data=True)


def read_str(s: LispValue) -> LispValue:
    if not isinstance(s, str):
        return type_error("string", s)
    return _read_from(InputPort.from_string(s))


def _output(port: LispValue, text: str) -> LispValue:
    if not isinstance(port, OutputPort):
        return type_error("output-port", port)
    try:
        port.write(text)
    except OSError as ex:
        return system_error(ex)
    return None


def write(obj: LispValue, port: LispValue) -> LispValue:
    return _output(port, to_write(obj))


def display(obj: LispValue, port: LispValue) -> LispValue:
    return _output(port, to_display(obj))


def new_macro(fn: LispValue) -> LispValue:
    if not is_function(fn):
        return type_error("function", fn)
    return Macro(fn)


def obj_to_str(obj: LispValue) -> str:
    return to_display(obj)


# -------------------------------
# Control
# -------------------------------
def eval_(expr: LispValue, env: LispValue) -> LispValue:
    if not isinstance(env, Scope):
        return type_error("environment", env)
    return evaluate(expr, env)


def apply_(fn: LispValue, args: LispValue) -> LispValue:
    if not is_function(fn):
        return type_error("function", fn)
    try:
        arg_values = to_list(args)
    except ValueError:
        return type_error("list", args)
    return apply_engine(fn, arg_values)


def throw(kind: LispValue, msg: LispValue) -> LispValue:
    if not isinstance(kind, Symbol):
        return type_error("symbol", kind)
    return make_error(kind, msg)


def catch(thunk: LispValue, handler: LispValue) -> LispValue:
    """Call thunk; if it yields an error value, call handler with its kind and message."""
    if not is_function(thunk):
        return type_error("function", thunk)
    if not is_function(handler):
        return type_error("function", handler)
    result = apply_engine(thunk, [])
    if isinstance(result, LispError):
        return apply_engine(handler, [result.kind, result.message])
    return result


def load(path: LispValue, env: LispValue) -> LispValue:
    if not isinstance(path, str):
        return type_error("string", path)
    if not isinstance(env, Scope):
        return type_error("environment", env)
    return load_file(path, env)


def null_env() -> Scope:
    return Scope()


def capture_env(env: LispValue) -> LispValue:
    if not isinstance(env, Scope):
        return type_error("environment", env)
    return Scope(outer=env)


def void() -> None:
    return None


# -------------------------------
# Type system
# -------------------------------
def type_name(x: LispValue) -> Symbol:
    if x is None:
        return Symbol("void")
    if isinstance(x, bool):
        return Symbol("boolean")
    if isinstance(x, int):
        return Symbol("fixnum" if data_builtin.is_small_fixnum(x) else "bignum")
    if isinstance(x, Fraction):
        return Symbol("rational")
    if isinstance(x, float):
        return Symbol("flonum")
    if isinstance(x, str):
        return Symbol("string")
    if isinstance(x, Symbol):
        return Symbol("symbol")
    if isinstance(x, Pair):
        return Symbol("pair")
    if x is EMPTY_LIST:
        return Symbol("empty-list")
    if x is EOF_OBJECT:
        return Symbol("eof-object")
    if isinstance(x, Vector):
        return Symbol("vector")
    if isinstance(x, Macro):
        return Symbol("macro")
    if isinstance(x, (Primitive, Closure)):
        return Symbol("function")
    if isinstance(x, InputPort):
        return Symbol("input-port")
    if isinstance(x, OutputPort):
        return Symbol("output-port")
    if isinstance(x, Scope):
        return Symbol("environment")
    if isinstance(x, Custom):
        return x.tag
    if isinstance(x, LispError):
        return Symbol("error")
    return Symbol("unknown")


def define_type(name: LispValue, fn: LispValue) -> LispValue:
    """
    (define-type 'point (lambda (wrap unwrap set!) ...))

    Mints a new Custom tag and hands `fn` three primitives: one boxing a value
    under the tag, one unboxing it, and one replacing the boxed value. The two
    accessors reject anything not carrying this tag.
    """
    if not isinstance(name, Symbol):
        return type_error("symbol", name)
    if not is_function(fn):
        return type_error("function", fn)

    def wrap(x):
        return Custom(name, x)

    def unwrap(x):
        if not isinstance(x, Custom) or x.tag is not name:
            return type_error(name.id, x)
        return x.value

    def set_value(x, v):
        if not isinstance(x, Custom) or x.tag is not name:
            return type_error(name.id, x)
        x.value = v
        return None

    result = apply_engine(fn, [
        Primitive(wrap, f"wrap-{name}"),
        Primitive(unwrap, f"unwrap-{name}"),
        Primitive(set_value, f"set-{name}!"),
    ])
    if failed(result):
        return result
    return None


# -------------------------------
# Symbols
# -------------------------------
def sym_to_str(sym: LispValue) -> LispValue:
    if not isinstance(sym, Symbol):
        return type_error("symbol", sym)
    return sym.id


def str_to_sym(s: LispValue) -> LispValue:
    if not isinstance(s, str):
        return type_error("string", s)
    return Symbol(s)


# -------------------------------
# Ports
# -------------------------------
OPEN_MODES: dict[str, str] = {
    "read": "r",
    "write": "w",
    "append": "a",
    "create": "x",
}


def open_file(path: LispValue, mode: LispValue) -> LispValue:
    if not isinstance(path, str):
        return type_error("string", path)
    if not isinstance(mode, Symbol):
        return type_error("symbol", mode)
    py_mode = OPEN_MODES.get(mode.id)
    if py_mode is None:
        return error(f"wrong access token: {mode}")
    try:
        f = open(path, py_mode, encoding="utf-8")
    except OSError as ex:
        return system_error(ex)
    if py_mode == "r":
        return InputPort(f, owns_stream=True)
    return OutputPort(f, owns_stream=True)


def read_char(port: LispValue) -> LispValue:
    if not isinstance(port, InputPort):
        return type_error("input-port", port)
    try:
        return port.read_char()
    except OSError as ex:
        return system_error(ex)


def read_line(port: LispValue) -> LispValue:
    if not isinstance(port, InputPort):
        return type_error("input-port", port)
    try:
        return port.read_line()
    except OSError as ex:
        return system_error(ex)


def is_eof(x: LispValue) -> bool:
    return x is EOF_OBJECT


def write_string(port: LispValue, s: LispValue) -> LispValue:
    if not isinstance(s, str):
        return type_error("string", s)
    return _output(port, s)


def flush(port: LispValue) -> LispValue:
    if not isinstance(port, OutputPort):
        return type_error("output-port", port)
    try:
        port.flush()
    except OSError as ex:
        return system_error(ex)
    return None


def close_port(port: LispValue) -> LispValue:
    if not isinstance(port, (InputPort, OutputPort)):
        return type_error("port", port)
    try:
        port.close()
    except OSError as ex:
        return system_error(ex)
    return None


PRIMITIVES = {
    # equality
    "==": eq,
    # syntax
    "read": read,
    "read-file": read_file,
    "read-string": read_str,
    "write": write,
    "display": display,
    "macro": new_macro,
    "object->string": obj_to_str,
    # control
    "eval": eval_,
    "apply": apply_,
    "throw": throw,
    "catch": catch,
    "load": load,
    "null-environment": null_env,
    "capture-environment": capture_env,
    "void": void,
    # type system
    "type-of": type_name,
    "define-type": define_type,
    # symbols
    "symbol->string": sym_to_str,
    "string->symbol": str_to_sym,
    # ports
    "open-file": open_file,
    "read-char": read_char,
    "read-line": read_line,
    "eof-object?": is_eof,
    "write-string": write_string,
    "flush": flush,
    "close-port": close_port,
}


def register(
    scope: Scope,
    stdin: Optional[InputPort] = None,
    stdout: Optional[OutputPort] = None,
) -> None:
    """Bind every primitive into `scope`, which becomes the root environment."""
    scope.update(wrap_primitives(PRIMITIVES))
    scope.update(wrap_primitives(data_builtin.PRIMITIVES))

    gensyms = count()

    def gensym() -> Symbol:
        # A leading '#' cannot start a symbol token, so these never collide with read symbols
        return Symbol(f"#gensym{next(gensyms)}")

    def root_environment() -> Scope:
        return scope

    def standard_input() -> LispValue:
        return stdin if stdin is not None else error("no standard input")

    def standard_output() -> LispValue:
        return stdout if stdout is not None else error("no standard output")

    scope.update(wrap_primitives({
        "gensym": gensym,
        "root-environment": root_environment,
        "standard-input": standard_input,
        "standard-output": standard_output,
    }))
    logger.debug("registered %d primitives", len(scope.vars))
