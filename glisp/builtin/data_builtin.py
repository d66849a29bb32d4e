"""Data primitives: numbers, pairs and lists, strings, vectors.

Numbers are Python int (exact, unbounded), Fraction (exact rational) and
float. The generic operators accept any mix; the fixnum-/flonum- operators
insist on one kind and report a type-error otherwise.
"""

from __future__ import annotations

from fractions import Fraction
from functools import wraps
from typing import Callable

from glisp import LispValue
from glisp.types.lisp_error import LispError, error, type_error
from glisp.types.nil import EMPTY_LIST
from glisp.types.pair import Pair, cons, list_length, make_list, to_list
from glisp.types.vector import Vector

FIXNUM_MIN = -(2 ** 63)
FIXNUM_MAX = 2 ** 63 - 1


def is_number(x: LispValue) -> bool:
    return isinstance(x, (int, float, Fraction)) and not isinstance(x, bool)


def is_fixnum(x: LispValue) -> bool:
    return isinstance(x, int) and not isinstance(x, bool)


def is_small_fixnum(x: LispValue) -> bool:
    return is_fixnum(x) and FIXNUM_MIN <= x <= FIXNUM_MAX


def _normalize(x):
    if isinstance(x, Fraction) and x.denominator == 1:
        return x.numerator
    return x


def _check_numbers(args) -> LispError | None:
    for x in args:
        if not is_number(x):
            return type_error("number", x)
    return None


def _float_range(fn):
    """Mixing a bignum with a float can overflow the float conversion."""

    @wraps(fn)
    def checked(*args):
        try:
            return fn(*args)
        except OverflowError:
            return error("number out of flonum range")

    return checked


def _exact_div(a, b):
    if b == 0:
        return error("divide by zero")
    if isinstance(a, float) or isinstance(b, float):
        return a / b
    return _normalize(Fraction(a) / Fraction(b))


# -------------------------------
# Arithmetic
# -------------------------------
@_float_range
def add(*args: LispValue) -> LispValue:
    err = _check_numbers(args)
    if err is not None:
        return err
    return _normalize(sum(args, 0))


@_float_range
def sub(first: LispValue, *args: LispValue) -> LispValue:
    err = _check_numbers((first, *args))
    if err is not None:
        return err
    if not args:
        return -first
    result = first
    for x in args:
        result -= x
    return _normalize(result)


@_float_range
def mul(*args: LispValue) -> LispValue:
    err = _check_numbers(args)
    if err is not None:
        return err
    result = 1
    for x in args:
        result *= x
    return _normalize(result)


@_float_range
def div(first: LispValue, *args: LispValue) -> LispValue:
    """Exact division stays exact (int or rational); any float makes it inexact."""
    err = _check_numbers((first, *args))
    if err is not None:
        return err
    if not args:
        return _exact_div(1, first)
    result = first
    for x in args:
        result = _exact_div(result, x)
        if isinstance(result, LispError):
            return result
    return result


def _comparison(name: str, op: Callable[[LispValue, LispValue], bool]):
    def compare(first: LispValue, *args: LispValue) -> LispValue:
        err = _check_numbers((first, *args))
        if err is not None:
            return err
        values = (first, *args)
        return all(op(a, b) for a, b in zip(values, values[1:]))

    compare.__name__ = name
    return _float_range(compare)


def _truncated_quotient(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def quotient(a: LispValue, b: LispValue) -> LispValue:
    if not is_fixnum(a):
        return type_error("fixnum", a)
    if not is_fixnum(b):
        return type_error("fixnum", b)
    if b == 0:
        return error("divide by zero")
    return _truncated_quotient(a, b)


def modulo(a: LispValue, b: LispValue) -> LispValue:
    """Remainder of truncated division: the result takes the sign of `a`."""
    if not is_fixnum(a):
        return type_error("fixnum", a)
    if not is_fixnum(b):
        return type_error("fixnum", b)
    if b == 0:
        return error("divide by zero")
    return a - b * _truncated_quotient(a, b)


def fix_to_flo(x: LispValue) -> LispValue:
    if isinstance(x, float):
        return x
    if is_small_fixnum(x):
        return float(x)
    return type_error("fixnum", x)


def _fixnum_op(op: Callable[[int, int], LispValue]):
    def apply_op(a: LispValue, b: LispValue) -> LispValue:
        if not is_fixnum(a):
            return type_error("fixnum", a)
        if not is_fixnum(b):
            return type_error("fixnum", b)
        return op(a, b)

    return apply_op


def _flonum_op(op: Callable[[float, float], LispValue]):
    def apply_op(a: LispValue, b: LispValue) -> LispValue:
        if not isinstance(a, float):
            return type_error("flonum", a)
        if not isinstance(b, float):
            return type_error("flonum", b)
        return op(a, b)

    return apply_op


@_float_range
def _fixnum_div(a: int, b: int) -> LispValue:
    if b == 0:
        return error("divide by zero")
    if a % b == 0:
        return _truncated_quotient(a, b)
    return a / b


def _flonum_div(a: float, b: float) -> LispValue:
    if b == 0:
        return error("divide by zero")
    return a / b


# -------------------------------
# Pairs and lists
# -------------------------------
def car(x: LispValue) -> LispValue:
    if not isinstance(x, Pair):
        return type_error("pair", x)
    return x.first


def cdr(x: LispValue) -> LispValue:
    if not isinstance(x, Pair):
        return type_error("pair", x)
    return x.rest


def set_car(x: LispValue, v: LispValue) -> LispValue:
    if not isinstance(x, Pair):
        return type_error("pair", x)
    x.first = v
    return None


def set_cdr(x: LispValue, v: LispValue) -> LispValue:
    if not isinstance(x, Pair):
        return type_error("pair", x)
    x.rest = v
    return None


def is_pair(x: LispValue) -> bool:
    return isinstance(x, Pair)


def is_null(x: LispValue) -> bool:
    return x is EMPTY_LIST


def list_(*items: LispValue) -> LispValue:
    return make_list(items)


def length(ls: LispValue) -> LispValue:
    try:
        return list_length(ls)
    except ValueError:
        return type_error("list", ls)


def append(*lists: LispValue) -> LispValue:
    """Copies every argument but the last, which becomes the shared tail."""
    if not lists:
        return EMPTY_LIST
    items: list[LispValue] = []
    for ls in lists[:-1]:
        try:
            items.extend(to_list(ls))
        except ValueError:
            return type_error("list", ls)
    return make_list(items, lists[-1])


def ls_to_vec(ls: LispValue) -> LispValue:
    try:
        return Vector(to_list(ls))
    except ValueError:
        return type_error("list", ls)


def vec_to_ls(vec: LispValue) -> LispValue:
    if not isinstance(vec, Vector):
        return type_error("vector", vec)
    return make_list(vec.items)


# -------------------------------
# Strings
# -------------------------------
def string_split(s: LispValue, sep: LispValue) -> LispValue:
    if not isinstance(s, str):
        return type_error("string", s)
    if not isinstance(sep, str):
        return type_error("string", sep)
    return make_list(list(s) if sep == "" else s.split(sep))


def string_join(strs: LispValue, sep: LispValue) -> LispValue:
    if not isinstance(sep, str):
        return type_error("string", sep)
    try:
        parts = to_list(strs)
    except ValueError:
        return type_error("list", strs)
    for x in parts:
        if not isinstance(x, str):
            return type_error("string", x)
    return sep.join(parts)


def string_append(*strs: LispValue) -> LispValue:
    for x in strs:
        if not isinstance(x, str):
            return type_error("string", x)
    return "".join(strs)


def string_length(s: LispValue) -> LispValue:
    if not isinstance(s, str):
        return type_error("string", s)
    return len(s)


def str_to_vec(s: LispValue) -> LispValue:
    if not isinstance(s, str):
        return type_error("string", s)
    return Vector(ord(c) for c in s)


def vec_to_str(vec: LispValue) -> LispValue:
    if not isinstance(vec, Vector):
        return type_error("vector", vec)
    for c in vec.items:
        if not is_fixnum(c) or not 0 <= c <= 0x10FFFF:
            return type_error("vector of character codes", vec)
    return "".join(chr(c) for c in vec.items)


# -------------------------------
# Vectors
# -------------------------------
def make_vector(size: LispValue, fill: LispValue) -> LispValue:
    if not is_fixnum(size) or size < 0:
        return type_error("non-negative fixnum", size)
    return Vector([fill] * size)


def vector(*items: LispValue) -> Vector:
    return Vector(items)


def vector_length(vec: LispValue) -> LispValue:
    if not isinstance(vec, Vector):
        return type_error("vector", vec)
    return len(vec)


def vector_ref(vec: LispValue, idx: LispValue) -> LispValue:
    if not isinstance(vec, Vector):
        return type_error("vector", vec)
    if not is_fixnum(idx):
        return type_error("fixnum", idx)
    return vec.get(idx)


def vector_set(vec: LispValue, idx: LispValue, value: LispValue) -> LispValue:
    if not isinstance(vec, Vector):
        return type_error("vector", vec)
    if not is_fixnum(idx):
        return type_error("fixnum", idx)
    return vec.set(idx, value)


def vector_slice(vec: LispValue, lo: LispValue, hi: LispValue) -> LispValue:
    if not isinstance(vec, Vector):
        return type_error("vector", vec)
    if not is_fixnum(lo):
        return type_error("fixnum", lo)
    if not is_fixnum(hi):
        return type_error("fixnum", hi)
    return vec.slice(lo, hi)


PRIMITIVES = {
    # numbers
    "+": add,
    "-": sub,
    "*": mul,
    "/": div,
    "=": _comparison("=", lambda a, b: a == b),
    "<": _comparison("<", lambda a, b: a < b),
    ">": _comparison(">", lambda a, b: a > b),
    "<=": _comparison("<=", lambda a, b: a <= b),
    ">=": _comparison(">=", lambda a, b: a >= b),
    "quotient": quotient,
    "modulo": modulo,
    "fixnum->flonum": fix_to_flo,
    "fixnum-add": _fixnum_op(lambda a, b: a + b),
    "fixnum-sub": _fixnum_op(lambda a, b: a - b),
    "fixnum-mul": _fixnum_op(lambda a, b: a * b),
    "fixnum-div": _fixnum_op(_fixnum_div),
    "flonum-add": _flonum_op(lambda a, b: a + b),
    "flonum-sub": _flonum_op(lambda a, b: a - b),
    "flonum-mul": _flonum_op(lambda a, b: a * b),
    "flonum-div": _flonum_op(_flonum_div),
    # pairs and lists
    "cons": cons,
    "car": car,
    "cdr": cdr,
    "set-car!": set_car,
    "set-cdr!": set_cdr,
    "list": list_,
    "pair?": is_pair,
    "null?": is_null,
    "length": length,
    "append": append,
    "list->vector": ls_to_vec,
    "vector->list": vec_to_ls,
    # strings
    "string-split": string_split,
    "string-join": string_join,
    "string-append": string_append,
    "string-length": string_length,
    "string->vector": str_to_vec,
    "vector->string": vec_to_str,
    # vectors
    "make-vector": make_vector,
    "vector": vector,
    "vector-length": vector_length,
    "vector-ref": vector_ref,
    "vector-set!": vector_set,
    "vector-slice": vector_slice,
}
