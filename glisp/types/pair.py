"""Mutable cons cells and the list traversal helpers built on them.

Pairs compare by identity. Proper lists end in EMPTY_LIST; anything else in the
final `rest` makes the list improper. `set-cdr!` can make a chain cyclic, so
the helpers that walk a whole chain detect cycles instead of looping forever.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from glisp import LispValue
from glisp.types.nil import EMPTY_LIST


class Pair:
    __slots__ = ("first", "rest")

    def __init__(self, first: LispValue, rest: LispValue):
        self.first = first
        self.rest = rest

    def __repr__(self):
        from glisp.printer import to_write
        return to_write(self)


def cons(a: LispValue, d: LispValue) -> Pair:
    return Pair(a, d)


def first(x: Pair) -> LispValue:
    return x.first


def rest(x: Pair) -> LispValue:
    return x.rest


def make_list(items: Iterable[LispValue], tail: LispValue = EMPTY_LIST) -> LispValue:
    """Right-fold `items` into a chain of pairs ending in `tail`."""
    result = tail
    for item in reversed(list(items)):
        result = Pair(item, result)
    return result


def list_length(ls: LispValue) -> int:
    """Number of pairs in a proper list.

    Raises ValueError for improper or cyclic lists.
    """
    n = 0
    slow = fast = ls
    while True:
        if fast is EMPTY_LIST:
            return n
        if not isinstance(fast, Pair):
            raise ValueError("improper list")
        fast = fast.rest
        n += 1
        if fast is EMPTY_LIST:
            return n
        if not isinstance(fast, Pair):
            raise ValueError("improper list")
        fast = fast.rest
        n += 1
        slow = slow.rest
        if fast is slow:
            raise ValueError("cyclic list")


def iter_list(ls: LispValue) -> Iterator[LispValue]:
    """Yield the elements of a chain of pairs, ignoring an improper tail."""
    while isinstance(ls, Pair):
        yield ls.first
        ls = ls.rest


def to_list(ls: LispValue) -> list[LispValue]:
    """Python list of the elements of a proper list; ValueError otherwise."""
    list_length(ls)
    return list(iter_list(ls))


def list_tail(ls: LispValue, idx: int) -> LispValue:
    for _ in range(idx):
        if not isinstance(ls, Pair):
            raise ValueError(f"list too short for index {idx}")
        ls = ls.rest
    return ls


def list_ref(ls: LispValue, idx: int) -> LispValue:
    tail = list_tail(ls, idx)
    if not isinstance(tail, Pair):
        raise ValueError(f"list too short for index {idx}")
    return tail.first
