from __future__ import annotations

from typing import Iterable, Iterator

from glisp import LispValue
from glisp.types.lisp_error import LispError, error


class Vector:
    """Fixed-length, mutably indexable sequence. Every access is bounds checked."""

    __slots__ = ("items",)

    def __init__(self, items: Iterable[LispValue] = ()):
        self.items: list[LispValue] = list(items)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[LispValue]:
        return iter(self.items)

    def _check_index(self, i: int) -> LispError | None:
        if i < 0 or i >= len(self.items):
            return error(f"invalid index ({i})")
        return None

    def get(self, i: int) -> LispValue:
        err = self._check_index(i)
        if err is not None:
            return err
        return self.items[i]

    def set(self, i: int, value: LispValue) -> LispError | None:
        err = self._check_index(i)
        if err is not None:
            return err
        self.items[i] = value
        return None

    def slice(self, lo: int, hi: int) -> Vector | LispError:
        """Copy of [lo, hi). An empty slice is allowed anywhere in [0, len]."""
        if lo < 0 or lo > len(self.items):
            return error(f"invalid index ({lo})")
        if hi < lo or hi > len(self.items):
            return error(f"invalid index ({hi})")
        return Vector(self.items[lo:hi])

    def __repr__(self):
        from glisp.printer import to_write
        return to_write(self)
