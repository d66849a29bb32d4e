from __future__ import annotations

from glisp import LispValue


class Macro:
    """Wraps a transformer function applied to unevaluated argument forms."""

    __slots__ = ("transformer",)

    def __init__(self, transformer: LispValue):
        self.transformer = transformer

    def __repr__(self):
        return "#<macro>"
