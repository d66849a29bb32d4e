from __future__ import annotations

from glisp import LispValue
from glisp.types.symbol import Symbol


class Custom:
    """A host-minted runtime type: a tag symbol paired with a boxed value."""

    __slots__ = ("tag", "value")

    def __init__(self, tag: Symbol, value: LispValue):
        self.tag = tag
        self.value = value

    def __repr__(self):
        return f"#<{self.tag}: {id(self):x}>"
