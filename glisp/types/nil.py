from __future__ import annotations


class Constant:
    """A named singleton marker. The void value `#v` is Python's None."""

    __slots__ = ("name",)

    def __init__(self, name: str):
        self.name = name

    def __repr__(self):
        return self.name

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self


EMPTY_LIST = Constant("()")
EOF_OBJECT = Constant("#eof-object")
