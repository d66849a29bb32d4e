from glisp import LispValue


class TailCall:
    """Evaluation step result meaning "continue the trampoline with fn and args"."""

    __slots__ = ("fn", "args")

    def __init__(self, fn: LispValue, args: list[LispValue]):
        self.fn = fn
        self.args = args
