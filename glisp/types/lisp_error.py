"""First-class error values.

Errors are ordinary values returned up the call chain; every component checks
intermediate results with `failed` and hands the first error back unchanged.
"""

from __future__ import annotations

from glisp import LispValue
from glisp.types.symbol import Symbol

ERROR = Symbol("error")
TYPE_ERROR = Symbol("type-error")
ARGUMENT_ERROR = Symbol("argument-error")
SYSTEM_ERROR = Symbol("system-error")
SYNTAX_ERROR = Symbol("syntax-error")


class LispError:
    __slots__ = ("kind", "message")

    def __init__(self, kind: Symbol, message: LispValue):
        self.kind = kind
        self.message = message

    def __str__(self):
        from glisp.printer import to_display
        return f"{self.kind}: {to_display(self.message)}"

    def __repr__(self):
        return f"LispError({self.kind.id!r}, {self.message!r})"


def failed(x: LispValue) -> bool:
    return isinstance(x, LispError)


def throw(kind: Symbol, message: LispValue) -> LispError:
    return LispError(kind, message)


def error(message: str) -> LispError:
    return LispError(ERROR, message)


def type_error(expected: str, obj: LispValue) -> LispError:
    from glisp.printer import to_write
    return LispError(TYPE_ERROR, f"expecting {expected}: {to_write(obj)}")


def argument_error(fn: LispValue, args: list[LispValue]) -> LispError:
    from glisp.printer import to_write
    from glisp.types.pair import make_list
    return LispError(
        ARGUMENT_ERROR,
        f"wrong number of arguments to {to_write(fn)}: {to_write(make_list(args))}",
    )


def system_error(exc: BaseException | str) -> LispError:
    return LispError(SYSTEM_ERROR, str(exc))


def syntax_error(message: str) -> LispError:
    return LispError(SYNTAX_ERROR, message)
