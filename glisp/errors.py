"""Host-level exceptions.

Lisp programs never see these: runtime failures are LispError values (see
glisp.types.lisp_error). Exceptions are reserved for the reader, which has no
partial result to return, and for broken interpreter invariants.
"""


class GlispError(Exception):
    """ Base class for all glisp host errors"""
    pass


class GlispSyntaxError(GlispError):
    """ Raised by the reader when the input cannot be parsed"""

    def __init__(self, message: str, pos: int = 0, line: int = 1, column: int = 1):
        super().__init__(f"{message} at line {line}, column {column} (position {pos})")
        self.message = message
        self.pos = pos
        self.line = line
        self.column = column


class GlispFatalError(GlispError):
    """ Raised when an internal invariant is violated; never returned as a value"""
