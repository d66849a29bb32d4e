"""Application engine for glisp.

`apply` is the trampoline: a loop that applies primitives directly and, for
closures, evaluates the body in a fresh child of the captured scope with the
last body expression in tail position. A tail call comes back as a TailCall
and becomes the next iteration of the loop instead of a nested Python call,
so self and mutual tail recursion run in constant host stack.
"""

from __future__ import annotations

from glisp import LispValue
from glisp.errors import GlispFatalError
from glisp.types.closure import Closure
from glisp.types.lisp_error import failed, type_error
from glisp.types.primitive import Primitive
from glisp.types.tail_call import TailCall
from glisp.evaluation.special_forms.begin_form import eval_sequence


def apply(fn: LispValue, args: list[LispValue]) -> LispValue:
    """Apply a Primitive or Closure to already-evaluated arguments."""
    # Lazy import to avoid circular imports (the evaluator calls back into apply)
    from glisp.evaluation.evaluator import eval_expr

    while True:
        if isinstance(fn, Primitive):
            result = fn.call(args)
            if isinstance(result, TailCall):
                raise GlispFatalError(f"{fn!r} returned a TailCall")
            return result

        if not isinstance(fn, Closure):
            return type_error("function", fn)

        frame = fn.bind_arguments(args)
        if failed(frame):
            return frame
        result = eval_sequence(fn.body, frame, eval_expr, True)
        if isinstance(result, TailCall):
            fn, args = result.fn, result.args
            continue
        return result
