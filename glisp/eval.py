"""Top-level evaluation: expand, then evaluate.

Also the file/port loading helpers shared by the `load` primitive and the
Interpreter facade.
"""

from __future__ import annotations

import logging
from pathlib import Path

from glisp import SExpression, LispValue
from glisp.config import get_load_paths
from glisp.errors import GlispFatalError, GlispSyntaxError
from glisp.evaluation.evaluator import eval_expr
from glisp.evaluation.expander import expand
from glisp.reader.parser import Reader
from glisp.reader.reader_macros import ReadTable
from glisp.types.environment import Scope
from glisp.types.lisp_error import failed, syntax_error, system_error
from glisp.types.nil import EOF_OBJECT
from glisp.types.ports import InputPort
from glisp.types.tail_call import TailCall

logger = logging.getLogger(__name__)


def evaluate(expr: SExpression, scope: Scope) -> LispValue:
    expanded = expand(expr, scope)
    if failed(expanded):
        return expanded
    result = eval_expr(expanded, scope)
    if isinstance(result, TailCall):
        raise GlispFatalError("tail call escaped the trampoline")
    return result


def eval_port(port: InputPort, scope: Scope, read_table: ReadTable | None = None) -> LispValue:
    """
    Read and evaluate each datum in turn, returning the last value (#v when
    there is none). Reading is interleaved with evaluation so a macro defined
    by one form is usable by the next. Stops at the first error value; a
    parse failure becomes a syntax-error value.
    """
    reader = Reader(port, read_table)
    result: LispValue = None
    while True:
        try:
            expr = reader.read()
        except GlispSyntaxError as ex:
            logger.debug("syntax error: %s", ex)
            return syntax_error(str(ex))
        if expr is EOF_OBJECT:
            return result
        result = evaluate(expr, scope)
        if failed(result):
            return result


def resolve_load_path(path: str) -> Path:
    p = Path(path)
    if p.is_absolute() or p.exists():
        return p
    for root in get_load_paths():
        candidate = root / p
        if candidate.is_file():
            return candidate
    return p


def load_file(path: str, scope: Scope, read_table: ReadTable | None = None) -> LispValue:
    resolved = resolve_load_path(path)
    logger.debug("loading %s", resolved)
    try:
        with open(resolved, encoding="utf-8") as f:
            return eval_port(InputPort(f), scope, read_table)
    except OSError as ex:
        return system_error(ex)
