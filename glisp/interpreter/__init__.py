from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Literal, Optional

from glisp import LispValue
from glisp.builtin.env_builtin import register
from glisp.builtin.macro_builtin import register as register_macros
from glisp.config import PRELUDE_FILE, get_prelude_root
from glisp.errors import GlispError, GlispSyntaxError
from glisp.eval import eval_port, load_file
from glisp.printer import to_display, to_write
from glisp.reader.parser import read_string
from glisp.types.environment import Scope
from glisp.types.lisp_error import failed, syntax_error, system_error
from glisp.types.ports import InputPort, OutputPort

logger = logging.getLogger(__name__)


def new_root_scope(
    stdin: Optional[InputPort] = None,
    stdout: Optional[OutputPort] = None,
) -> Scope:
    """A fresh root scope holding every primitive and builtin macro."""
    scope = Scope()
    register(scope, stdin, stdout)
    register_macros(scope)
    logger.debug("bootstrapped root scope with %d bindings", len(scope.vars))
    return scope


class Interpreter:
    """
    Orchestrates reading and evaluating glisp code.
    Each instance owns its root scope; definitions never leak between instances.
    Process-wide state (logging, the host recursion limit) is left alone; see
    `glisp.config.configure_logging` and `configure_recursion_limit`.
    """

    def __init__(
        self,
        prelude: str | None | Literal['auto'] = 'auto',
        *,
        stdin: Optional[InputPort] = None,
        stdout: Optional[OutputPort] = None,
    ):
        self.stdin = stdin if stdin is not None else InputPort(sys.stdin)
        self.stdout = stdout if stdout is not None else OutputPort(sys.stdout)
        self.scope: Scope = new_root_scope(self.stdin, self.stdout)

        if prelude is None:
            pass  # explicit: no prelude
        elif prelude == 'auto':
            path = get_prelude_root() / PRELUDE_FILE
            if path.is_file():
                logger.debug("loading prelude %s", path)
                self.eval_prelude(path.read_text(encoding='utf-8'))
            else:
                logger.warning("prelude not found at %s", path)
        elif prelude:
            self.eval_prelude(prelude)

    def eval_prelude(self, code: str) -> None:
        """Evaluate library code; an error value here is a broken prelude."""
        result = self.eval(code)
        if failed(result):
            raise GlispError(f"prelude failed: {result}")

    def eval(self, code: str) -> LispValue:
        """Evaluate every datum in `code` in order and return the last value."""
        try:
            return eval_port(InputPort.from_string(code), self.scope)
        except RecursionError:
            return system_error("maximum recursion depth exceeded")

    eval_string = eval

    def load(self, path: str | Path) -> LispValue:
        try:
            return load_file(str(path), self.scope)
        except RecursionError:
            return system_error("maximum recursion depth exceeded")

    def read(self, code: str) -> LispValue:
        """The first datum in `code`, unevaluated (EOF_OBJECT when there is none)."""
        try:
            return read_string(code)
        except GlispSyntaxError as ex:
            return syntax_error(str(ex))

    @staticmethod
    def write(value: LispValue) -> str:
        return to_write(value)

    @staticmethod
    def display(value: LispValue) -> str:
        return to_display(value)
