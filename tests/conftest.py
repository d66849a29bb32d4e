import io

import pytest

from glisp.interpreter import Interpreter, new_root_scope
from glisp.types.ports import OutputPort


# Each test gets its own interpreter and output buffer. Interpreters never
# share a root scope, so nothing defined in one test is visible in another.


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def interp(output):
    """Interpreter with the prelude loaded and standard output captured."""
    return Interpreter(stdout=OutputPort(output))


@pytest.fixture
def bare(output):
    """Interpreter with primitives and builtin macros only."""
    return Interpreter(prelude=None, stdout=OutputPort(output))


@pytest.fixture
def scope():
    return new_root_scope()
