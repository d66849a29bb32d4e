# Core type aliases for the glisp data model.
# Runtime data is a closed set of variants: bool, numbers (int / Fraction / float),
# str, Symbol, Pair, EMPTY_LIST, Vector, Closure, Primitive, Macro, Custom,
# LispError, the port types, Scope and None (the void value `#v`).
#
# Naming guidance:
# - SExpression: Use in reader/expander code to denote syntactic forms (code-as-data).
# - LispValue:  Use in evaluator/runtime code to denote evaluated values.
# Both aliases resolve to `Any`; code and data share one representation.

from typing import Any, Callable

# Runtime value alias
LispValue = Any
# Forms alias (often used interchangeably in this codebase)
SExpression = LispValue

# Evaluator function type: passed into special forms so they can recurse
EvaluatorFn = Callable[..., LispValue]
