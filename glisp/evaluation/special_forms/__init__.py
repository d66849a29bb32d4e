"""Registry of special forms for the glisp evaluator.

Maps Symbols to handler functions that implement non-standard evaluation rules.
The evaluator consults this table before ordinary function application. Each
handler receives the form's arguments as a Python list, the current scope,
the evaluator and the caller's tail flag. `define-macro` never reaches the
evaluator: the expander rewrites it into `define`.
"""

from glisp.types.symbol import Symbol
from glisp.evaluation.special_forms.quote_form import quote_form
from glisp.evaluation.special_forms.if_form import if_form
from glisp.evaluation.special_forms.lambda_form import lambda_form
from glisp.evaluation.special_forms.set_form import set_form
from glisp.evaluation.special_forms.define_form import define_form
from glisp.evaluation.special_forms.begin_form import begin_form, eval_sequence

QUOTE = Symbol("quote")
IF = Symbol("if")
LAMBDA = Symbol("lambda")
SET = Symbol("set!")
DEFINE = Symbol("define")
BEGIN = Symbol("begin")
DEFINE_MACRO = Symbol("define-macro")
MACRO = Symbol("macro")

SPECIAL_FORMS = {
    QUOTE: quote_form,
    IF: if_form,
    LAMBDA: lambda_form,
    SET: set_form,
    DEFINE: define_form,
    BEGIN: begin_form,
}

__all__ = [
    "SPECIAL_FORMS",
    "eval_sequence",
    "QUOTE",
    "IF",
    "LAMBDA",
    "SET",
    "DEFINE",
    "BEGIN",
    "DEFINE_MACRO",
    "MACRO",
]
