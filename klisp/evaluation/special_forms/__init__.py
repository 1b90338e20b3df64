"""Registry of special forms for the klisp evaluator.

Maps each special form's name to its parameter spec and action. The
evaluator has no special-form table of its own: `klisp.builtin.macro_builtin`
wraps every entry here in a Macro value bound in the global environment, so
these forms are looked up and invoked like any other callable.
"""

from klisp.types.symbol import Symbol
from klisp.evaluation.special_forms.quote_form import quote_form
from klisp.evaluation.special_forms.lambda_form import lambda_form
from klisp.evaluation.special_forms.define_form import define_form
from klisp.evaluation.special_forms.if_form import if_form
from klisp.evaluation.special_forms.set_form import set_form
from klisp.evaluation.special_forms.begin_form import begin_form


def _params(*names: str) -> tuple[Symbol, ...]:
    return tuple(Symbol(n) for n in names)


SPECIAL_FORMS = {
    Symbol("quote"): (_params("expr"), quote_form),
    Symbol("lambda"): (_params("args", "expr"), lambda_form),
    Symbol("define"): (_params("name", "expr"), define_form),
    Symbol("if"): (_params("cond", "conseq", "alt"), if_form),
    Symbol("set!"): (_params("name", "expr"), set_form),
    Symbol("begin"): (Symbol("args"), begin_form),
}
