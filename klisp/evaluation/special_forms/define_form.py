from klisp import LispValue
from klisp.evaluation.evaluator import evaluate
from klisp.types.environment import Environment, parent_of
from klisp.types.nil import Nil
from klisp.types.symbol import Symbol
from klisp.types.values import as_symbol


def define_form(frame: Environment) -> LispValue:
    """
    (define name expr)

    Binds in the caller's frame, never in this macro frame, which is
    dropped as soon as the form returns.
    """
    caller = parent_of(frame)
    name = as_symbol(frame.lookup(Symbol("name")))
    caller.add(name, evaluate(frame.lookup(Symbol("expr")), caller))
    return Nil
