from klisp import LispValue
from klisp.evaluation.evaluator import evaluate
from klisp.types.environment import Environment, parent_of
from klisp.types.nil import Nil
from klisp.types.symbol import Symbol
from klisp.types.values import as_symbol


def set_form(frame: Environment) -> LispValue:
    """(set! name expr) overwrites an existing binding visible from the caller."""
    caller = parent_of(frame)
    name = as_symbol(frame.lookup(Symbol("name")))
    caller.set(name, evaluate(frame.lookup(Symbol("expr")), caller))
    return Nil
