from klisp import LispValue
from klisp.evaluation.evaluator import evaluate
from klisp.types.environment import Environment, parent_of
from klisp.types.symbol import Symbol
from klisp.types.values import is_true


def if_form(frame: Environment) -> LispValue:
    caller = parent_of(frame)
    cond = evaluate(frame.lookup(Symbol("cond")), caller)
    branch = Symbol("conseq") if is_true(cond) else Symbol("alt")
    return evaluate(frame.lookup(branch), caller)
