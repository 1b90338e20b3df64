from klisp import LispValue
from klisp.evaluation.evaluator import evaluate
from klisp.types.environment import Environment, parent_of
from klisp.types.nil import Nil
from klisp.types.symbol import Symbol
from klisp.types.values import as_list


def begin_form(frame: Environment) -> LispValue:
    caller = parent_of(frame)
    result: LispValue = Nil
    for expr in as_list(frame.lookup(Symbol("args"))):
        result = evaluate(expr, caller)
    return result
