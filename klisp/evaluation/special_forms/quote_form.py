from klisp import LispValue
from klisp.types.environment import Environment
from klisp.types.symbol import Symbol


def quote_form(frame: Environment) -> LispValue:
    """(quote expr) returns `expr` without evaluating it."""
    return frame.lookup(Symbol("expr"))
