from klisp import LispValue
from klisp.evaluation.evaluator import evaluate
from klisp.types.environment import Environment
from klisp.types.procedure import Call
from klisp.types.symbol import Symbol


def lambda_form(frame: Environment) -> LispValue:
    """
    (lambda args expr)

    The closure captures this invocation frame, whose parent is the place the
    lambda was written. `args` is kept unevaluated as the parameter spec; it
    is validated when the closure is invoked.
    """
    params = frame.lookup(Symbol("args"))
    body = frame.lookup(Symbol("expr"))

    def run_body(call_frame: Environment) -> LispValue:
        return evaluate(body, call_frame)

    return Call(frame, params, run_body)
