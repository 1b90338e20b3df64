"""Core evaluator for the klisp interpreter.

`evaluate` is a plain recursive function of (form, env). Special forms are
not dispatched here: they are Macro values bound in the environment like any
other callable, so the evaluator only knows the variants of the value model.
"""

from __future__ import annotations

from klisp import LispValue, SExpression
from klisp.errors import KlispInvalidForm
from klisp.types.bind import bind_arguments
from klisp.types.environment import Environment
from klisp.types.nil import NilType
from klisp.types.procedure import Call, Macro
from klisp.types.symbol import Symbol


def evaluate(expr: SExpression, env: Environment) -> LispValue:
    match expr:
        case Symbol():
            return env.lookup(expr)

        # Literals and callables are self-evaluating
        case bool() | float() | NilType() | Call() | Macro():
            return expr

        case tuple() if not expr:
            return expr

        case tuple():
            return apply(evaluate(expr[0], env), expr[1:], env)

        case _:
            raise KlispInvalidForm(expr, "value")


def apply(fn: LispValue, arg_forms: tuple, env: Environment) -> LispValue:
    """Invoke `fn` on the argument forms of a list evaluated in `env`.

    - Macro: bind the unevaluated forms in a frame under the call site.
    - Call: evaluate the forms left to right in `env`, then bind the values
      in a frame under the closure's captured environment.
    """
    match fn:
        case Macro():
            frame = bind_arguments(fn.params, arg_forms, env)
            return fn.action(frame)
        case Call():
            args = tuple(evaluate(arg, env) for arg in arg_forms)
            frame = bind_arguments(fn.params, args, fn.env)
            return fn.action(frame)
        case _:
            raise KlispInvalidForm(fn, "callable")
