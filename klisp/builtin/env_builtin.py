"""Built-in primitives for the klisp runtime environment.

Every primitive is an ordinary Call whose action reads its parameters back
out of the invocation frame, exactly as a closure written in klisp would.
This module defines arithmetic and logic folds, typed comparisons, the list
queries, and `register`, which binds them all into an environment.
"""
from __future__ import annotations

import math
import operator
from functools import reduce
from typing import Callable

from klisp import LispValue
from klisp.errors import KlispArityError, KlispMismatchError
from klisp.types.environment import Environment
from klisp.types.procedure import Call
from klisp.types.symbol import Symbol
from klisp.types.values import (
    as_list,
    as_literal,
    as_raw,
    is_empty,
    length,
    literal_kind,
)

ARGS = Symbol("args")
A = Symbol("a")
B = Symbol("b")


# -------------------------------
# Variadic folds
# -------------------------------
def _divide(a: float, b: float) -> float:
    """IEEE-754 division: x/0 is a signed infinity and 0/0 is nan."""
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def variadic(raw_type: type, op: Callable[[LispValue, LispValue], LispValue]):
    """Left fold over the argument list, seeded with the first argument."""

    def fold(frame: Environment) -> LispValue:
        args = as_list(frame.lookup(ARGS))
        if not args:
            raise KlispArityError(1, 0, at_least=True)
        raws = [as_raw(arg, raw_type) for arg in args]
        return as_literal(reduce(op, raws[1:], raws[0]))

    return fold


ARITHMETIC = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": _divide,
}

LOGIC = {
    "and": lambda a, b: a and b,
    "or": lambda a, b: a or b,
}


# -------------------------------
# Comparisons
# -------------------------------
ORDERED_KINDS = frozenset({"boolean", "number"})


def binary_operation(op: Callable[[LispValue, LispValue], bool], ordered: bool):
    """Compare `a` and `b` when both share one literal type."""

    def compare(frame: Environment) -> LispValue:
        a = frame.lookup(A)
        b = frame.lookup(B)
        kind = literal_kind(a)
        if kind is None or kind != literal_kind(b):
            raise KlispMismatchError(a, b)
        if ordered and kind not in ORDERED_KINDS:
            raise KlispMismatchError(a, b)
        return as_literal(bool(op(a, b)))

    return compare


COMPARISONS = {
    "==": (operator.eq, False),
    "!=": (operator.ne, False),
    "<": (operator.lt, True),
    ">": (operator.gt, True),
    "<=": (operator.le, True),
    ">=": (operator.ge, True),
}


# -------------------------------
# Single-argument primitives
# -------------------------------
def not_(frame: Environment) -> LispValue:
    return as_literal(not as_raw(frame.lookup(A), bool))


def empty_p(frame: Environment) -> LispValue:
    return as_literal(is_empty(frame.lookup(A)))


def length_(frame: Environment) -> LispValue:
    return as_literal(length(frame.lookup(A)))


UNARY = {
    "not": not_,
    "empty?": empty_p,
    "length": length_,
}


# -------------------------------
# Registration
# -------------------------------
def register(env: Environment) -> None:
    """Bind every primitive into `env`. Each Call captures `env` itself."""
    for name, op in ARITHMETIC.items():
        env.add(Symbol(name), Call(env, ARGS, variadic(float, op), name))
    for name, op in LOGIC.items():
        env.add(Symbol(name), Call(env, ARGS, variadic(bool, op), name))
    for name, (op, ordered) in COMPARISONS.items():
        env.add(Symbol(name), Call(env, (A, B), binary_operation(op, ordered), name))
    for name, action in UNARY.items():
        env.add(Symbol(name), Call(env, (A,), action, name))
