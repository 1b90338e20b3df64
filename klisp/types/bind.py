from __future__ import annotations

from typing import Sequence

from klisp import LispValue, SExpression
from klisp.errors import KlispArityError, KlispInvalidForm
from klisp.types.environment import Environment
from klisp.types.symbol import Symbol
from klisp.types.values import as_symbol


def bind_arguments(
    params: SExpression,
    supplied_args: Sequence[LispValue],
    parent: Environment,
) -> Environment:
    """
    Single source of truth for parameter binding in klisp.

    - A single Symbol binds the whole argument sequence as one list.
    - A list of Symbols binds positionally; the counts must match exactly.

    Returns a new Environment whose parent is `parent`. Nothing is written
    to `parent` or any other existing frame.
    """
    local_env = Environment(parent)

    match params:
        case Symbol():
            local_env.add(params, tuple(supplied_args))
        case tuple():
            if len(params) != len(supplied_args):
                raise KlispArityError(len(params), len(supplied_args))
            for formal, arg in zip(params, supplied_args):
                local_env.add(as_symbol(formal), arg)
        case _:
            raise KlispInvalidForm(params, "symbol")

    return local_env
