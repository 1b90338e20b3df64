"""Narrowing accessors and structural queries over klisp values.

The value set is closed: Nil, bool, float, Symbol, tuple (list), Call and
Macro. Every accessor dispatches with `match` over those variants and raises
KlispInvalidForm naming the variant it wanted.
"""

from __future__ import annotations

from typing import Literal

from klisp import LispValue
from klisp.errors import KlispInvalidForm
from klisp.types.nil import Nil, NilType
from klisp.types.procedure import Call, Macro
from klisp.types.symbol import Symbol

LiteralKind = Literal["boolean", "number", "nil"]

_RAW_KINDS: dict[type, LiteralKind] = {bool: "boolean", float: "number"}


def literal_kind(value: LispValue) -> LiteralKind | None:
    """Return the literal variant of `value`, or None for non-literals."""
    match value:
        case bool():
            return "boolean"
        case float():
            return "number"
        case NilType():
            return "nil"
        case _:
            return None


def variant_name(value: LispValue) -> str:
    """Name the variant of any value, for diagnostics."""
    kind = literal_kind(value)
    if kind is not None:
        return kind
    match value:
        case Symbol():
            return "symbol"
        case tuple():
            return "list"
        case Call():
            return "call"
        case Macro():
            return "macro"
        case _:
            return type(value).__name__


def as_symbol(value: LispValue) -> Symbol:
    match value:
        case Symbol():
            return value
        case _:
            raise KlispInvalidForm(value, "symbol")


def as_list(value: LispValue) -> tuple:
    match value:
        case tuple():
            return value
        case _:
            raise KlispInvalidForm(value, "list")


def as_literal(raw: bool | int | float | None) -> LispValue:
    """Wrap a raw Python value as a literal. Integers widen to float."""
    match raw:
        case bool():
            return raw
        case int() | float():
            return float(raw)
        case None | NilType():
            return Nil
        case _:
            raise KlispInvalidForm(raw, "literal")


def as_raw(value: LispValue, raw_type: type[bool] | type[float]):
    """Return the raw payload of a literal of the given Python type."""
    expected = _RAW_KINDS[raw_type]
    if literal_kind(value) != expected:
        raise KlispInvalidForm(value, expected)
    return value


def length(value: LispValue) -> int:
    return len(as_list(value))


def is_empty(value: LispValue) -> bool:
    return not as_list(value)


def is_true(value: LispValue) -> bool:
    """Truthiness is defined for Booleans only."""
    match value:
        case bool():
            return value
        case _:
            raise KlispInvalidForm(value, "boolean")
