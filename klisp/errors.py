from __future__ import annotations


class KlispError(Exception):
    """ Base class for all klisp errors"""
    pass


class KlispUnboundSymbol(KlispError):
    """ Raised when a symbol is not bound anywhere in the environment chain"""

    def __init__(self, symbol):
        super().__init__(f"Unbound symbol: {symbol}")
        self.symbol = symbol


class KlispArityError(KlispError):
    """ Raised when the number of arguments does not match a parameter list"""

    def __init__(self, expected: int, actual: int, at_least: bool = False):
        qualifier = "at least " if at_least else ""
        super().__init__(f"Expected {qualifier}{expected} arguments, got {actual}")
        self.expected = expected
        self.actual = actual
        self.at_least = at_least


class KlispInvalidForm(KlispError):
    """ Raised when a value is not of the variant an operation requires"""

    def __init__(self, value, expected: str):
        # Late import: the printer depends on the value types, which raise this
        from klisp.debug_utils.pprint import to_lisp_string
        super().__init__(f"Invalid form {to_lisp_string(value)}: expected {expected}")
        self.value = value
        self.expected = expected


class KlispMismatchError(KlispError):
    """ Raised when a binary operation gets operands of differing or unsupported types"""

    def __init__(self, left, right):
        from klisp.types.values import variant_name
        super().__init__(
            f"Mismatching or invalid operand types: {variant_name(left)} and {variant_name(right)}"
        )
        self.left = left
        self.right = right


class KlispSyntaxError(KlispError):
    """ Raised when the reader cannot parse its input"""

    def __init__(self, message: str, position: int | None = None):
        if position is not None:
            message = f"{message} (at offset {position})"
        super().__init__(message)
        self.position = position
