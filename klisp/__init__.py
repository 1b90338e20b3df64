# Core type aliases for klisp's data model.
# Values are a closed set of Python types: Nil, bool, float, Symbol, tuple
# (lists), Call and Macro. The same objects represent code (forms) and
# runtime values.
#
# Naming guidance:
# - SExpression: use in reader/special-form code to denote unevaluated forms.
# - LispValue:  use in evaluator/runtime code to denote evaluated values.
# Both aliases resolve to `Any` and are interchangeable.

from typing import Any, Callable

__version__ = "0.3.0"

# Runtime value alias
LispValue = Any
# Forms alias (often used interchangeably in this codebase)
SExpression = LispValue

# Action of a Call or Macro: receives the freshly bound invocation frame
ActionFn = Callable[..., LispValue]
