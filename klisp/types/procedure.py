"""Callable values: closures (Call) and unevaluated-argument forms (Macro)."""

from __future__ import annotations

from io import StringIO
from typing import TYPE_CHECKING

from klisp import ActionFn, SExpression

if TYPE_CHECKING:
    from klisp.types.environment import Environment


class Procedure:
    """Shared shape of Call and Macro.

    - env: the environment captured where the value was built. A Call uses
      it as the parent of every invocation frame; a Macro keeps it only for
      introspection, since its frames hang off the call site.
    - params: the parameter specification, a Symbol or a tuple of Symbols.
    - action: Python callable receiving the freshly bound invocation frame
      and returning the result value.
    - name: optional label used when printing.
    """

    __slots__ = ("env", "params", "action", "name")

    kind = "procedure"

    def __init__(
        self,
        env: Environment,
        params: SExpression,
        action: ActionFn,
        name: str | None = None,
    ):
        self.env = env
        self.params = params
        self.action = action
        self.name = name

    def __call__(self, frame: Environment):
        return self.action(frame)

    def __str__(self) -> str:
        from klisp.debug_utils.pprint import to_lisp_string

        with StringIO() as buffer:
            buffer.write(f"#<{self.kind}")
            if self.name:
                buffer.write(f" {self.name}")
            buffer.write(f" {to_lisp_string(self.params)}>")
            return buffer.getvalue()

    def __repr__(self) -> str:
        return str(self)


class Call(Procedure):
    """A closure: arguments are evaluated at the call site before binding."""

    __slots__ = ()
    kind = "call"


class Macro(Procedure):
    """Arguments are bound unevaluated; the action decides what to evaluate."""

    __slots__ = ()
    kind = "macro"
