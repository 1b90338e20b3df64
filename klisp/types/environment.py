"""Runtime environment for klisp.

An Environment is one frame mapping Symbols to values plus a link to its
parent frame. `add` writes to this frame only; `lookup` and `set` walk the
chain outward. Frames are built once per Call/Macro invocation (see
`klisp.types.bind`), except the global frame, which `global_environment()`
builds once per session.
"""

from __future__ import annotations

from io import StringIO
from typing import Iterator, Optional, Sequence

from klisp import LispValue, SExpression
from klisp.errors import KlispInvalidForm, KlispUnboundSymbol
from klisp.types.symbol import Symbol


class Environment:
    """Hierarchical mapping from Symbols to Lisp values."""

    __slots__ = ("vars", "parent")

    def __init__(self, parent: Optional[Environment] = None):
        self.vars: dict[Symbol, LispValue] = {}
        self.parent: Environment | None = parent

    @classmethod
    def create(
        cls, parent: Environment, params: SExpression, args: Sequence[LispValue]
    ) -> Environment:
        """New frame under `parent` with `params` bound against `args`."""
        from klisp.types.bind import bind_arguments
        return bind_arguments(params, args, parent)

    def add(self, name: Symbol, value: LispValue) -> None:
        """Bind `name` in this frame. Redefinition is last-wins."""
        if not isinstance(name, Symbol):
            raise KlispInvalidForm(name, "symbol")
        self.vars[name] = value

    def find(self, symbol: Symbol) -> Optional[Environment]:
        """Find the nearest environment in the chain that contains `symbol`."""
        env: Optional[Environment] = self
        while env is not None:
            if symbol in env.vars:
                return env
            env = env.parent
        return None

    def lookup(self, name: Symbol) -> LispValue:
        env = self.find(name)
        if env is None:
            raise KlispUnboundSymbol(name)
        return env.vars[name]

    def set(self, name: Symbol, value: LispValue) -> None:
        """Overwrite the existing binding `lookup` would find.

        Raises KlispUnboundSymbol if no frame in the chain binds `name`.
        """
        env = self.find(name)
        if env is None:
            raise KlispUnboundSymbol(name)
        env.vars[name] = value

    def names(self) -> Iterator[Symbol]:
        """Yield every visible symbol once, innermost frames first."""
        seen: set[Symbol] = set()
        env: Optional[Environment] = self
        while env is not None:
            for name in env.vars:
                if name not in seen:
                    seen.add(name)
                    yield name
            env = env.parent

    def _write_vars(self, buffer: StringIO) -> None:
        """Write this frame's variables into the buffer in a compact form."""
        buffer.write("{")
        first = True
        for k, v in self.vars.items():
            if not first:
                buffer.write(", ")
            buffer.write(f"{k}: {v!r}")
            first = False
        buffer.write("}")

    def __str__(self) -> str:
        """Human-readable single-frame view with an indicator for parent."""
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.parent is not None:
                buffer.write(" -> ...")  # indicate parent exists
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Detailed chain representation for debugging purposes."""
        with StringIO() as buffer:
            buffer.write("<Environment chain: ")
            env: Optional[Environment] = self
            chain = []
            while env is not None:
                env_buf = StringIO()
                env._write_vars(env_buf)
                chain.append(env_buf.getvalue())
                env = env.parent
            buffer.write(" -> ".join(chain))
            buffer.write(">")
            return buffer.getvalue()


def parent_of(env: Environment) -> Optional[Environment]:
    """The frame `env` was created under: for a Macro frame, the call site."""
    return env.parent
