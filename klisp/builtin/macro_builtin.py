"""Special forms as Macro values (implemented in Python)."""

from klisp.evaluation.special_forms import SPECIAL_FORMS
from klisp.types.environment import Environment
from klisp.types.procedure import Macro


def register(env: Environment) -> None:
    """Bind `quote`, `lambda`, `define`, `if`, `set!` and `begin` into `env`."""
    for name, (params, action) in SPECIAL_FORMS.items():
        env.add(name, Macro(env, params, action, name.id))
