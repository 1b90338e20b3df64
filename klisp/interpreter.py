from __future__ import annotations
import logging
from pathlib import Path
from typing import Literal, Union

from klisp import LispValue
from klisp.builtin.env_builtin import register
from klisp.builtin.macro_builtin import register as register_macros
from klisp.evaluation.evaluator import evaluate
from klisp.modules.prelude_loader import load_file, load_prelude, load_source
from klisp.reader.parser import read_all
from klisp.types.environment import Environment
from klisp.types.nil import Nil

logger = logging.getLogger(__name__)

PreludeSpec = Union[Path, str, None, Literal['auto']]


def global_environment(prelude: PreludeSpec = 'auto') -> Environment:
    """Build a fresh global environment.

    Installs the primitives and the special forms, then bootstraps the
    library written in klisp:
    - 'auto': the configured prelude file (KLISP_PRELUDE_PATH or the
      packaged common.lisp)
    - a Path: that file
    - a str: source code evaluated directly
    - None: no library
    """
    env = Environment()
    register(env)
    register_macros(env)
    logger.debug("Installed %d builtins", len(env.vars))

    if prelude == 'auto':
        load_prelude(env)
    elif isinstance(prelude, Path):
        load_prelude(env, prelude)
    elif prelude:
        load_source(env, prelude)
    return env


class Interpreter:
    """
    Reads and evaluates klisp code against one persistent global environment.
    """

    def __init__(self, prelude: PreludeSpec = 'auto'):
        self.env: Environment = global_environment(prelude)

    def eval_all(self, code: str) -> list[LispValue]:
        """Evaluate every form in `code` and return all results in order."""
        return [evaluate(expr, self.env) for expr in read_all(code)]

    def eval(self, code: str) -> LispValue:
        """Evaluate every form in `code` and return the last result (Nil if none)."""
        result: LispValue = Nil
        for expr in read_all(code):
            result = evaluate(expr, self.env)
        return result

    def load(self, path: Path) -> None:
        load_file(self.env, path)
