from __future__ import annotations
import logging
from pathlib import Path

from klisp.config import get_prelude_path
from klisp.evaluation.evaluator import evaluate
from klisp.reader.parser import read_all
from klisp.types.environment import Environment

logger = logging.getLogger(__name__)


def load_source(env: Environment, code: str) -> int:
    """Evaluate every top-level form of `code` into `env`; return the form count."""
    count = 0
    for expr in read_all(code):
        evaluate(expr, env)
        count += 1
    return count


def load_file(env: Environment, path: Path) -> int:
    code = path.read_text(encoding='utf-8')
    count = load_source(env, code)
    logger.debug("Loaded %d forms from %s", count, path)
    return count


def load_prelude(env: Environment, path: Path | None = None) -> None:
    """Bootstrap the library written in klisp itself into `env`.

    A missing file raises FileNotFoundError and a malformed form raises
    KlispSyntaxError; both abort startup.
    """
    path = path if path is not None else get_prelude_path()
    if not path.is_file():
        raise FileNotFoundError(f"Cannot find prelude '{path}' (set KLISP_PRELUDE_PATH)")
    load_file(env, path)
