import pytest

from klisp.evaluation.evaluator import evaluate
from klisp.interpreter import global_environment
from klisp.reader.parser import read_all


@pytest.fixture
def env():
    """Fresh global environment with primitives and special forms, no prelude."""
    return global_environment(prelude=None)


@pytest.fixture
def run(env):
    """Evaluate every form of a source string in `env`; return the last result."""
    def _run(source: str):
        result = None
        for expr in read_all(source):
            result = evaluate(expr, env)
        return result
    return _run
