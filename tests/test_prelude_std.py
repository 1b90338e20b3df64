from pathlib import Path

import pytest

from klisp.config import get_prelude_path
from klisp.errors import KlispSyntaxError, KlispUnboundSymbol
from klisp.interpreter import Interpreter, global_environment
from klisp.modules.prelude_loader import load_prelude
from klisp.types.environment import Environment
from klisp.types.symbol import Symbol


@pytest.fixture(scope="module")
def itp():
    return Interpreter()


@pytest.mark.parametrize(
    "source, expected",
    [
        ("(list 1 2 3)", (1.0, 2.0, 3.0)),
        ("(list)", ()),
        ("(identity 'a)", Symbol("a")),
        ("(inc 41)", 42.0),
        ("(dec 43)", 42.0),
        ("(square 7)", 49.0),
        ("(abs -3)", 3.0),
        ("(abs 3)", 3.0),
        ("(min 2 5)", 2.0),
        ("(max 2 5)", 5.0),
        ("(zero? 0)", True),
        ("(positive? -1)", False),
        ("(negative? -1)", True),
        ("(xor true false)", True),
        ("(xor true true)", False),
        ("(fact 5)", 120.0),
        ("((compose inc square) 3)", 10.0),
        ("(length (list 1 2))", 2.0),
    ],
)
def test_prelude_functions(itp, source, expected):
    assert itp.eval(source) == expected


def test_default_prelude_ships_with_the_package():
    assert get_prelude_path().name == "common.lisp"
    assert get_prelude_path().is_file()


def test_prelude_path_from_environment(tmp_path, monkeypatch):
    lib = tmp_path / "lib.lisp"
    lib.write_text("(define answer 42)\n", encoding="utf-8")
    monkeypatch.setenv("KLISP_PRELUDE_PATH", str(lib))
    assert Interpreter().eval("answer") == 42.0


def test_prelude_from_explicit_path(tmp_path):
    lib = tmp_path / "lib.lisp"
    lib.write_text("; two forms\n(define a 1)\n(define b (+ a 1))\n", encoding="utf-8")
    env = global_environment(prelude=lib)
    assert env.lookup(Symbol("b")) == 2.0


def test_prelude_from_source_string():
    env = global_environment(prelude="(define c 3)")
    assert env.lookup(Symbol("c")) == 3.0


def test_no_prelude():
    env = global_environment(prelude=None)
    with pytest.raises(KlispUnboundSymbol):
        env.lookup(Symbol("list"))
    assert env.lookup(Symbol("define")) is not None


def test_missing_prelude_aborts(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_prelude(Environment(), tmp_path / "missing.lisp")


def test_malformed_prelude_aborts(tmp_path):
    lib = tmp_path / "bad.lisp"
    lib.write_text("(define a 1)\n(define b", encoding="utf-8")
    with pytest.raises(KlispSyntaxError):
        global_environment(prelude=lib)


def test_interpreter_eval_all_and_empty_input():
    itp = Interpreter(prelude=None)
    assert itp.eval_all("(define x 2) (+ x 1) x") == [itp.eval("nil"), 3.0, 2.0]
    assert itp.eval("") == itp.eval("nil")


def test_interpreter_load(tmp_path):
    script = tmp_path / "script.lisp"
    script.write_text("(define greeting 'hello)", encoding="utf-8")
    itp = Interpreter(prelude=None)
    itp.load(Path(script))
    assert itp.eval("greeting") == Symbol("hello")
