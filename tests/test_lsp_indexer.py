import pytest

from klisp_lsp.indexer import (
    build_index,
    builtin_signatures,
    callee_before,
    position_from_offset,
    word_at,
)

SOURCE = """\
; sample
(define limit 10)
(define clamp
  (lambda (n) (if (> n limit) limit n)))
(clamp 12)
"""


def test_top_level_defines_are_indexed():
    idx = build_index(SOURCE)
    assert set(idx.symbols) == {"limit", "clamp"}
    assert idx.symbols["limit"].kind == "var"
    assert (idx.symbols["limit"].line, idx.symbols["limit"].col) == (1, 8)
    assert idx.symbols["clamp"].kind == "function"
    assert idx.paren_balance == 0
    assert idx.problems == []


def test_nested_defines_are_not_indexed():
    idx = build_index("(define f (lambda () (begin (define inner 1) inner)))")
    assert set(idx.symbols) == {"f"}


def test_syntax_errors_become_problems():
    idx = build_index("(define a 1)\n  (define b")
    assert idx.paren_balance == 1
    assert len(idx.problems) == 1
    problem = idx.problems[0]
    assert "Unmatched" in problem.message
    assert (problem.line, problem.col) == (1, 2)


def test_stray_close_paren():
    idx = build_index("(a))")
    assert idx.paren_balance == -1
    assert idx.problems[0].col == 3


def test_builtin_signatures_come_from_the_global_environment():
    sigs = builtin_signatures()
    assert sigs["+"] == "(+ args...)"
    assert sigs["=="] == "(== a b)"
    assert sigs["if"] == "(if cond conseq alt)"
    assert sigs["begin"] == "(begin args...)"
    assert sigs["fact"] == "(fact n)"
    assert sigs["list"] == "(list args...)"


def test_builtin_signatures_survive_a_broken_prelude(monkeypatch, tmp_path):
    monkeypatch.setenv("KLISP_PRELUDE_PATH", str(tmp_path / "missing.lisp"))
    builtin_signatures.cache_clear()
    try:
        sigs = builtin_signatures()
    finally:
        builtin_signatures.cache_clear()
    assert sigs["+"] == "(+ args...)"
    assert sigs["set!"] == "(set! name expr)"
    assert "fact" not in sigs


@pytest.mark.parametrize("offset, expected", [(0, (0, 0)), (3, (0, 3)), (5, (1, 1))])
def test_position_from_offset(offset, expected):
    assert position_from_offset("abc\ndef", offset) == expected


def test_word_at_and_callee_before():
    text = "(define x (max 1 2))\n"
    assert word_at(text, 0, 12) == "max"
    assert word_at(text, 0, 2) == "define"
    assert word_at(text, 5, 0) is None
    assert callee_before(text, 0, 15) == "max"
    assert callee_before("abc", 0, 3) is None
