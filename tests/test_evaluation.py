import pytest

from klisp.errors import KlispArityError, KlispInvalidForm, KlispUnboundSymbol
from klisp.evaluation.evaluator import evaluate
from klisp.types.environment import Environment
from klisp.types.nil import Nil
from klisp.types.procedure import Call, Macro
from klisp.types.symbol import Symbol


# ------------------ Evaluation rules ------------------

def test_self_evaluating_literals(env):
    assert evaluate(1.0, env) == 1.0
    assert evaluate(True, env) is True
    assert evaluate(Nil, env) is Nil
    assert evaluate((), env) == ()


def test_symbol_lookup(env, run):
    run("(define x 42)")
    assert evaluate(Symbol("x"), env) == 42.0
    with pytest.raises(KlispUnboundSymbol):
        evaluate(Symbol("z"), env)


def test_callables_are_self_evaluating(env):
    plus = env.lookup(Symbol("+"))
    quote = env.lookup(Symbol("quote"))
    assert evaluate(plus, env) is plus
    assert evaluate(quote, env) is quote


def test_values_outside_the_model_are_rejected(env):
    with pytest.raises(KlispInvalidForm):
        evaluate("a string", env)


def test_head_must_be_callable(run):
    with pytest.raises(KlispInvalidForm) as excinfo:
        run("(1 2 3)")
    assert excinfo.value.expected == "callable"


def test_head_is_evaluated(run):
    assert run("((lambda (x) (* x 2)) 21)") == 42.0
    assert run("((if true + *) 2 3)") == 5.0


def test_closures_can_be_passed_as_data(run):
    run("(define twice (lambda (f x) (f (f x))))")
    assert run("(twice (lambda (n) (+ n 3)) 1)") == 7.0


def test_call_arguments_are_evaluated_left_to_right(run):
    run("(define trace 0)")
    run("(define step (lambda (n) (begin (set! trace (+ (* trace 10) n)) n)))")
    run("(+ (step 1) (step 2) (step 3))")
    assert run("trace") == 123.0


def test_python_macro_receives_unevaluated_forms(env, run):
    seen = []

    def capture(frame):
        seen.append(frame.lookup(Symbol("forms")))
        return Nil

    env.add(Symbol("capture"), Macro(env, Symbol("forms"), capture))
    run("(capture (undefined-thing 1) x)")
    assert seen == [((Symbol("undefined-thing"), 1.0), Symbol("x"))]


def test_macro_frame_hangs_off_the_call_site(env, run):
    frames = []
    env.add(Symbol("here"), Macro(env, (), lambda frame: frames.append(frame) or Nil))
    run("((lambda (y) (here)) 5)")
    caller = frames[0].parent
    assert caller.lookup(Symbol("y")) == 5.0


def test_python_call_receives_evaluated_arguments(env, run):
    env.add(Symbol("pair-sum"), Call(env, (Symbol("a"), Symbol("b")),
                                     lambda frame: frame.lookup(Symbol("a")) + frame.lookup(Symbol("b"))))
    assert run("(pair-sum (+ 1 1) 3)") == 5.0


# ------------------ Scoping ------------------

def test_lexical_scoping(run):
    run("(define x 1)")
    run("(define make (lambda () (lambda () x)))")
    run("(define shadow (lambda (x) (make)))")
    run("(define closure (shadow 2))")
    run("(define call-from (lambda (x f) (f)))")
    assert run("(call-from 3 closure)") == 1.0


def test_closure_sees_its_defining_frame(run):
    run("(define adder (lambda (n) (lambda (x) (+ x n))))")
    run("(define add5 (adder 5))")
    run("(define add7 (adder 7))")
    assert run("(add5 1)") == 6.0
    assert run("(add7 1)") == 8.0


def test_closure_keeps_frame_alive_and_shares_it(run):
    run("(define counter (lambda (n) (lambda () (begin (set! n (+ n 1)) n))))")
    run("(define tick (counter 0))")
    assert run("(tick)") == 1.0
    assert run("(tick)") == 2.0
    assert run("(tick)") == 3.0


def test_each_invocation_gets_a_fresh_frame(run):
    run("(define f (lambda (a) (begin (define local a) local)))")
    assert run("(f 1)") == 1.0
    assert run("(f 2)") == 2.0
    with pytest.raises(KlispUnboundSymbol):
        run("local")


def test_recursion_through_global_binding(run):
    run("(define fib (lambda (n) (if (< n 2) n (+ (fib (- n 1)) (fib (- n 2))))))")
    assert run("(fib 15)") == 610.0


# ------------------ Arity ------------------

@pytest.mark.parametrize("source", [
    "((lambda (a b) a) 1)",
    "((lambda (a b) a) 1 2 3)",
    "((lambda () 1) 1)",
    "(not true false)",
    "(== 1)",
    "(quote)",
    "(if true 1)",
])
def test_arity_errors(run, source):
    with pytest.raises(KlispArityError):
        run(source)


@pytest.mark.parametrize("source, expected", [
    ("((lambda args (length args)))", 0.0),
    ("((lambda args (length args)) 1 2 3)", 3.0),
    ("((lambda args args) 1 (+ 1 1) 3)", (1.0, 2.0, 3.0)),
])
def test_rest_parameter(run, source, expected):
    assert run(source) == expected


def test_invalid_parameter_spec_fails_at_call_time(run):
    run("(define bad (lambda 5 1))")
    with pytest.raises(KlispInvalidForm):
        run("(bad)")
