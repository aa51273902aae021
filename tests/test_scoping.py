from __future__ import annotations

import pytest

from tests.support.harness import (
    JsReferenceError,
    RecordingEnv,
    load_value,
    run_program,
    run_runtime_case,
)

SCENARIOS = [
    pytest.param(
        "function f() { var inner = 1; return inner; } f(); inner;",
        None,
        JsReferenceError,
        id="local-unreachable-after-call",
    ),
    pytest.param(
        "function f(p) { return p; } f(1); p;",
        None,
        JsReferenceError,
        id="param-unreachable-after-call",
    ),
    pytest.param(
        "var a = 1; function f() { var a = 2; return a; } f(); a;",
        ("number", 1),
        None,
        id="var-shadows-outer",
    ),
    pytest.param(
        "var a = 1; function f() { a = 2; return a; } f();",
        ("number", 2),
        None,
        id="assign-visible-inside",
    ),
    pytest.param(
        "var a = 1; function f() { a = 2; } f(); a;",
        ("number", 1),
        None,
        id="assign-shadows-outer",
    ),
    pytest.param(
        "var a = 1; function f(a) { return a; } f(5) + a;",
        ("number", 6),
        None,
        id="param-shadows-outer",
    ),
    pytest.param(
        "function f(n) { if (n == 0) { return 0; } var mine = n; f(n - 1); return mine; } f(3);",
        ("number", 3),
        None,
        id="recursive-frames-isolated",
    ),
]


@pytest.mark.parametrize("source, expectation, expected_exc", SCENARIOS)
def test_scoping_scenarios(source: str, expectation, expected_exc) -> None:
    run_runtime_case(source, expectation, expected_exc)


@pytest.mark.parametrize(
    "body",
    [
        pytest.param("return 1;", id="return"),
        pytest.param("var x = 1;", id="fall-through"),
        pytest.param("while (true) { return 1; }", id="return-in-loop"),
    ],
)
def test_call_pops_its_scope_once(body: str) -> None:
    env = RecordingEnv()
    run_program(f"function f() {{ {body} }} f();", env)

    pushes = env.ops("push")
    pops = env.ops("pop")
    assert len(pushes) == 1
    assert pops == [("pop", False)]
    assert env.heap.depth == 1


def test_scope_popped_when_body_fails() -> None:
    env = RecordingEnv()

    with pytest.raises(JsReferenceError):
        run_program("function f() { return missing; } f();", env)

    assert len(env.ops("push")) == 1
    assert len(env.ops("pop")) == 1
    assert env.heap.depth == 1


def test_nested_calls_balance_scopes() -> None:
    env = RecordingEnv()
    run_program("function g() { return 1; } function f() { return g() + 1; } f();", env)

    kinds = [call[0] for call in env.calls if call[0] in ("push", "pop")]
    assert kinds == ["push", "push", "pop", "pop"]
    assert env.heap.depth == 1


def test_call_pushes_captured_scope() -> None:
    env = RecordingEnv()
    run_program("function f() { return 1; } f();", env)

    (_, reserved), = env.ops("add")
    assert env.ops("push") == [("push", reserved)]


def test_arguments_evaluated_before_push() -> None:
    env = RecordingEnv()
    run_program("function f(a, b) { return a; } var v = 3; var w = 4;", env)
    env.calls.clear()

    run_program("f(v, w);", env)

    order = [call[:2] for call in env.calls]
    push_at = order.index(("push", env.ops("push")[0][1]))
    assert order.index(("load", "f")) < order.index(("load", "v"))
    assert order.index(("load", "v")) < order.index(("load", "w")) < push_at


def test_parameters_bound_in_call_scope(heap) -> None:
    run_program("var seen = 0; function f(a, b) { seen = a; return b; }", heap)

    run_program("f(1);", heap)

    assert load_value(heap, "seen").value == 0
    assert heap.bindings().keys() == {"seen", "f"}
