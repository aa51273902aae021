from __future__ import annotations

import math

import pytest

from tests.support.harness import (
    AllocError,
    Binding,
    BindingNotFound,
    FunctionRecord,
    Heap,
    HeapError,
    JsBool,
    JsHeapRef,
    JsNull,
    JsNumber,
    JsUndefined,
)
from tinyjs.env import Environment
from tinyjs.types import describe


def test_heap_satisfies_environment_protocol(heap: Heap) -> None:
    assert isinstance(heap, Environment)


def test_alloc_then_load(heap: Heap) -> None:
    heap.alloc(Binding("a"), JsNumber(1.0))

    assert heap.load(Binding("a")) == (JsNumber(1.0), None)


def test_alloc_updates_in_place(heap: Heap) -> None:
    heap.alloc(Binding("a"), JsNumber(1.0))
    heap.alloc(Binding("a"), JsBool(False))

    assert heap.load(Binding("a")) == (JsBool(False), None)


def test_load_missing_binding(heap: Heap) -> None:
    with pytest.raises(BindingNotFound) as exc_info:
        heap.load(Binding("ghost"))

    assert exc_info.value.binding == Binding("ghost")
    assert isinstance(exc_info.value, HeapError)


def test_alloc_rejects_empty_name(heap: Heap) -> None:
    with pytest.raises(AllocError):
        heap.alloc(Binding(""), JsNull())


def test_push_unknown_scope(heap: Heap) -> None:
    with pytest.raises(HeapError):
        heap.push_scope(99)


def test_pop_global_scope(heap: Heap) -> None:
    with pytest.raises(HeapError):
        heap.pop_scope(False)


def test_frame_slots_released_on_pop(heap: Heap) -> None:
    sid = heap.add_scope()
    heap.push_scope(sid)
    heap.alloc(Binding("x"), JsNumber(2.0))
    assert heap.load(Binding("x")) == (JsNumber(2.0), None)
    assert heap.depth == 2

    heap.pop_scope(False)

    assert heap.depth == 1
    with pytest.raises(BindingNotFound):
        heap.load(Binding("x"))


def test_retained_pop_leaves_frame(heap: Heap) -> None:
    sid = heap.add_scope()
    heap.push_scope(sid)
    heap.alloc(Binding("x"), JsNumber(1.0))
    heap.pop_scope(True)

    assert heap.depth == 1
    with pytest.raises(BindingNotFound):
        heap.load(Binding("x"))


def test_pushed_frame_sees_lexical_parent(heap: Heap) -> None:
    heap.alloc(Binding("g"), JsNumber(1.0))
    sid = heap.add_scope()
    heap.push_scope(sid)

    assert heap.load(Binding("g")) == (JsNumber(1.0), None)


def test_inner_alloc_shadows_outer(heap: Heap) -> None:
    heap.alloc(Binding("a"), JsNumber(1.0))
    sid = heap.add_scope()
    heap.push_scope(sid)
    heap.alloc(Binding("a"), JsNumber(2.0))

    assert heap.load(Binding("a"))[0] == JsNumber(2.0)
    heap.pop_scope(False)
    assert heap.load(Binding("a"))[0] == JsNumber(1.0)


def test_scope_parent_captured_at_reservation(heap: Heap) -> None:
    outer = heap.add_scope()
    heap.push_scope(outer)
    heap.alloc(Binding("local"), JsNumber(5.0))
    inner = heap.add_scope()
    heap.pop_scope(False)

    heap.push_scope(inner)

    assert heap.load(Binding("local"))[0] == JsNumber(5.0)


def test_each_push_gets_fresh_frame(heap: Heap) -> None:
    sid = heap.add_scope()
    heap.push_scope(sid)
    heap.alloc(Binding("n"), JsNumber(1.0))
    heap.push_scope(sid)

    with pytest.raises(BindingNotFound):
        heap.load(Binding("n"))


def test_bindings_hide_anonymous_slots(heap: Heap) -> None:
    heap.alloc(Binding.anon(), JsHeapRef(1))
    heap.alloc(Binding("a"), JsUndefined())

    assert list(heap.bindings()) == ["a"]


def test_anonymous_bindings_are_distinct() -> None:
    first, second = Binding.anon(), Binding.anon()

    assert first != second
    assert first.is_anon() and second.is_anon()
    assert not Binding("anon").is_anon()


def test_binding_equality_by_name() -> None:
    assert Binding("x") == Binding("x")
    assert hash(Binding("x")) == hash(Binding("x"))
    assert str(Binding("x")) == "x"
    assert len({Binding("x"), Binding("x"), Binding("y")}) == 2


@pytest.mark.parametrize(
    "value, payload, expected",
    [
        pytest.param(JsNumber(6.0), None, "6", id="integral"),
        pytest.param(JsNumber(0.5), None, "0.5", id="fraction"),
        pytest.param(JsNumber(-2.0), None, "-2", id="negative"),
        pytest.param(JsNumber(math.nan), None, "NaN", id="nan"),
        pytest.param(JsNumber(math.inf), None, "Infinity", id="inf"),
        pytest.param(JsNumber(-math.inf), None, "-Infinity", id="neg-inf"),
        pytest.param(JsBool(True), None, "true", id="true"),
        pytest.param(JsNull(), None, "null", id="null"),
        pytest.param(JsUndefined(), None, "undefined", id="undefined"),
        pytest.param(
            JsHeapRef(1),
            FunctionRecord(params=(), body=None, name="f", scope_id=1),
            "[function f]",
            id="named-function",
        ),
        pytest.param(
            JsHeapRef(2),
            FunctionRecord(params=(), body=None, name=None, scope_id=2),
            "[function anonymous]",
            id="anonymous-function",
        ),
    ],
)
def test_describe(value, payload, expected: str) -> None:
    assert describe(value, payload) == expected
