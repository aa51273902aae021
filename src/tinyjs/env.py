"""The contract the evaluator needs from a scope/heap manager.

The evaluator never touches storage directly. Everything it stores, reads,
enters or leaves goes through one of these five operations, so any object
that provides them (the bundled in-memory `Heap`, or a recording fake in
tests) can be passed where an environment is expected.
"""
from __future__ import annotations

from typing import Optional, Tuple
from typing_extensions import Protocol, runtime_checkable

from .types import Binding, HeapPayload, JsValue


@runtime_checkable
class Environment(Protocol):
    def alloc(self, binding: Binding, value: JsValue, payload: Optional[HeapPayload]=None) -> None:
        """Create or update the slot for `binding`; raises AllocError."""
        ...

    def load(self, binding: Binding) -> Tuple[JsValue, Optional[HeapPayload]]:
        """Resolve `binding` through the active scope chain; raises BindingNotFound."""
        ...

    def push_scope(self, scope_id: int) -> None:
        ...

    def pop_scope(self, retain: bool) -> None:
        ...

    def add_scope(self) -> int:
        """Reserve a fresh scope id without entering it."""
        ...
