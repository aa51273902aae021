from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .types import AllocError, Binding, BindingNotFound, HeapError, HeapPayload, JsValue

logger = logging.getLogger(__name__)

GLOBAL_SCOPE = 0

Slot = Tuple[JsValue, Optional[HeapPayload]]


@dataclass
class ScopeInfo:
    """A reserved scope id and the frame that was active when it was reserved."""
    scope_id: int
    parent: Optional['ActivationFrame']


class ActivationFrame:
    def __init__(self, scope_id: int, parent: Optional['ActivationFrame']=None):
        self.scope_id = scope_id
        self.parent = parent
        self.slots: Dict[Binding, Slot] = {}

    def define(self, binding: Binding, slot: Slot) -> None:
        self.slots[binding] = slot

    def get(self, binding: Binding) -> Slot:
        frame: Optional[ActivationFrame] = self

        while frame is not None:
            if binding in frame.slots:
                return frame.slots[binding]
            frame = frame.parent

        raise BindingNotFound(binding)

    def visible(self) -> Dict[Binding, Slot]:
        chain: List[ActivationFrame] = []
        frame: Optional[ActivationFrame] = self

        while frame is not None:
            chain.append(frame)
            frame = frame.parent

        seen: Dict[Binding, Slot] = {}
        for frame in reversed(chain):
            seen.update(frame.slots)

        return seen

    def __repr__(self) -> str:
        return f"ActivationFrame(scope={self.scope_id}, slots={len(self.slots)})"


class Heap:
    """In-memory scope manager satisfying the `Environment` protocol.

    Scope ids are reserved with `add_scope` (capturing the active frame as
    the lexical parent) and entered with `push_scope`, which creates a new
    activation frame each time so recursive calls never share slots.
    """

    def __init__(self) -> None:
        self._scopes: Dict[int, ScopeInfo] = {GLOBAL_SCOPE: ScopeInfo(GLOBAL_SCOPE, None)}
        self._next_id = GLOBAL_SCOPE + 1
        self._stack: List[ActivationFrame] = [ActivationFrame(GLOBAL_SCOPE)]

    # ---- Environment protocol ----

    def alloc(self, binding: Binding, value: JsValue, payload: Optional[HeapPayload]=None) -> None:
        if not binding.name:
            raise AllocError("Cannot store a value under an empty name")

        frame = self._stack[-1]
        frame.define(binding, (value, payload))
        logger.debug("alloc %s = %r in scope %d", binding, value, frame.scope_id)

    def load(self, binding: Binding) -> Slot:
        return self._stack[-1].get(binding)

    def push_scope(self, scope_id: int) -> None:
        info = self._scopes.get(scope_id)
        if info is None:
            raise HeapError(f"Unknown scope id {scope_id}")

        self._stack.append(ActivationFrame(scope_id, info.parent))
        logger.debug("push scope %d (depth %d)", scope_id, len(self._stack))

    def pop_scope(self, retain: bool) -> None:
        if len(self._stack) <= 1:
            raise HeapError("Cannot pop the global scope")

        # retained or not, a frame stays reachable from any scope reserved
        # inside it; reclaiming unreachable frames belongs to the collector
        frame = self._stack.pop()
        logger.debug("pop scope %d (retain=%s, depth %d)", frame.scope_id, retain, len(self._stack))

    def add_scope(self) -> int:
        scope_id = self._next_id
        self._next_id += 1
        self._scopes[scope_id] = ScopeInfo(scope_id, self._stack[-1])

        return scope_id

    # ---- Introspection ----

    @property
    def depth(self) -> int:
        return len(self._stack)

    @property
    def scope_count(self) -> int:
        return len(self._scopes)

    def bindings(self) -> Dict[str, Slot]:
        """Named bindings visible from the innermost frame."""
        visible = self._stack[-1].visible()

        return {b.name: slot for b, slot in visible.items() if not b.is_anon()}


def init_heap() -> Heap:
    return Heap()
