from __future__ import annotations

import itertools
import math
from dataclasses import dataclass, field
from typing import Iterator, NamedTuple, Optional, Tuple, Union
from typing_extensions import TypeAlias

from .tree import Node

# ---------- Bindings ----------

_ANON_IDS: Iterator[int] = itertools.count()

@dataclass(frozen=True)
class Binding:
    """Environment key; equal (and hashed) by name only."""
    name: str

    @classmethod
    def anon(cls) -> 'Binding':
        # '%' cannot start an identifier, so these never collide with source names
        return cls(f"%anon{next(_ANON_IDS)}")

    def is_anon(self) -> bool:
        return self.name.startswith("%anon")

    def __str__(self) -> str:
        return self.name

# ---------- Value Model ----------

def format_number(value: float) -> str:
    if math.isnan(value):
        return "NaN"

    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"

    return str(int(value)) if value.is_integer() else repr(value)

@dataclass(frozen=True)
class JsNumber:
    value: float
    def __repr__(self) -> str:
        return format_number(self.value)

@dataclass(frozen=True)
class JsBool:
    value: bool
    def __repr__(self) -> str:
        return "true" if self.value else "false"

@dataclass(frozen=True)
class JsNull:
    def __repr__(self) -> str:
        return "null"

@dataclass(frozen=True)
class JsUndefined:
    def __repr__(self) -> str:
        return "undefined"

@dataclass(frozen=True)
class JsHeapRef:
    """Opaque pointer tag; what it points at travels as the heap payload."""
    tag: int
    def __repr__(self) -> str:
        return f"<heap #{self.tag}>"

JsValue: TypeAlias = Union[JsNumber, JsBool, JsNull, JsUndefined, JsHeapRef]

# ---------- Heap payloads ----------

@dataclass(frozen=True)
class FunctionRecord:
    params: Tuple[str, ...]
    body: Node = field(compare=False)
    name: Optional[str]
    scope_id: int

    def __repr__(self) -> str:
        label = self.name if self.name else "anonymous"
        return f"[function {label}]"

# Closed set of heap payloads; object records join this union when they exist.
HeapPayload: TypeAlias = FunctionRecord

def describe(value: JsValue, payload: Optional[HeapPayload]=None) -> str:
    """Render a value the way the REPL and file runner print it."""
    if isinstance(payload, FunctionRecord):
        return repr(payload)

    return repr(value)

# ---------- Evaluation results ----------

class ExprResult(NamedTuple):
    value: JsValue
    payload: Optional[HeapPayload] = None

@dataclass(frozen=True)
class Normal:
    def __repr__(self) -> str:
        return "Normal"

@dataclass(frozen=True)
class Returning:
    value: JsValue
    payload: Optional[HeapPayload] = None

    def as_result(self) -> ExprResult:
        return ExprResult(self.value, self.payload)

ControlSignal: TypeAlias = Union[Normal, Returning]

NORMAL = Normal()

class StmtResult(NamedTuple):
    value: JsValue
    payload: Optional[HeapPayload] = None
    signal: ControlSignal = NORMAL

    @property
    def returning(self) -> bool:
        return isinstance(self.signal, Returning)

def undefined_result() -> StmtResult:
    return StmtResult(JsUndefined(), None, NORMAL)

# ---------- Exceptions ----------

class JsRuntimeError(Exception):
    """Fatal evaluation error; aborts the whole fragment."""
    js_meta: Optional[object]

    def __init__(self, message: str):
        super().__init__(message)
        self.js_meta = None

    def __str__(self) -> str:
        msg = super().__str__()

        meta = getattr(self, "js_meta", None)
        if meta is None:
            return msg

        line = getattr(meta, "line", None)
        col = getattr(meta, "column", None)

        if line is None:
            return msg

        if col is None:
            return f"{msg} (line {line})"

        return f"{msg} (line {line}, col {col})"

class JsReferenceError(JsRuntimeError):
    def __init__(self, name: str):
        super().__init__(f"ReferenceError: {name} is not defined")
        self.name = name

class JsRangeError(JsRuntimeError):
    def __init__(self, message: str = "Maximum call stack size exceeded"):
        super().__init__(f"RangeError: {message}")

class JsInvalidLeftHandSide(JsRuntimeError):
    def __init__(self, kind: str):
        super().__init__(f"Invalid left-hand side in {kind} operation")
        self.kind = kind

class JsInvalidCallObject(JsRuntimeError):
    def __init__(self, message: str = "Invalid call object"):
        super().__init__(message)

class JsUnimplementedNode(JsRuntimeError):
    def __init__(self, kind: str):
        super().__init__(f"Node '{kind}' is not supported by this evaluator")
        self.kind = kind

class HeapError(JsRuntimeError):
    pass

class AllocError(HeapError):
    pass

class BindingNotFound(HeapError):
    def __init__(self, binding: Binding):
        super().__init__(f"No live slot for '{binding.name}'")
        self.binding = binding
