"""tinyjs: evaluation core for a small JavaScript subset."""

from .env import Environment
from .heap import Heap, init_heap
from .parser import ParseError, parse_statement
from .runner import run
from .types import (
    Binding,
    FunctionRecord,
    JsBool,
    JsHeapRef,
    JsNull,
    JsNumber,
    JsRuntimeError,
    JsUndefined,
)

__all__ = [
    "Binding",
    "Environment",
    "FunctionRecord",
    "Heap",
    "JsBool",
    "JsHeapRef",
    "JsNull",
    "JsNumber",
    "JsRuntimeError",
    "JsUndefined",
    "ParseError",
    "init_heap",
    "parse_statement",
    "run",
]
