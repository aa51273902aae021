from __future__ import annotations

import math

from ..types import JsBool, JsHeapRef, JsNull, JsNumber, JsUndefined, JsValue

def as_bool(val: JsValue) -> bool:
    match val:
        case JsBool(value=b):
            return b
        case JsNumber(value=num):
            return not (num == 0 or math.isnan(num))
        case JsNull() | JsUndefined():
            return False
        case _:
            return isinstance(val, JsHeapRef)

def as_number(val: JsValue) -> float:
    match val:
        case JsNumber(value=num):
            return num
        case JsBool(value=b):
            return 1.0 if b else 0.0
        case JsNull():
            return 0.0
        case _:
            return math.nan
