from __future__ import annotations

import math
from typing import Callable, List

from lark import Token

from ..env import Environment
from ..tree import Node
from ..types import ExprResult, JsBool, JsNumber, JsRuntimeError
from .helpers import as_bool, as_number

EvalFunc = Callable[[Node, Environment], ExprResult]

def _divide(lhs: float, rhs: float) -> float:
    if rhs != 0:
        return lhs / rhs

    if lhs == 0 or math.isnan(lhs):
        return math.nan

    return math.copysign(math.inf, lhs) * math.copysign(1.0, rhs)

_ARITH: dict[str, Callable[[float, float], float]] = {
    '+': lambda a, b: a + b,
    '-': lambda a, b: a - b,
    '*': lambda a, b: a * b,
    '/': _divide,
}

_COMPARE: dict[str, Callable[[float, float], bool]] = {
    '>=': lambda a, b: a >= b,
    '>': lambda a, b: a > b,
    '<=': lambda a, b: a <= b,
    '<': lambda a, b: a < b,
    '!=': lambda a, b: a != b,
    '==': lambda a, b: a == b,
}

def as_op(node: Node) -> str:
    if isinstance(node, Token):
        return str(node.value)

    raise JsRuntimeError(f"Expected operator token, got {node!r}")

def eval_arith(children: List[Node], env: Environment, eval_func: EvalFunc) -> ExprResult:
    lhs_node, op_node, rhs_node = children
    op = as_op(op_node)
    handler = _ARITH.get(op)

    if handler is None:
        raise JsRuntimeError(f"Unknown arithmetic operator {op}")

    lhs, _ = eval_func(lhs_node, env)
    rhs, _ = eval_func(rhs_node, env)

    return ExprResult(JsNumber(handler(as_number(lhs), as_number(rhs))))

def eval_compare(children: List[Node], env: Environment, eval_func: EvalFunc) -> ExprResult:
    lhs_node, op_node, rhs_node = children
    op = as_op(op_node)
    handler = _COMPARE.get(op)

    if handler is None:
        raise JsRuntimeError(f"Unknown comparison operator {op}")

    lhs, _ = eval_func(lhs_node, env)
    rhs, _ = eval_func(rhs_node, env)

    return ExprResult(JsBool(handler(as_number(lhs), as_number(rhs))))

def eval_logical(kind: str, children: List[Node], env: Environment, eval_func: EvalFunc) -> ExprResult:
    """Short-circuit at the (value, payload) pair level; rhs runs only when needed."""
    lhs_node, rhs_node = children
    lhs = eval_func(lhs_node, env)
    truthy = as_bool(lhs.value)

    if kind == 'and':
        return eval_func(rhs_node, env) if truthy else lhs

    return lhs if truthy else eval_func(rhs_node, env)

def eval_unary(kind: str, operand: Node, env: Environment, eval_func: EvalFunc) -> ExprResult:
    val, _ = eval_func(operand, env)
    num = as_number(val)

    return ExprResult(JsNumber(-num if kind == 'neg' else num))
