from __future__ import annotations

from typing import Any, Callable, List

from ..env import Environment
from ..tree import Node
from ..types import NORMAL, ExprResult, JsUndefined, StmtResult, undefined_result
from .helpers import as_bool

EvalFunc = Callable[[Node, Environment], ExprResult]
ExecFunc = Callable[[Node, Environment], StmtResult]

def eval_if_stmt(children: List[Any], env: Environment, eval_func: EvalFunc, exec_func: ExecFunc) -> StmtResult:
    cond_node, then_block, else_block = children
    cond, _ = eval_func(cond_node, env)

    if as_bool(cond):
        return exec_func(then_block, env)

    if else_block is not None:
        return exec_func(else_block, env)

    return undefined_result()

def eval_while_stmt(children: List[Any], env: Environment, eval_func: EvalFunc, exec_func: ExecFunc) -> StmtResult:
    cond_node, body = children

    while True:
        cond, _ = eval_func(cond_node, env)
        if not as_bool(cond):
            return StmtResult(JsUndefined(), None, NORMAL)

        result = exec_func(body, env)
        if result.returning:
            return StmtResult(JsUndefined(), None, result.signal)
