from __future__ import annotations

from typing import Any, Callable, List

from ..env import Environment
from ..tree import Node
from ..types import ExprResult, StmtResult
from .common import binding_for

EvalFunc = Callable[[Node, Environment], ExprResult]

def _store(children: List[Any], env: Environment, eval_func: EvalFunc, context: str) -> ExprResult:
    target, expr = children
    binding = binding_for(target, context)
    result = eval_func(expr, env)
    env.alloc(binding, result.value, result.payload)

    return result

def eval_assign_stmt(children: List[Any], env: Environment, eval_func: EvalFunc) -> StmtResult:
    value, payload = _store(children, env, eval_func, "Assignment target")

    return StmtResult(value, payload)

def eval_decl_stmt(children: List[Any], env: Environment, eval_func: EvalFunc) -> StmtResult:
    # same storage effect as assignment; the caller is free to ignore the value
    value, payload = _store(children, env, eval_func, "Declaration name")

    return StmtResult(value, payload)
