from __future__ import annotations

from typing import Any, Callable, List

from ..env import Environment
from ..tree import Node
from ..types import ExprResult, Returning, StmtResult

EvalFunc = Callable[[Node, Environment], ExprResult]

def eval_return_stmt(children: List[Any], env: Environment, eval_func: EvalFunc) -> StmtResult:
    expr, = children
    value, payload = eval_func(expr, env)

    return StmtResult(value, payload, Returning(value, payload))
