from __future__ import annotations

from typing import Any, Callable, List

from ..env import Environment
from ..tree import Node, tree_label
from ..types import StmtResult, undefined_result

ExecFunc = Callable[[Node, Environment], StmtResult]

def eval_seq(children: List[Any], env: Environment, exec_func: ExecFunc) -> StmtResult:
    """Run a statement list; a return anywhere in it ends the list there.

    Lists arrive right-nested, so the spine is walked iteratively and
    Python recursion tracks block nesting rather than statement count.
    """
    first, rest = children

    while True:
        head = exec_func(first, env)
        if head.returning:
            return head

        if tree_label(rest) != 'seq':
            return exec_func(rest, env)

        first, rest = rest.children

def eval_empty(_children: List[Any], _env: Environment) -> StmtResult:
    return undefined_result()
