from __future__ import annotations

import logging
from typing import Any, Callable, List

from ..env import Environment
from ..tree import Node, tree_children
from ..types import (
    Binding,
    BindingNotFound,
    ExprResult,
    FunctionRecord,
    JsHeapRef,
    JsInvalidCallObject,
    JsRangeError,
    JsReferenceError,
    JsUndefined,
    Returning,
    StmtResult,
)
from .common import ident_token_value, param_names

logger = logging.getLogger(__name__)

EvalFunc = Callable[[Node, Environment], ExprResult]
ExecFunc = Callable[[Node, Environment], StmtResult]

def eval_defun(children: List[Any], env: Environment) -> ExprResult:
    """A function literal is stored under its name (or an anonymous binding) and also returned."""
    name_node, params_node, body = children
    name = ident_token_value(name_node) if name_node is not None else None

    scope_id = env.add_scope()
    record = FunctionRecord(
        params=tuple(param_names(params_node)),
        body=body,
        name=name,
        scope_id=scope_id,
    )
    ref = JsHeapRef(scope_id)
    binding = Binding(name) if name else Binding.anon()
    env.alloc(binding, ref, record)

    return ExprResult(ref, record)

def resolve_callee(callee_node: Node, callee: ExprResult, env: Environment) -> FunctionRecord:
    if isinstance(callee.payload, FunctionRecord):
        return callee.payload

    if callee.payload is not None:
        raise JsInvalidCallObject()

    # plain value: look the callee up again by name and demand a function payload
    name = ident_token_value(callee_node)
    if name is None:
        raise JsInvalidCallObject()

    try:
        _, payload = env.load(Binding(name))
    except BindingNotFound:
        raise JsReferenceError(name) from None

    if not isinstance(payload, FunctionRecord):
        raise JsInvalidCallObject(f"{name} is not a function")

    return payload

def eval_call(children: List[Any], env: Environment, eval_func: EvalFunc, exec_func: ExecFunc) -> ExprResult:
    callee_node, args_node = children
    callee = eval_func(callee_node, env)

    args = [eval_func(arg, env) for arg in tree_children(args_node)]
    record = resolve_callee(callee_node, callee, env)

    return call_function(record, args, env, exec_func)

def call_function(record: FunctionRecord, args: List[ExprResult], env: Environment, exec_func: ExecFunc) -> ExprResult:
    """Run `record` in a fresh activation of its captured scope.

    Parameters bind positionally: missing trailing arguments are undefined
    and extras are dropped. The scope is popped on every exit path, and
    running out of Python stack surfaces as a RangeError.
    """
    logger.debug("call %r with %d arg(s)", record, len(args))
    env.push_scope(record.scope_id)

    try:
        for idx, param in enumerate(record.params):
            arg = args[idx] if idx < len(args) else ExprResult(JsUndefined())
            env.alloc(Binding(param), arg.value, arg.payload)

        result = exec_func(record.body, env)
    except RecursionError:
        raise JsRangeError() from None
    finally:
        env.pop_scope(False)

    if isinstance(result.signal, Returning):
        return result.signal.as_result()

    return ExprResult(JsUndefined())
