from __future__ import annotations

from typing import Callable

from lark import Token, Tree

from .env import Environment
from .tree import Node, is_token, node_kind, node_meta
from .types import (
    Binding,
    BindingNotFound,
    ExprResult,
    JsBool,
    JsNull,
    JsReferenceError,
    JsRuntimeError,
    JsUndefined,
    JsUnimplementedNode,
    StmtResult,
)

from .eval.bind import eval_assign_stmt, eval_decl_stmt
from .eval.blocks import eval_empty, eval_seq
from .eval.common import token_number
from .eval.control import eval_return_stmt
from .eval.expr import eval_arith, eval_compare, eval_logical, eval_unary
from .eval.fn import eval_call, eval_defun
from .eval.loops import eval_if_stmt, eval_while_stmt
from .eval.mutation import eval_update

def _maybe_attach_location(exc: JsRuntimeError, node: Node) -> None:
    if exc.js_meta is not None:
        return

    meta = node_meta(node)
    if meta is not None and getattr(meta, "line", None) is not None:
        exc.js_meta = meta

# ---------------- Public API ----------------

def eval_expr(n: Node, env: Environment) -> ExprResult:
    """Reduce an expression node to its (value, payload) pair."""
    try:
        return _eval_expr_inner(n, env)
    except JsRuntimeError as e:
        _maybe_attach_location(e, n)
        raise


def exec_stmt(n: Node, env: Environment) -> StmtResult:
    """Execute a statement node to its (value, payload, signal) triple."""
    try:
        return _exec_stmt_inner(n, env)
    except JsRuntimeError as e:
        _maybe_attach_location(e, n)
        raise

# ---------------- Statements ----------------

def _exec_stmt_inner(n: Node, env: Environment) -> StmtResult:
    if not isinstance(n, Tree):
        raise JsRuntimeError(f"Expected a statement, got {node_kind(n)}")

    handler = _STMT_DISPATCH.get(n.data)
    if handler is None:
        raise JsUnimplementedNode(str(n.data))

    return handler(n, env)


def _exec_bareexp(n: Tree, env: Environment) -> StmtResult:
    value, payload = eval_expr(n.children[0], env)
    return StmtResult(value, payload)


_STMT_DISPATCH: dict[str, Callable[[Tree, Environment], StmtResult]] = {
    'assign': lambda n, env: eval_assign_stmt(n.children, env, eval_expr),
    'decl': lambda n, env: eval_decl_stmt(n.children, env, eval_expr),
    'bareexp': _exec_bareexp,
    'empty': lambda n, env: eval_empty(n.children, env),
    'ifstmt': lambda n, env: eval_if_stmt(n.children, env, eval_expr, exec_stmt),
    'ret': lambda n, env: eval_return_stmt(n.children, env, eval_expr),
    'seq': lambda n, env: eval_seq(n.children, env, exec_stmt),
    'whilestmt': lambda n, env: eval_while_stmt(n.children, env, eval_expr, exec_stmt),
}

# ---------------- Expressions ----------------

def _eval_expr_inner(n: Node, env: Environment) -> ExprResult:
    if is_token(n):
        return _eval_token(n, env)

    if not isinstance(n, Tree):
        raise JsRuntimeError(f"Expected an expression, got {node_kind(n)}")

    d = n.data
    handler = _EXPR_DISPATCH.get(d)
    if handler is not None:
        return handler(n, env)

    match d:
        case 'and' | 'or':
            return eval_logical(d, n.children, env, eval_expr)
        case 'neg' | 'pos':
            return eval_unary(d, n.children[0], env, eval_expr)
        case 'preinc' | 'predec' | 'postinc' | 'postdec':
            return eval_update(d, n.children[0], env)
        case 'instance_var' | 'new_object':
            raise JsUnimplementedNode(d)
        case _:
            raise JsRuntimeError(f"Unknown node: {d}")


def _eval_var(t: Token, env: Environment) -> ExprResult:
    name = str(t.value)

    try:
        value, payload = env.load(Binding(name))
    except BindingNotFound:
        raise JsReferenceError(name) from None

    return ExprResult(value, payload)


def _eval_token(t: Token, env: Environment) -> ExprResult:
    handler = _TOKEN_DISPATCH.get(t.type)
    if handler is None:
        raise JsUnimplementedNode(f"{t.type}:{t.value}")

    return handler(t, env)


_EXPR_DISPATCH: dict[str, Callable[[Tree, Environment], ExprResult]] = {
    'add': lambda n, env: eval_arith(n.children, env, eval_expr),
    'mul': lambda n, env: eval_arith(n.children, env, eval_expr),
    'compare': lambda n, env: eval_compare(n.children, env, eval_expr),
    'defun': lambda n, env: eval_defun(n.children, env),
    'call': lambda n, env: eval_call(n.children, env, eval_expr, exec_stmt),
}

_TOKEN_DISPATCH: dict[str, Callable[[Token, Environment], ExprResult]] = {
    'NUMBER': lambda t, _: ExprResult(token_number(t)),
    'TRUE': lambda _, __: ExprResult(JsBool(True)),
    'FALSE': lambda _, __: ExprResult(JsBool(False)),
    'NULL': lambda _, __: ExprResult(JsNull()),
    'UNDEFINED': lambda _, __: ExprResult(JsUndefined()),
    'IDENT': _eval_var,
}
