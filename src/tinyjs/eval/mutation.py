from __future__ import annotations

from ..env import Environment
from ..tree import Node, node_kind
from ..types import Binding, BindingNotFound, ExprResult, JsInvalidLeftHandSide, JsNumber, JsReferenceError
from .common import ident_token_value
from .helpers import as_number

_DELTAS = {
    'preinc': 1.0,
    'predec': -1.0,
    'postinc': 1.0,
    'postdec': -1.0,
}

def eval_update(kind: str, target: Node, env: Environment) -> ExprResult:
    """++/-- on a plain variable; prefix yields the new value, postfix the old one."""
    name = ident_token_value(target)

    if name is None:
        op = 'prefix' if kind.startswith('pre') else 'postfix'
        raise JsInvalidLeftHandSide(f"{op} {node_kind(target)}")

    binding = Binding(name)

    try:
        orig, _ = env.load(binding)
    except BindingNotFound:
        raise JsReferenceError(name) from None

    updated = JsNumber(as_number(orig) + _DELTAS[kind])
    env.alloc(binding, updated, None)

    if kind.startswith('pre'):
        return ExprResult(updated)

    return ExprResult(orig)
