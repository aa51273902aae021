from __future__ import annotations

from typing import Any, List, Optional

from lark import Token

from ..tree import is_token, is_tree, token_kind, tree_children
from ..types import Binding, JsNumber, JsRuntimeError

def is_token_type(node: Any, kind: str) -> bool:
    return is_token(node) and token_kind(node) == kind

def expect_ident_token(node: Any, context: str) -> str:
    if is_token_type(node, 'IDENT'):
        return str(node.value)

    raise JsRuntimeError(f"{context} must be an identifier")

def ident_token_value(node: Any) -> Optional[str]:
    if is_token_type(node, 'IDENT'):
        return str(node.value)

    return None

def binding_for(node: Any, context: str) -> Binding:
    return Binding(expect_ident_token(node, context))

def token_number(token: Token) -> JsNumber:
    return JsNumber(float(token.value))

def param_names(params_node: Any) -> List[str]:
    if params_node is None:
        return []

    if not is_tree(params_node):
        raise JsRuntimeError("Malformed parameter list")

    return [expect_ident_token(p, "Parameter") for p in tree_children(params_node)]
