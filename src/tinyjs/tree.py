"""Shared helpers for working with the lark Tree/Token nodes the parser emits."""
from __future__ import annotations

from typing import List, Optional, TypeGuard

from lark import Token, Tree
from typing_extensions import TypeAlias

Node: TypeAlias = Tree | Token


def is_tree(node: object) -> TypeGuard[Tree]:
    return isinstance(node, Tree)

def is_token(node: object) -> TypeGuard[Token]:
    return isinstance(node, Token)

def tree_label(node: object) -> Optional[str]:
    return node.data if is_tree(node) else None

def token_kind(node: object) -> Optional[str]:
    return str(node.type) if is_token(node) else None

def node_kind(node: object) -> str:
    """Label for diagnostics: tree label, token type, or Python type name."""
    if is_tree(node):
        return str(node.data)

    if is_token(node):
        return str(node.type)

    return type(node).__name__

def tree_children(node: object) -> List[Node]:
    if not is_tree(node):
        return []

    children = getattr(node, "children", None)
    if children is None:
        return []

    return list(children)

def node_meta(node: object) -> Optional[object]:
    if is_token(node):
        return node

    if not is_tree(node):
        return None

    meta = node.meta
    if getattr(meta, "empty", True):
        return None

    return meta

def pretty(node: object, indent: str = "  ") -> str:
    """Indented dump of a lowered tree; None children print as `-`."""
    lines: List[str] = []

    def visit(n: object, level: int) -> None:
        pad = indent * level
        if is_tree(n):
            lines.append(f"{pad}{n.data}")
            for child in n.children:
                visit(child, level + 1)
        elif is_token(n):
            lines.append(f"{pad}{n.type}  {n.value}")
        else:
            lines.append(f"{pad}-")

    visit(node, 0)
    return "\n".join(lines)
