from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, List, Optional

from lark import Lark, Token, Transformer, Tree, UnexpectedInput
from lark.visitors import v_args

from .tree import Node

logger = logging.getLogger(__name__)

GRAMMAR_PATH = Path(__file__).resolve().with_name("grammar.lark")


class ParseError(Exception):
    """Fragment is not valid source; recoverable by the caller."""

    def __init__(self, message: str, line: Optional[int]=None, column: Optional[int]=None, context: str=""):
        self.message = message
        self.line = line
        self.column = column
        self.context = context
        super().__init__(
            f"{message} at line {line}, col {column}" if line is not None else message
        )


def _undefined_token(meta: Any=None) -> Token:
    line = getattr(meta, "line", None)
    column = getattr(meta, "column", None)

    return Token("UNDEFINED", "undefined", line=line, column=column)


def _sequence(stmts: List[Node], meta: Any=None) -> Node:
    """Fold a statement list into right-nested `seq` nodes."""
    if not stmts:
        return Tree("empty", [], meta)

    acc = stmts[-1]
    for stmt in reversed(stmts[:-1]):
        acc = Tree("seq", [stmt, acc], meta)

    return acc


@v_args(meta=True)
class Lower(Transformer):
    """Rewrite the raw parse tree into the shapes the evaluator dispatches on."""

    def start(self, meta, children):
        return _sequence(children, meta)

    def block(self, meta, children):
        return _sequence(children, meta)

    def decl_bare(self, meta, children):
        name, = children
        return Tree("decl", [name, _undefined_token(meta)], meta)

    def ret(self, meta, children):
        expr, = children
        if expr is None:
            expr = _undefined_token(meta)
        return Tree("ret", [expr], meta)

    def fundecl(self, meta, children):
        name, params, body = children
        return Tree("bareexp", [Tree("defun", [name, params, body], meta)], meta)

    def defun_anon(self, meta, children):
        params, body = children
        return Tree("defun", [None, params, body], meta)

    def neg(self, meta, children):
        return Tree("neg", [children[-1]], meta)

    def pos(self, meta, children):
        return Tree("pos", [children[-1]], meta)

    def preinc(self, meta, children):
        return Tree("preinc", [children[-1]], meta)

    def predec(self, meta, children):
        return Tree("predec", [children[-1]], meta)

    def postinc(self, meta, children):
        return Tree("postinc", [children[0]], meta)

    def postdec(self, meta, children):
        return Tree("postdec", [children[0]], meta)


@lru_cache(maxsize=None)
def make_parser(grammar_path: Optional[str]=None) -> Lark:
    path = Path(grammar_path) if grammar_path else GRAMMAR_PATH
    grammar = path.read_text(encoding="utf-8")

    return Lark(
        grammar,
        parser="lalr",
        start="start",
        maybe_placeholders=True,
        propagate_positions=True,
    )


def parse_statement(text: str, grammar_path: Optional[str]=None) -> Node:
    """Parse one source fragment into a single lowered statement tree."""
    parser = make_parser(grammar_path)

    try:
        tree = parser.parse(text)
    except UnexpectedInput as exc:
        line = getattr(exc, "line", None)
        column = getattr(exc, "column", None)

        if line is not None and line < 1:
            line, column = None, None

        context = exc.get_context(text) if line is not None else ""
        message = _describe(exc)
        logger.debug("parse failed: %s (line %s, col %s)", message, line, column)

        raise ParseError(message, line, column, context) from exc

    return Lower().transform(tree)


def _describe(exc: UnexpectedInput) -> str:
    token = getattr(exc, "token", None)

    if token is not None:
        if token.type in ("$END", "<EOF>"):
            return "Unexpected end of input"
        return f"Unexpected token {token.value!r}"

    char = getattr(exc, "char", None)
    if char is not None:
        return f"Unexpected character {char!r}"

    return "Invalid syntax"
