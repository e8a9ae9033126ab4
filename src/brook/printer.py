"""Canonical source rendering.

Every binary, unary and assignment is parenthesized, top-level statements
are written one per line and block statements are separated by `;`, so
re-parsing the output rebuilds the same tree.
"""
from __future__ import annotations

from decimal import Decimal
from typing import List

from lark import Token, Transformer, v_args

from .tree import AstNode, to_lark


def format_float(value: float) -> str:
    """Render a float with a decimal point and no exponent (the lexer has neither form)."""
    text = format(Decimal(repr(value)), 'f')
    if '.' not in text:
        text += '.0'
    return text


@v_args(inline=True)
class CanonicalPrinter(Transformer):
    """Bottom-up: each rule receives its children already rendered to text."""

    def program(self, *stmts: str) -> str:
        return '\n'.join(stmts)

    def letstmt(self, name: Token, init: str | None = None) -> str:
        if init is None:
            return f'let {name}'
        return f'let {name} = {init}'

    def exprstmt(self, expr: str) -> str:
        return expr

    def block(self, *stmts: str) -> str:
        if not stmts:
            return '{ }'
        return '{ ' + '; '.join(stmts) + ' }'

    def whilestmt(self, cond: str, body: str) -> str:
        return f'while {cond} {body}'

    def forstmt(self, init: str, cond: str, inc: str, body: str) -> str:
        return f'for {init}; {cond}; {inc} {body}'

    def params(self, *names: Token) -> str:
        return ', '.join(names)

    def fndecl(self, name: Token, params: str, body: str) -> str:
        return f'fun {name}({params}) {body}'

    def intlit(self, tok: Token) -> str:
        return str(tok)

    def floatlit(self, tok: Token) -> str:
        return format_float(float(tok))

    def strlit(self, tok: Token) -> str:
        return f'"{tok}"'

    def boollit(self, tok: Token) -> str:
        return str(tok)

    def nulllit(self) -> str:
        return 'null'

    def ident(self, tok: Token) -> str:
        return str(tok)

    def unary(self, op: Token, operand: str) -> str:
        return f'({op}{operand})'

    def binary(self, left: str, op: Token, right: str) -> str:
        return f'({left} {op} {right})'

    def assign(self, name: Token, value: str) -> str:
        return f'({name} = {value})'

    def ifexpr(self, cond: str, then: str, other: str | None = None) -> str:
        if other is None:
            return f'if {cond} {then}'
        return f'if {cond} {then} else {other}'

    def args(self, *items: str) -> List[str]:
        return list(items)

    def call(self, callee: str, args: List[str]) -> str:
        return f'{callee}({", ".join(args)})'


def to_source(node: AstNode) -> str:
    """Render any AST node (usually a Program) to canonical Brook source."""
    return CanonicalPrinter().transform(to_lark(node))
