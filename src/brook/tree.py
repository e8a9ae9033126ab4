"""AST node classes for Brook plus conversion to Lark trees.

Nodes are frozen dataclasses grouped in two closed families (statements and
expressions). `line` is carried for diagnostics only and does not take part
in equality, so two trees parsed from differently laid out sources compare
equal when their structure matches.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

from lark import Token, Tree
from typing_extensions import TypeAlias

from .token_types import TT


@dataclass(frozen=True)
class Node:
    line: int = field(default=0, compare=False, repr=False, kw_only=True)


# ---------------- Expressions ----------------

@dataclass(frozen=True)
class IntegerLiteral(Node):
    value: int

@dataclass(frozen=True)
class FloatLiteral(Node):
    value: float

@dataclass(frozen=True)
class BooleanLiteral(Node):
    value: bool

@dataclass(frozen=True)
class StringLiteral(Node):
    value: str

@dataclass(frozen=True)
class NullLiteral(Node):
    pass

@dataclass(frozen=True)
class Identifier(Node):
    name: str

@dataclass(frozen=True)
class Unary(Node):
    op: TT
    operand: Expr

@dataclass(frozen=True)
class Binary(Node):
    left: Expr
    op: TT
    right: Expr

@dataclass(frozen=True)
class Assign(Node):
    name: str
    value: Expr

@dataclass(frozen=True)
class IfExpr(Node):
    condition: Expr
    then_branch: Block
    else_branch: Optional[Block] = None

@dataclass(frozen=True)
class Call(Node):
    callee: Expr
    args: Tuple[Expr, ...] = ()


Expr: TypeAlias = Union[
    IntegerLiteral,
    FloatLiteral,
    BooleanLiteral,
    StringLiteral,
    NullLiteral,
    Identifier,
    Unary,
    Binary,
    Assign,
    IfExpr,
    Call,
]

# ---------------- Statements ----------------

@dataclass(frozen=True)
class LetStmt(Node):
    name: str
    initializer: Optional[Expr] = None

@dataclass(frozen=True)
class ExpressionStmt(Node):
    expr: Expr

@dataclass(frozen=True)
class Block(Node):
    stmts: Tuple[Stmt, ...] = ()

@dataclass(frozen=True)
class While(Node):
    condition: Expr
    body: Block

@dataclass(frozen=True)
class For(Node):
    initializer: LetStmt
    condition: Expr
    increment: Expr
    body: Block

@dataclass(frozen=True)
class FunctionDecl(Node):
    name: str
    params: Tuple[str, ...]
    body: Block


Stmt: TypeAlias = Union[LetStmt, ExpressionStmt, Block, While, For, FunctionDecl]

@dataclass(frozen=True)
class Program(Node):
    stmts: Tuple[Stmt, ...] = ()


AstNode: TypeAlias = Union[Program, Stmt, Expr]

# Operator kinds -> source spelling
OP_TEXT = {
    TT.PLUS: '+',
    TT.MINUS: '-',
    TT.STAR: '*',
    TT.SLASH: '/',
    TT.EQ: '==',
    TT.NEQ: '!=',
    TT.LT: '<',
    TT.LTE: '<=',
    TT.GT: '>',
    TT.GTE: '>=',
    TT.AND: '&&',
    TT.OR: '||',
    TT.NEG: '!',
}

# ---------------- Lark view ----------------

def _ident(name: str) -> Token:
    return Token('IDENT', name)

def _op(op: TT) -> Token:
    return Token(op.name, OP_TEXT[op])

def to_lark(node: AstNode) -> Tree:
    """Convert an AST node into a `lark.Tree` (for pretty-printing and transforms)."""
    match node:
        case Program(stmts=stmts):
            return Tree('program', [to_lark(s) for s in stmts])
        case LetStmt(name=name, initializer=init):
            children = [_ident(name)]
            if init is not None:
                children.append(to_lark(init))
            return Tree('letstmt', children)
        case ExpressionStmt(expr=expr):
            return Tree('exprstmt', [to_lark(expr)])
        case Block(stmts=stmts):
            return Tree('block', [to_lark(s) for s in stmts])
        case While(condition=cond, body=body):
            return Tree('whilestmt', [to_lark(cond), to_lark(body)])
        case For(initializer=init, condition=cond, increment=inc, body=body):
            return Tree('forstmt', [to_lark(init), to_lark(cond), to_lark(inc), to_lark(body)])
        case FunctionDecl(name=name, params=params, body=body):
            return Tree('fndecl', [_ident(name), Tree('params', [_ident(p) for p in params]), to_lark(body)])
        case IntegerLiteral(value=v):
            return Tree('intlit', [Token('INTEGER', str(v))])
        case FloatLiteral(value=v):
            return Tree('floatlit', [Token('FLOAT', repr(v))])
        case BooleanLiteral(value=v):
            return Tree('boollit', [Token('TRUE', 'true') if v else Token('FALSE', 'false')])
        case StringLiteral(value=v):
            return Tree('strlit', [Token('STRING', v)])
        case NullLiteral():
            return Tree('nulllit', [])
        case Identifier(name=name):
            return Tree('ident', [_ident(name)])
        case Unary(op=op, operand=operand):
            return Tree('unary', [_op(op), to_lark(operand)])
        case Binary(left=left, op=op, right=right):
            return Tree('binary', [to_lark(left), _op(op), to_lark(right)])
        case Assign(name=name, value=value):
            return Tree('assign', [_ident(name), to_lark(value)])
        case IfExpr(condition=cond, then_branch=then, else_branch=other):
            children = [to_lark(cond), to_lark(then)]
            if other is not None:
                children.append(to_lark(other))
            return Tree('ifexpr', children)
        case Call(callee=callee, args=args):
            return Tree('call', [to_lark(callee), Tree('args', [to_lark(a) for a in args])])

    raise TypeError(f"Not an AST node: {type(node).__name__}")
