from __future__ import annotations

from typing import Optional

from .runtime import (
    BrkBool,
    BrkFloat,
    BrkInt,
    BrkNull,
    BrkString,
    BrkValue,
    BrookNotCallable,
    BrookRuntimeError,
    BrookUnsupported,
    Env,
    kind_name,
)
from .tree import (
    AstNode, Assign, Binary, Block, BooleanLiteral, Call, Expr, ExpressionStmt,
    FloatLiteral, For, FunctionDecl, Identifier, IfExpr, IntegerLiteral, LetStmt,
    NullLiteral, Program, Stmt, StringLiteral, Unary, While,
)

from .eval.blocks import eval_block, eval_program as _eval_stmts
from .eval.expr import eval_binary, eval_unary
from .eval.loops import eval_for_stmt, eval_if_expr, eval_while_stmt


def _maybe_attach_location(exc: BrookRuntimeError, node: AstNode) -> None:
    if exc.line is None and node.line:
        exc.line = node.line

# ---------------- Public API ----------------

def eval_program(program: Program, env: Optional[Env] = None) -> BrkValue:
    """Evaluate a whole program; a fresh root scope is used unless `env` is given."""
    if env is None:
        env = Env.root()

    return _eval_stmts(program.stmts, env, eval_node)

# ---------------- Core evaluator ----------------

def eval_node(n: AstNode, env: Env) -> BrkValue:
    try:
        match n:
            case Program():
                return _eval_stmts(n.stmts, env, eval_node)
            case LetStmt() | ExpressionStmt() | Block() | While() | For() | FunctionDecl():
                return eval_stmt(n, env)
            case _:
                return eval_expr(n, env)
    except BrookRuntimeError as e:
        _maybe_attach_location(e, n)
        raise

def eval_stmt(n: Stmt, env: Env) -> BrkValue:
    match n:
        case ExpressionStmt(expr=expr):
            return eval_node(expr, env)
        case LetStmt(name=name, initializer=init):
            value = BrkNull() if init is None else eval_node(init, env)
            env.define(name, value)
            return BrkNull()
        case Block():
            return eval_block(n, env, eval_node)
        case While():
            return eval_while_stmt(n, env, eval_node)
        case For():
            return eval_for_stmt(n, env, eval_node)
        case FunctionDecl(name=name):
            raise BrookUnsupported(f"Function declarations are not supported ('{name}')")

    raise BrookRuntimeError(f"Unknown statement: {type(n).__name__}")

def eval_expr(n: Expr, env: Env) -> BrkValue:
    match n:
        case IntegerLiteral(value=v):
            return BrkInt(v)
        case FloatLiteral(value=v):
            return BrkFloat(v)
        case BooleanLiteral(value=v):
            return BrkBool(v)
        case StringLiteral(value=v):
            return BrkString(v)
        case NullLiteral():
            return BrkNull()
        case Identifier(name=name):
            return env.get(name)
        case Assign(name=name, value=value_node):
            value = eval_node(value_node, env)
            env.set(name, value)
            return value
        case Unary():
            return eval_unary(n, env, eval_node)
        case Binary():
            return eval_binary(n, env, eval_node)
        case IfExpr():
            return eval_if_expr(n, env, eval_node)
        case Call(callee=callee):
            raise BrookNotCallable(kind_name(eval_node(callee, env)))

    raise BrookRuntimeError(f"Unknown node: {type(n).__name__}")
