from __future__ import annotations

from typing import Iterable

from ..runtime import BrkNull, BrkValue, Env
from ..tree import Block, Stmt
from .common import EvalFunc

def eval_program(stmts: Iterable[Stmt], env: Env, eval_func: EvalFunc) -> BrkValue:
    """Run statements in `env`, returning the last value (null when empty)."""
    result: BrkValue = BrkNull()

    for stmt in stmts:
        result = eval_func(stmt, env)

    return result

def eval_block(node: Block, env: Env, eval_func: EvalFunc) -> BrkValue:
    """Run a block in a fresh child scope; the scope is dropped on every exit path."""
    with env.child() as inner:
        return eval_program(node.stmts, inner, eval_func)
