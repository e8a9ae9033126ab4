from __future__ import annotations

from ..runtime import BrkNull, BrkValue, BrookInvalidLoopIncrement, Env
from ..tree import Assign, For, IfExpr, While
from .common import EvalFunc, require_bool

def eval_if_expr(node: IfExpr, env: Env, eval_func: EvalFunc) -> BrkValue:
    if require_bool(eval_func(node.condition, env), 'if'):
        return eval_func(node.then_branch, env)

    if node.else_branch is not None:
        return eval_func(node.else_branch, env)

    return BrkNull()

def eval_while_stmt(node: While, env: Env, eval_func: EvalFunc) -> BrkValue:
    # No scope of its own; the body block opens one per iteration.
    while require_bool(eval_func(node.condition, env), 'while'):
        eval_func(node.body, env)

    return BrkNull()

def eval_for_stmt(node: For, env: Env, eval_func: EvalFunc) -> BrkValue:
    """Initializer binds in the current scope, then body/increment per iteration."""
    eval_func(node.initializer, env)

    while require_bool(eval_func(node.condition, env), 'for'):
        eval_func(node.body, env)

        if not isinstance(node.increment, Assign):
            raise BrookInvalidLoopIncrement(type(node.increment).__name__)
        eval_func(node.increment, env)

    return BrkNull()
