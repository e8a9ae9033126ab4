from __future__ import annotations

from ..runtime import (
    BrkBool,
    BrkFloat,
    BrkInt,
    BrkString,
    BrkValue,
    BrookDivisionByZero,
    BrookRuntimeError,
    Env,
    check_int,
)
from ..token_types import TT
from ..tree import Binary, Expr, Unary
from .common import EvalFunc, mismatch, numeric_pair, op_text, require_bool, truncating_div

ARITHMETIC_OPS = {TT.PLUS, TT.MINUS, TT.STAR, TT.SLASH}
ORDERING_OPS = {TT.LT, TT.LTE, TT.GT, TT.GTE}
EQUALITY_OPS = {TT.EQ, TT.NEQ}
LOGICAL_OPS = {TT.AND, TT.OR}

def eval_unary(node: Unary, env: Env, eval_func: EvalFunc) -> BrkValue:
    rhs = eval_func(node.operand, env)

    match (node.op, rhs):
        case (TT.NEG, BrkBool(value=b)):
            return BrkBool(not b)
        case (TT.MINUS, BrkInt(value=n)):
            return check_int(-n, '-')
        case (TT.NEG | TT.MINUS, _):
            raise mismatch(node.op, rhs)

    raise BrookRuntimeError(f"Unsupported unary operator {node.op.name}")

def eval_binary(node: Binary, env: Env, eval_func: EvalFunc) -> BrkValue:
    if node.op in LOGICAL_OPS:
        return eval_logical(node.op, node.left, node.right, env, eval_func)

    lhs = eval_func(node.left, env)
    rhs = eval_func(node.right, env)
    return apply_binary_operator(node.op, lhs, rhs)

def eval_logical(op: TT, left: Expr, right: Expr, env: Env, eval_func: EvalFunc) -> BrkValue:
    """Short-circuit && / ||: the right operand only runs when it decides the result."""
    text = op_text(op)
    lhs = require_bool(eval_func(left, env), text)

    if op == TT.AND and not lhs:
        return BrkBool(False)
    if op == TT.OR and lhs:
        return BrkBool(True)

    return BrkBool(require_bool(eval_func(right, env), text))

def apply_binary_operator(op: TT, lhs: BrkValue, rhs: BrkValue) -> BrkValue:
    if op in ARITHMETIC_OPS:
        return _arithmetic(op, lhs, rhs)
    if op in ORDERING_OPS:
        return _ordering(op, lhs, rhs)
    if op in EQUALITY_OPS:
        equal = values_equal(op, lhs, rhs)
        return BrkBool(equal if op == TT.EQ else not equal)

    raise BrookRuntimeError(f"Unsupported binary operator {op.name}")

def values_equal(op: TT, lhs: BrkValue, rhs: BrkValue) -> bool:
    pair = numeric_pair(lhs, rhs)
    if pair is not None:
        return pair[0] == pair[1]

    match (lhs, rhs):
        case (BrkString(value=a), BrkString(value=b)):
            return a == b
        case (BrkBool(value=a), BrkBool(value=b)):
            return a == b

    raise mismatch(op, lhs, rhs)

def _arithmetic(op: TT, lhs: BrkValue, rhs: BrkValue) -> BrkValue:
    if op == TT.PLUS and isinstance(lhs, BrkString) and isinstance(rhs, BrkString):
        return BrkString(lhs.value + rhs.value)

    pair = numeric_pair(lhs, rhs)
    if pair is None:
        raise mismatch(op, lhs, rhs)

    a, b = pair
    is_int = isinstance(a, int)

    if op == TT.SLASH and b == 0:
        raise BrookDivisionByZero()

    match op:
        case TT.PLUS:
            result = a + b
        case TT.MINUS:
            result = a - b
        case TT.STAR:
            result = a * b
        case _:
            result = truncating_div(a, b) if is_int else a / b

    if is_int:
        return check_int(result, op_text(op))

    return BrkFloat(result)

def _ordering(op: TT, lhs: BrkValue, rhs: BrkValue) -> BrkValue:
    pair = numeric_pair(lhs, rhs)
    if pair is None:
        raise mismatch(op, lhs, rhs)

    a, b = pair
    match op:
        case TT.LT:
            return BrkBool(a < b)
        case TT.LTE:
            return BrkBool(a <= b)
        case TT.GT:
            return BrkBool(a > b)
        case _:
            return BrkBool(a >= b)
