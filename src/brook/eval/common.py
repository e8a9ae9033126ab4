from __future__ import annotations

from typing import Callable, Tuple

from ..runtime import (
    BrkBool,
    BrkFloat,
    BrkInt,
    BrkValue,
    BrookTypeMismatch,
    Env,
    kind_name,
)
from ..tree import AstNode, OP_TEXT
from ..token_types import TT

EvalFunc = Callable[[AstNode, Env], BrkValue]

def op_text(op: TT) -> str:
    return OP_TEXT.get(op, op.name)

def require_bool(val: BrkValue, op: str) -> bool:
    """Conditions and logical operands must be Bool; no truthiness coercion."""
    if isinstance(val, BrkBool):
        return val.value

    raise BrookTypeMismatch(op, (kind_name(val),))

def numeric_pair(lhs: BrkValue, rhs: BrkValue) -> Tuple[int, int] | Tuple[float, float] | None:
    """Return the operands as a pair of ints, or floats if either side is a Float."""
    match (lhs, rhs):
        case (BrkInt(value=a), BrkInt(value=b)):
            return a, b
        case (BrkFloat(value=a), BrkFloat(value=b)):
            return a, b
        case (BrkInt(value=a), BrkFloat(value=b)):
            return float(a), b
        case (BrkFloat(value=a), BrkInt(value=b)):
            return a, float(b)

    return None

def mismatch(op: TT, *vals: BrkValue) -> BrookTypeMismatch:
    return BrookTypeMismatch(op_text(op), tuple(kind_name(v) for v in vals))

def truncating_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q
