from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from typing_extensions import TypeAlias

# ---------- Value Model ----------

INT_MIN = -(2 ** 63)
INT_MAX = 2 ** 63 - 1

@dataclass(frozen=True)
class BrkNull:
    def __repr__(self) -> str:
        return "null"

@dataclass(frozen=True)
class BrkInt:
    value: int
    def __repr__(self) -> str:
        return str(self.value)

@dataclass(frozen=True)
class BrkFloat:
    value: float
    def __repr__(self) -> str:
        return repr(self.value)

@dataclass(frozen=True)
class BrkString:
    value: str
    def __repr__(self) -> str:
        return f'"{self.value}"'

@dataclass(frozen=True)
class BrkBool:
    value: bool
    def __repr__(self) -> str:
        return "true" if self.value else "false"

BrkValue: TypeAlias = BrkNull | BrkInt | BrkFloat | BrkString | BrkBool

def kind_name(value: BrkValue) -> str:
    match value:
        case BrkInt():
            return "Integer"
        case BrkFloat():
            return "Float"
        case BrkBool():
            return "Bool"
        case BrkString():
            return "String"
        case BrkNull():
            return "Null"

    raise BrookTypeError(f"Unexpected value type {type(value).__name__}")

# ---------- Exceptions ----------

class BrookRuntimeError(Exception):
    line: Optional[int]

    def __init__(self, message: str):
        super().__init__(message)
        self.line = None

    def __str__(self) -> str:  # pragma: no cover - trivial formatting
        msg = super().__str__()

        if not self.line:
            return msg

        return f"{msg} (line {self.line})"

class BrookTypeError(BrookRuntimeError):
    pass

class BrookTypeMismatch(BrookTypeError):
    def __init__(self, op: str, kinds: Tuple[str, ...]):
        if len(kinds) == 1:
            detail = f"operand of type {kinds[0]}"
        else:
            detail = "operands of type " + " and ".join(kinds)
        super().__init__(f"Operator '{op}' does not support {detail}")
        self.op = op
        self.kinds = kinds

class BrookUndefinedVariable(BrookRuntimeError):
    def __init__(self, name: str):
        super().__init__(f"Undefined variable '{name}'")
        self.name = name

class BrookNotCallable(BrookRuntimeError):
    def __init__(self, kind: str):
        super().__init__(f"Value of type {kind} is not callable")
        self.kind = kind

class BrookInvalidLoopIncrement(BrookRuntimeError):
    def __init__(self, found: str):
        super().__init__(f"For-loop increment must be an assignment; got {found}")
        self.found = found

class BrookDivisionByZero(BrookRuntimeError):
    def __init__(self) -> None:
        super().__init__("Division by zero")

class BrookIntegerOverflow(BrookRuntimeError):
    def __init__(self, op: str):
        super().__init__(f"Integer overflow in '{op}'")
        self.op = op

class BrookUnsupported(BrookRuntimeError):
    pass
