from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from .types import (
    BrkNull, BrkInt, BrkFloat, BrkString, BrkBool, BrkValue,
    INT_MIN, INT_MAX,
    BrookRuntimeError, BrookTypeError, BrookTypeMismatch, BrookUndefinedVariable,
    BrookNotCallable, BrookInvalidLoopIncrement, BrookDivisionByZero,
    BrookIntegerOverflow, BrookUnsupported,
    kind_name,
)

EnvHandle = int

ROOT: EnvHandle = 0

@dataclass
class Scope:
    parent: Optional[EnvHandle]
    vars: Dict[str, BrkValue] = field(default_factory=dict)

class EnvArena:
    """Stack-disciplined store of scopes addressed by integer handle.

    A block pushes a child of the active scope on entry and pops it on exit,
    so the live scopes always form a single chain ending at the root.
    """

    def __init__(self) -> None:
        self._scopes: List[Scope] = [Scope(parent=None)]

    def push(self, parent: EnvHandle) -> EnvHandle:
        self._check(parent)
        self._scopes.append(Scope(parent=parent))
        return len(self._scopes) - 1

    def pop(self, handle: EnvHandle) -> None:
        if handle == ROOT:
            raise BrookRuntimeError("Cannot pop the root scope")

        if handle != len(self._scopes) - 1:
            raise BrookRuntimeError(f"Scope {handle} is not the innermost scope")

        self._scopes.pop()

    def depth(self) -> int:
        return len(self._scopes)

    def define(self, handle: EnvHandle, name: str, val: BrkValue) -> None:
        self._check(handle)
        self._scopes[handle].vars[name] = val

    def get(self, handle: EnvHandle, name: str) -> BrkValue:
        scope = self._resolve(handle, name)
        if scope is None:
            raise BrookUndefinedVariable(name)

        return scope.vars[name]

    def set(self, handle: EnvHandle, name: str, val: BrkValue) -> None:
        scope = self._resolve(handle, name)
        if scope is None:
            raise BrookUndefinedVariable(name)

        scope.vars[name] = val

    def _resolve(self, handle: EnvHandle, name: str) -> Optional[Scope]:
        self._check(handle)
        cur: Optional[EnvHandle] = handle

        while cur is not None:
            scope = self._scopes[cur]
            if name in scope.vars:
                return scope
            cur = scope.parent

        return None

    def _check(self, handle: EnvHandle) -> None:
        if not 0 <= handle < len(self._scopes):
            raise BrookRuntimeError(f"Scope {handle} is no longer live")

@dataclass(frozen=True)
class Env:
    """The active scope, passed explicitly through every evaluation call."""

    arena: EnvArena
    handle: EnvHandle = ROOT

    @classmethod
    def root(cls) -> Env:
        return cls(EnvArena(), ROOT)

    def define(self, name: str, val: BrkValue) -> None:
        self.arena.define(self.handle, name, val)

    def get(self, name: str) -> BrkValue:
        return self.arena.get(self.handle, name)

    def set(self, name: str, val: BrkValue) -> None:
        self.arena.set(self.handle, name, val)

    def depth(self) -> int:
        return self.arena.depth()

    @contextmanager
    def child(self) -> Iterator[Env]:
        handle = self.arena.push(self.handle)

        try:
            yield Env(self.arena, handle)
        finally:
            self.arena.pop(handle)

def check_int(value: int, op: str) -> BrkInt:
    if value < INT_MIN or value > INT_MAX:
        raise BrookIntegerOverflow(op)

    return BrkInt(value)

__all__ = [
    "BrkNull", "BrkInt", "BrkFloat", "BrkString", "BrkBool", "BrkValue",
    "BrookRuntimeError", "BrookTypeError", "BrookTypeMismatch", "BrookUndefinedVariable",
    "BrookNotCallable", "BrookInvalidLoopIncrement", "BrookDivisionByZero",
    "BrookIntegerOverflow", "BrookUnsupported",
    "Env", "EnvArena", "EnvHandle", "ROOT", "Scope",
    "check_int", "kind_name",
]
