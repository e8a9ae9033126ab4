"""Brook: a small dynamically-typed scripting language with a tree-walking evaluator."""

from .evaluator import eval_program
from .lexer_rd import LexError, tokenize
from .parser_rd import ParseError, parse_source
from .printer import to_source
from .runner import run
from .runtime import BrookRuntimeError, Env

__all__ = [
    "BrookRuntimeError",
    "Env",
    "LexError",
    "ParseError",
    "eval_program",
    "parse_source",
    "run",
    "to_source",
    "tokenize",
]
