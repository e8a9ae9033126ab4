from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional, TextIO

from .evaluator import eval_program
from .lexer_rd import LexError, tokenize
from .parser_rd import ParseError, parse_tokens
from .printer import to_source
from .runtime import BrkNull, BrkValue, BrookRuntimeError, Env
from .tree import Program, to_lark
from .utils import report_error

# Deeply nested input exhausts the Python stack in the recursive parser and evaluator.
BROOK_ERRORS = (LexError, ParseError, BrookRuntimeError, RecursionError)

USAGE = "usage: brook [--tokens | --ast | --canonical] [PATH | -c SOURCE]"


def parse(src: str) -> Program:
    return parse_tokens(tokenize(src))

def run(src: str, env: Optional[Env] = None) -> BrkValue:
    """Scan, parse and evaluate `src`; pass `env` to keep bindings between runs."""
    return eval_program(parse(src), env)

def render(src: str, mode: str) -> str:
    """Front-end views of the earlier pipeline stages."""
    match mode:
        case "tokens":
            return "\n".join(repr(tok) for tok in tokenize(src))
        case "ast":
            return to_lark(parse(src)).pretty().rstrip("\n")
        case "canonical":
            return to_source(parse(src))

    raise ValueError(f"unknown render mode {mode!r}")

def run_lines(lines: TextIO, env: Optional[Env] = None, out: Optional[TextIO] = None) -> int:
    """Run each input line on its own, sharing one environment across lines.

    Errors are reported and the loop moves on to the next line; the exit code
    is 1 if any line failed.
    """
    env = env if env is not None else Env.root()
    out = out if out is not None else sys.stdout
    status = 0

    for line in lines:
        if not line.strip():
            continue

        try:
            result = run(line, env)
        except BROOK_ERRORS as exc:
            report_error(exc)
            status = 1
            continue

        if not isinstance(result, BrkNull):
            print(result, file=out)

    return status

def _load_source(path: str) -> str:
    return Path(path).read_text(encoding="utf-8")

def main(argv: Optional[List[str]] = None) -> int:
    mode: Optional[str] = None
    source: Optional[str] = None
    path: Optional[str] = None
    it = iter(sys.argv[1:] if argv is None else argv)

    for token in it:
        if token in ("--tokens", "--ast", "--canonical"):
            mode = token[2:]
            continue

        if token in ("-h", "--help"):
            print(USAGE)
            return 0

        if token == "-c":
            if path is not None or source is not None:
                print(f"-c cannot be combined with a path or another -c\n{USAGE}", file=sys.stderr)
                return 2
            try:
                source = next(it)
            except StopIteration:
                print("-c flag requires source text", file=sys.stderr)
                return 2
            continue

        if path is None and source is None:
            path = token
        else:
            print(f"Unexpected argument: {token}\n{USAGE}", file=sys.stderr)
            return 2

    if source is None and path is not None and path != "-":
        try:
            source = _load_source(path)
        except (OSError, UnicodeDecodeError) as exc:
            print(f"Error: cannot read {path}: {exc}", file=sys.stderr)
            return 1

    if source is None:
        if mode is not None:
            source = sys.stdin.read()
        elif sys.stdin.isatty() and path is None:
            from .repl import repl  # prompt_toolkit is only needed interactively
            repl()
            return 0
        else:
            return run_lines(sys.stdin)

    try:
        if mode is not None:
            print(render(source, mode))
        else:
            print(run(source))
    except BROOK_ERRORS as exc:
        report_error(exc)
        return 1

    return 0

if __name__ == "__main__":
    sys.exit(main())
