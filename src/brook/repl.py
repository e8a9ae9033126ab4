"""Interactive REPL for Brook, powered by prompt_toolkit."""

from __future__ import annotations

import re
import sys

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.shortcuts import clear

from .lexer_rd import LexError, tokenize
from .repl_highlight import BrookLexer
from .runner import BROOK_ERRORS, run
from .runtime import BrkNull, Env
from .token_types import TT
from .utils import debug_py_trace_enabled, report_error, set_debug_py_trace

# Characters pasted in from editors and chat clients that the lexer would reject.
_INVISIBLE_RE = re.compile("[\u200b\u200c\u200d\ufeff\u00a0]")

# name -> (help text, argument hint)
_SLASH_CMDS = {
    "/clear": ("Clear the screen", ""),
    "/py-traceback": ("Show Python tracebacks under Brook errors", "[on|off]"),
    "/reset": ("Drop every binding and start from an empty scope", ""),
}


def open_depth(text: str) -> int:
    """Number of unclosed braces/parens in *text*; 0 when complete or unscannable."""
    try:
        tokens = tokenize(text)
    except LexError:
        return 0

    depth = 0
    for tok in tokens:
        if tok.type in (TT.LBRACE, TT.LPAR):
            depth += 1
        elif tok.type in (TT.RBRACE, TT.RPAR):
            depth = max(depth - 1, 0)

    return depth


class _SlashCompleter(Completer):
    """Complete `/` commands typed at the start of the buffer."""

    def get_completions(self, document, complete_event):
        text = document.text_before_cursor
        if not text.startswith("/"):
            return

        for cmd, (desc, _hint) in _SLASH_CMDS.items():
            if cmd.startswith(text):
                yield Completion(
                    cmd,
                    start_position=-len(text),
                    display_meta=desc,
                )


def handle_slash(line: str, env_box: list[Env]) -> bool:
    """Run a `/` command; False means `line` is Brook source."""
    stripped = line.strip()
    if not stripped.startswith("/"):
        return False

    parts = stripped.split(None, 1)
    cmd = parts[0]
    arg = parts[1] if len(parts) > 1 else ""

    if cmd == "/clear":
        clear()
        return True

    if cmd == "/py-traceback":
        if arg.lower() in ("on", "1", "true", "yes"):
            set_debug_py_trace(True)
        elif arg.lower() in ("off", "0", "false", "no"):
            set_debug_py_trace(False)
        elif arg == "":
            set_debug_py_trace(not debug_py_trace_enabled())
        else:
            print("Usage: /py-traceback [on|off]", file=sys.stderr)
            return True

        state = "on" if debug_py_trace_enabled() else "off"
        print(f"Python traceback: {state}")
        return True

    if cmd == "/reset":
        env_box[0] = Env.root()
        print("Environment reset.")
        return True

    print(f"Unknown command: {cmd}", file=sys.stderr)
    return True


def _normalize(text: str) -> str:
    """Remove zero-width and non-breaking characters."""
    return _INVISIBLE_RE.sub("", text)


def eval_input(text: str, env_box: list[Env]) -> None:
    """Evaluate one submission against the persistent environment and print it."""
    try:
        result = run(text, env_box[0])
    except BROOK_ERRORS as exc:
        report_error(exc)
        return

    if not isinstance(result, BrkNull):
        print(result)


def repl() -> None:
    """Read submissions until EOF, evaluating each against one environment."""
    # Use a mutable box so /reset can swap the environment.
    env_box: list[Env] = [Env.root()]

    bindings = KeyBindings()

    @bindings.add("enter")
    def _enter(event):
        buf = event.app.current_buffer

        if buf.text.startswith("/") or open_depth(buf.text) == 0:
            buf.validate_and_handle()
            return

        buf.insert_text("\n" + "    " * open_depth(buf.text))

    session: PromptSession[str] = PromptSession(
        history=InMemoryHistory(),
        lexer=BrookLexer(),
        completer=_SlashCompleter(),
        complete_while_typing=True,
        key_bindings=bindings,
        multiline=True,
        prompt_continuation="... ",
    )

    print("brook repl (Ctrl-D to exit, / for commands)")

    while True:
        try:
            text = session.prompt(">>> ")
        except EOFError:
            print()
            break
        except KeyboardInterrupt:
            print("KeyboardInterrupt")
            continue

        text = _normalize(text)
        if not text.strip():
            continue

        if handle_slash(text, env_box):
            continue

        eval_input(text, env_box)
