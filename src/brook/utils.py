from __future__ import annotations

import os
import sys
import traceback
from typing import TextIO

DEBUG_PY_TRACE_ENV = "BROOK_DEBUG_PY_TRACE"

_TRUTHY = {"1", "true", "yes", "on"}


def debug_py_trace_enabled() -> bool:
    """True when BROOK_DEBUG_PY_TRACE asks for Python tracebacks on errors."""
    return os.environ.get(DEBUG_PY_TRACE_ENV, "").strip().lower() in _TRUTHY


def set_debug_py_trace(enabled: bool) -> None:
    if enabled:
        os.environ[DEBUG_PY_TRACE_ENV] = "1"
    else:
        os.environ.pop(DEBUG_PY_TRACE_ENV, None)


def report_error(exc: BaseException, stream: TextIO | None = None) -> None:
    """Print the one-line diagnostic, plus the Python traceback when enabled."""
    out = stream if stream is not None else sys.stderr
    if isinstance(exc, RecursionError):
        print("Error: Nesting too deep", file=out)
    else:
        print(f"Error: {exc}", file=out)

    if debug_py_trace_enabled() and exc.__traceback__ is not None:
        print("\nPython traceback:", file=out)
        print("".join(traceback.format_tb(exc.__traceback__)), file=out, end="")
