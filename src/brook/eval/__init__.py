"""Evaluator helper modules for the Brook runtime."""

__all__ = [
    "blocks",
    "common",
    "expr",
    "loops",
]
