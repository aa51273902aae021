"""Evaluator helper modules for the tinyjs runtime."""

__all__ = [
    "bind",
    "blocks",
    "common",
    "control",
    "expr",
    "fn",
    "helpers",
    "loops",
    "mutation",
]
