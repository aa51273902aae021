from __future__ import annotations

import logging
import os
import sys
from typing import Optional

LOG_LEVEL_ENV = "TINYJS_LOG_LEVEL"
PY_TRACE_ENV = "TINYJS_DEBUG_PY_TRACE"
HISTORY_ENV = "TINYJS_HISTORY"

DEFAULT_HISTORY_FILE = ".history"

_TRUTHY = {"1", "true", "yes", "on"}


def debug_py_trace_enabled() -> bool:
    """Print Python tracebacks after reported runtime errors."""
    return os.environ.get(PY_TRACE_ENV, "").strip().lower() in _TRUTHY


def set_debug_py_trace(enabled: bool) -> None:
    if enabled:
        os.environ[PY_TRACE_ENV] = "1"
    else:
        os.environ.pop(PY_TRACE_ENV, None)


def history_path() -> str:
    return os.environ.get(HISTORY_ENV) or DEFAULT_HISTORY_FILE


def log_level(default: str="WARNING") -> int:
    raw = os.environ.get(LOG_LEVEL_ENV, default).strip().upper()
    level = logging.getLevelName(raw)

    return level if isinstance(level, int) else logging.WARNING


def configure_logging(level: Optional[int]=None) -> None:
    """Install a stderr handler on the package logger (front ends only)."""
    logger = logging.getLogger("tinyjs")
    logger.setLevel(level if level is not None else log_level())

    if any(getattr(h, "_tinyjs", False) for h in logger.handlers):
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    handler._tinyjs = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
