from __future__ import annotations

import logging
import sys
import traceback
from pathlib import Path
from typing import List, Optional, TextIO

from .env import Environment
from .evaluator import exec_stmt
from .heap import init_heap
from .parser import ParseError, parse_statement
from .types import JsRangeError, JsRuntimeError, JsValue, StmtResult, describe
from .utils import configure_logging, debug_py_trace_enabled

logger = logging.getLogger(__name__)


def complete_statement(line: str) -> str:
    """Append the `;` a bare line is missing, as the interactive front ends do."""
    text = line.strip()

    if text and not text.endswith(";") and not text.endswith("}"):
        text += ";"

    return text


def run_statement(src: str, env: Environment) -> StmtResult:
    """Parse and execute one fragment, keeping the full result triple."""
    logger.debug("run %r", src)

    try:
        stmt = parse_statement(src)
        return exec_stmt(stmt, env)
    except RecursionError:
        raise JsRangeError("Maximum nesting depth exceeded") from None


def run(src: str, env: Optional[Environment]=None) -> JsValue:
    """Evaluate `src` against `env` and return the fragment's value.

    The payload and any return signal stop at this boundary: a top-level
    fragment has nowhere to return to. `ParseError` propagates so callers
    can report it and carry on; runtime errors are fatal.
    """
    if env is None:
        env = init_heap()

    value, _, _ = run_statement(src, env)

    return value


def report_error(exc: Exception, out: Optional[TextIO]=None) -> None:
    out = out if out is not None else sys.stderr
    print(f"Error: {exc}", file=out)

    if isinstance(exc, JsRuntimeError) and debug_py_trace_enabled():
        print("\nPython traceback:", file=out)
        print("".join(traceback.format_tb(exc.__traceback__)), file=out, end="")


def eval_file(path: str, env: Optional[Environment]=None, out: Optional[TextIO]=None) -> Environment:
    """Evaluate a file line by line against one shared environment, echoing each result."""
    out = out if out is not None else sys.stdout
    if env is None:
        env = init_heap()

    print(f'Reading from "{path}"', file=out)
    source = Path(path).read_text(encoding="utf-8")

    for line in source.splitlines():
        text = complete_statement(line)
        if not text:
            continue

        print(f">> {text}", file=out)
        value, payload, _ = run_statement(text, env)
        print(f"=> {describe(value, payload)}", file=out)

    return env


def main(argv: Optional[List[str]]=None) -> None:
    args = list(sys.argv[1:] if argv is None else argv)
    files: List[str] = []
    level: Optional[int] = None

    for token in args:
        if token == "--debug":
            level = logging.DEBUG
            continue

        if token.startswith("-"):
            raise SystemExit(f"Unexpected argument: {token}")

        files.append(token)

    configure_logging(level)

    if not files:
        from .repl import repl  # prompt_toolkit is only needed interactively
        raise SystemExit(repl())

    for path in files:
        try:
            eval_file(path)
        except OSError as exc:
            raise SystemExit(f"Cannot open \"{path}\": {exc.strerror or exc}") from None
        except (ParseError, JsRuntimeError) as exc:
            report_error(exc)
            raise SystemExit(1) from None


if __name__ == "__main__":
    main()
