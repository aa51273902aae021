"""Interactive REPL for tinyjs, powered by prompt_toolkit."""

from __future__ import annotations

import re
import sys
from prompt_toolkit import PromptSession
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.history import FileHistory

from .heap import Heap, init_heap
from .parser import ParseError
from .runner import complete_statement, report_error, run_statement
from .types import JsRuntimeError, describe
from .utils import debug_py_trace_enabled, history_path, set_debug_py_trace

# Zero-width and invisible characters to strip from input.
_INVISIBLE_RE = re.compile("[\u200b\u200c\u200d\ufeff\u00a0\r]")

# Slash commands: name => (description, argument_hint).
_SLASH_CMDS = {
    "/env": ("List the bindings visible from the top level", ""),
    "/py-traceback": ("Toggle Python traceback on errors", "[on|off]"),
    "/reset": ("Reset the REPL environment", ""),
}


class _SlashCompleter(Completer):
    """Autocomplete slash commands on the prompt."""

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


def _handle_slash(line: str, heap_box: list[Heap]) -> bool:
    """Handle slash commands. Returns True if the line was a command."""
    stripped = line.strip()
    if not stripped.startswith("/"):
        return False

    parts = stripped.split(None, 1)
    cmd = parts[0]
    arg = parts[1] if len(parts) > 1 else ""

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
        heap_box[0] = init_heap()
        print("Environment reset.")
        return True

    if cmd == "/env":
        for name, (value, payload) in heap_box[0].bindings().items():
            print(f"{name} = {describe(value, payload)}")
        return True

    print(f"Unknown command: {cmd}", file=sys.stderr)
    return True


def _normalize(text: str) -> str:
    """Strip invisible characters from input."""
    return _INVISIBLE_RE.sub("", text)


def repl() -> int:
    """Read-eval-print loop over one shared heap; returns the exit status."""
    heap_box: list[Heap] = [init_heap()]

    session: PromptSession[str] = PromptSession(
        history=FileHistory(history_path()),
        completer=_SlashCompleter(),
        complete_while_typing=True,
    )

    print("tinyjs repl, Ctrl-D to exit, / for commands")

    while True:
        try:
            text = session.prompt(">> ")
        except EOFError:
            print()
            return 0
        except KeyboardInterrupt:
            print("KeyboardInterrupt")
            return 1

        text = _normalize(text)
        if not text.strip():
            continue

        if _handle_slash(text, heap_box):
            continue

        try:
            value, payload, _ = run_statement(complete_statement(text), heap_box[0])
        except (ParseError, JsRuntimeError) as exc:
            report_error(exc)
            continue

        print(f"=> {describe(value, payload)}")
