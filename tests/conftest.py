from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Dict, Iterator, List

import pytest

BASE_DIR = Path(__file__).resolve().parent.parent
SRC_DIR = (BASE_DIR / "src").resolve()

if str(BASE_DIR) not in sys.path:
    sys.path.append(str(BASE_DIR))
if str(SRC_DIR) not in sys.path:
    sys.path.append(str(SRC_DIR))

from tinyjs.heap import Heap, init_heap  # noqa: E402
from tinyjs.utils import PY_TRACE_ENV  # noqa: E402


@pytest.fixture
def heap() -> Heap:
    return init_heap()


@pytest.fixture(autouse=True)
def _no_py_trace(monkeypatch: pytest.MonkeyPatch) -> None:
    """Start every test with Python tracebacks off."""
    monkeypatch.delenv(PY_TRACE_ENV, raising=False)


@pytest.fixture(autouse=True)
def _reset_package_logger() -> Iterator[None]:
    """Remove handlers installed by `configure_logging`."""
    logger = logging.getLogger("tinyjs")
    level = logger.level
    yield
    for handler in [h for h in logger.handlers if getattr(h, "_tinyjs", False)]:
        logger.removeHandler(handler)
    logger.setLevel(level)


def pytest_collection_modifyitems(
    session: pytest.Session,
    config: pytest.Config,
    items: List[pytest.Item],
) -> None:
    """Fail fast if two scenarios ever share a node id."""
    del session
    del config

    seen: Dict[str, int] = {}
    duplicates: List[str] = []
    for item in items:
        if item.nodeid in seen:
            duplicates.append(item.nodeid)
            continue
        seen[item.nodeid] = 1

    if duplicates:
        lines = "\n".join(f"- {nodeid}" for nodeid in sorted(set(duplicates)))
        raise pytest.UsageError(f"Duplicate pytest nodeids detected during collection:\n{lines}")
