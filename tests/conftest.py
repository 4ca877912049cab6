from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, Dict, List

import pytest

BASE_DIR = Path(__file__).resolve().parent.parent
SRC_DIR = (BASE_DIR / "src").resolve()

if str(BASE_DIR) not in sys.path:
    sys.path.append(str(BASE_DIR))
if str(SRC_DIR) not in sys.path:
    sys.path.append(str(SRC_DIR))


@pytest.fixture
def source_file(tmp_path: Path) -> Callable[[str], str]:
    """Write source text to a temp input file and return its path."""

    def write(text: str) -> str:
        path = tmp_path / "input.txt"
        path.write_text(text, encoding="utf-8")
        return str(path)

    return write


def pytest_collection_modifyitems(
    session: pytest.Session,
    config: pytest.Config,
    items: List[pytest.Item],
) -> None:
    """Refuse to run when two parametrized cases share a node id."""
    del session
    del config

    seen: Dict[str, int] = {}
    for item in items:
        seen[item.nodeid] = seen.get(item.nodeid, 0) + 1

    duplicates = sorted(nodeid for nodeid, count in seen.items() if count > 1)
    if duplicates:
        lines = "\n".join(f"- {nodeid}" for nodeid in duplicates)
        raise pytest.UsageError(f"Duplicate test case ids:\n{lines}")
