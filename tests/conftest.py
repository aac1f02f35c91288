from __future__ import annotations

import os
import sys

import pytest


def _ensure_project_root_on_path() -> None:
    # When running via the venv's pytest entrypoint, the CWD is not guaranteed to
    # be on sys.path. Ensure the repository root (containing `sheet_bot/`) is importable.
    project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
    if project_root not in sys.path:
        sys.path.insert(0, project_root)


_ensure_project_root_on_path()

from sheet_bot.chat import Navigator, Router  # noqa: E402
from sheet_bot.repositories import SheetRepository  # noqa: E402
from sheet_bot.sources import MemorySource  # noqa: E402


@pytest.fixture
def people_source() -> MemorySource:
    return MemorySource(
        [
            ["Name", "City", "Note"],
            ["Ann", "NY", "first"],
            ["Bob", " LA ", ""],
            ["Cid", "NY", "second NY"],
            ["Dee", "   ", "blank city"],
        ]
    )


@pytest.fixture
def people_repo(people_source: MemorySource) -> SheetRepository:
    return SheetRepository(people_source)


@pytest.fixture
def router(people_repo: SheetRepository) -> Router:
    return Router(people_repo, Navigator(), keyboard_columns=2)
