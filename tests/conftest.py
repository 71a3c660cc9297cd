# tests/conftest.py

from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from taskshell.engine import dates

# Every test runs with "today" pinned to this day.
TODAY = date(2024, 1, 1)


@pytest.fixture(autouse=True)
def fixed_today(monkeypatch: pytest.MonkeyPatch) -> date:
    monkeypatch.setattr(dates, "_local_today", lambda: TODAY)
    return TODAY


@pytest.fixture()
def tasks_file(tmp_path: Path) -> Path:
    """Empty task file, as the CLI creates it before first use."""
    p = tmp_path / "tasks.json"
    p.touch()
    return p


@pytest.fixture()
def categories_file(tmp_path: Path) -> Path:
    p = tmp_path / "categories.txt"
    p.touch()
    return p
