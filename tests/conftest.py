"""Shared pytest fixtures for the chart tests."""

import datetime as dt
import io
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture
def stream() -> io.StringIO:
    """In-memory output sink for chart text."""
    return io.StringIO()


@pytest.fixture
def bar_records() -> list[dict]:
    return [{"region": "A", "revenue": 10}, {"region": "B", "revenue": 5}]


@pytest.fixture
def dated_records() -> list[dict]:
    """Four days of steadily increasing values."""
    start = dt.date(2024, 1, 1)
    return [
        {"date": start + dt.timedelta(days=i), "value": v}
        for i, v in enumerate([1, 2, 3, 4])
    ]


@pytest.fixture
def csv_file(tmp_path) -> Path:
    path = tmp_path / "revenue.csv"
    path.write_text("region,revenue\nA,10\nB,5\n")
    return path
