"""Pytest configuration and fixtures."""

from collections.abc import Iterator
from pathlib import Path

import pytest

from spendwise.logging_setup import reset_logging

SAMPLE_CSV = """Transaction Date,Narration,Withdrawal Amount,Closing Balance
2026-01-02,Swiggy order #123,450.00,9550.00
2026-01-03,Amazon purchase headphones,1299.00,8251.00
2026-01-05,Uber trip to airport,520.50,7730.50
2026-01-07,Salary credit,0,17730.50
2026-01-09,Netflix subscription,649.00,17081.50
2026-01-11,Zomato dinner,310.00,16771.50
2026-01-12,Random transfer to friend,200.00,16571.50
"""


@pytest.fixture(autouse=True)
def clean_logging() -> Iterator[None]:
    """Undo logging configuration done by CLI tests."""
    reset_logging()
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep tests away from any real config files."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg_config"))
    monkeypatch.delenv("SPENDWISE_LOG_LEVEL", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def sample_rows() -> list[dict[str, str]]:
    """Return decoded rows of a small bank export."""
    return [
        {"Date": "2026-01-02", "Description": "Swiggy order #123", "Amount": "450"},
        {"Date": "2026-01-03", "Description": "Amazon purchase", "Amount": "1299"},
        {"Date": "2026-01-05", "Description": "Zomato dinner", "Amount": "70"},
        {"Date": "2026-01-07", "Description": "Random transfer", "Amount": "200"},
    ]


@pytest.fixture
def sample_csv_file(tmp_path: Path) -> Path:
    """Return path to a sample CSV export."""
    path = tmp_path / "statement.csv"
    path.write_text(SAMPLE_CSV, encoding="utf-8")
    return path
