"""Tests for transaction views and summaries."""

import csv
from pathlib import Path

import pytest

from spendwise import run_pipeline
from spendwise.aggregator import budget_overrides
from spendwise.models import Transaction
from spendwise.reports import (
    filter_transactions,
    format_summary,
    result_to_dict,
    sort_transactions,
    write_transactions_csv,
)


def _tx(index: int, date: str, description: str, amount: float, category: str) -> Transaction:
    return Transaction(
        id=f"txn-{index}",
        date=date,
        description=description,
        merchant=description.split()[0],
        amount=amount,
        category=category,
    )


@pytest.fixture
def transactions() -> list[Transaction]:
    """Return a handful of categorized transactions."""
    return [
        _tx(0, "2026-01-05", "Swiggy lunch", 250.0, "Food & Dining"),
        _tx(1, "03/01/2026", "Amazon order", 999.0, "Shopping"),
        _tx(2, "not a date", "Bank charge", 15.0, "Others"),
        _tx(3, "2026-01-09", "Zomato dinner", 400.0, "Food & Dining"),
    ]


class TestFilterTransactions:
    """Tests for filter_transactions function."""

    def test_no_filters(self, transactions: list[Transaction]) -> None:
        """Test no filters keeps everything."""
        assert filter_transactions(transactions) == transactions

    def test_search_description(self, transactions: list[Transaction]) -> None:
        """Test case-insensitive search in the description."""
        result = filter_transactions(transactions, search="DINNER")

        assert [tx.id for tx in result] == ["txn-3"]

    def test_search_merchant(self, transactions: list[Transaction]) -> None:
        """Test search also looks at the merchant."""
        result = filter_transactions(transactions, search="amazon")

        assert [tx.id for tx in result] == ["txn-1"]

    def test_category(self, transactions: list[Transaction]) -> None:
        """Test exact category filter."""
        result = filter_transactions(transactions, category="Food & Dining")

        assert [tx.id for tx in result] == ["txn-0", "txn-3"]

    def test_search_and_category(self, transactions: list[Transaction]) -> None:
        """Test both filters must match."""
        assert filter_transactions(transactions, search="amazon", category="Others") == []


class TestSortTransactions:
    """Tests for sort_transactions function."""

    def test_by_date_descending(self, transactions: list[Transaction]) -> None:
        """Test newest first, unparseable dates last."""
        result = sort_transactions(transactions)

        assert [tx.id for tx in result] == ["txn-3", "txn-0", "txn-1", "txn-2"]

    def test_by_date_ascending(self, transactions: list[Transaction]) -> None:
        """Test oldest first, unparseable dates first."""
        result = sort_transactions(transactions, by="date", descending=False)

        assert [tx.id for tx in result] == ["txn-2", "txn-1", "txn-0", "txn-3"]

    def test_by_amount(self, transactions: list[Transaction]) -> None:
        """Test sorting by amount."""
        result = sort_transactions(transactions, by="amount")

        assert [tx.amount for tx in result] == [999.0, 400.0, 250.0, 15.0]

    def test_by_description(self, transactions: list[Transaction]) -> None:
        """Test sorting by description ascending."""
        result = sort_transactions(transactions, by="description", descending=False)

        assert [tx.description for tx in result] == [
            "Amazon order",
            "Bank charge",
            "Swiggy lunch",
            "Zomato dinner",
        ]

    def test_invalid_key(self, transactions: list[Transaction]) -> None:
        """Test unknown sort keys are rejected."""
        with pytest.raises(ValueError, match="Cannot sort by"):
            sort_transactions(transactions, by="merchant")


class TestWriteTransactionsCsv:
    """Tests for write_transactions_csv function."""

    def test_write_csv(self, tmp_path: Path, transactions: list[Transaction]) -> None:
        """Test writing to CSV."""
        output_path = tmp_path / "out.csv"

        written = write_transactions_csv(transactions, output_path)

        assert written == 4
        with open(output_path, newline="", encoding="utf-8") as f:
            rows = list(csv.DictReader(f))
        assert len(rows) == 4
        assert rows[0]["id"] == "txn-0"
        assert rows[1]["amount"] == "999.00"
        assert rows[3]["category"] == "Food & Dining"

    def test_write_tsv(self, tmp_path: Path, transactions: list[Transaction]) -> None:
        """Test writing to TSV."""
        output_path = tmp_path / "out.tsv"

        write_transactions_csv(transactions, output_path, delimiter="\t")

        header = output_path.read_text(encoding="utf-8").splitlines()[0]
        assert header == "id\tdate\tdescription\tmerchant\tamount\tcategory"


class TestSummaries:
    """Tests for result_to_dict and format_summary."""

    def test_result_to_dict(self, sample_rows: list[dict[str, str]]) -> None:
        """Test JSON-ready conversion of a result."""
        result = run_pipeline(sample_rows)

        data = result_to_dict(result)

        assert data["mapping"]["amount_column"] == "Amount"
        assert len(data["transactions"]) == 4
        assert data["totals"]["spent"] == 2019
        assert data["totals"]["transactions"] == 4
        assert [c["name"] for c in data["categories"]] == ["Food & Dining", "Shopping", "Others"]

    def test_format_summary_alerts(self, sample_rows: list[dict[str, str]]) -> None:
        """Test the text summary lists categories and alerts."""
        result = run_pipeline(sample_rows, budget_for=budget_overrides({"Food & Dining": 500}))

        text = format_summary(result)

        assert "Transactions: 4" in text
        assert "Food & Dining" in text
        assert "[OVER BUDGET] Food & Dining: 520.00 of 500.00 spent (104%)" in text
        assert "[Near limit] Shopping" in text

    def test_format_summary_no_alerts(self, sample_rows: list[dict[str, str]]) -> None:
        """Test no alert section when spending is within budget."""
        result = run_pipeline(sample_rows[3:])

        assert "Budget alerts" not in format_summary(result)
