"""Tests for category aggregation and budget alerts."""

import pytest

from spendwise.aggregator import aggregate, budget_alerts, budget_overrides
from spendwise.errors import ConfigError
from spendwise.models import Category, Transaction


def _tx(index: int, category: str, amount: float) -> Transaction:
    return Transaction(
        id=f"txn-{index}",
        date="2026-01-01",
        description=f"{category} spend",
        merchant=category,
        amount=amount,
        category=category,
    )


class TestAggregate:
    """Tests for aggregate function."""

    def test_default_budget_no_alert(self) -> None:
        """Test 450 against the default Food & Dining budget of 1000 is quiet."""
        result = aggregate([_tx(0, "Food & Dining", 300), _tx(1, "Food & Dining", 150)])

        assert result.categories[0].total == 450
        assert result.categories[0].budget == 1000
        assert result.alerts == []

    def test_warning_then_danger_with_budget_500(self) -> None:
        """Test severity flips from warning to danger once spend passes the budget."""
        budget_for = budget_overrides({"Food & Dining": 500})

        warning = aggregate([_tx(0, "Food & Dining", 450)], budget_for)
        danger = aggregate([_tx(0, "Food & Dining", 450), _tx(1, "Food & Dining", 70)], budget_for)

        assert warning.alerts[0].severity == "warning"
        assert warning.alerts[0].percentage == pytest.approx(90.0)
        assert danger.alerts[0].severity == "danger"
        assert danger.alerts[0].percentage == pytest.approx(104.0)
        assert danger.alerts[0].spent == 520

    def test_no_alert_at_80_percent(self) -> None:
        """Test spend of exactly 80% stays quiet."""
        result = aggregate([_tx(0, "Others", 400)])

        assert result.alerts == []

    def test_exactly_at_budget_is_warning(self) -> None:
        """Test spend equal to the budget is a warning, not danger."""
        result = aggregate([_tx(0, "Others", 500)])

        assert result.alerts[0].severity == "warning"

    def test_totals_and_counts(self) -> None:
        """Test totals and counts per category."""
        transactions = [
            _tx(0, "Shopping", 100),
            _tx(1, "Utilities", 40),
            _tx(2, "Shopping", 25.5),
        ]

        result = aggregate(transactions)

        shopping = result.categories[0]
        assert shopping.name == "Shopping"
        assert shopping.total == pytest.approx(125.5)
        assert shopping.count == 2
        assert shopping.color == "#8B5CF6"
        assert shopping.icon == "shopping-bag"
        assert shopping.budget == 1500

    def test_first_appearance_order(self) -> None:
        """Test categories are ordered by first appearance."""
        transactions = [
            _tx(0, "Utilities", 1),
            _tx(1, "Education", 1),
            _tx(2, "Utilities", 1),
            _tx(3, "Andere", 1),
            _tx(4, "Education", 1),
        ]

        result = aggregate(transactions)

        assert [c.name for c in result.categories] == ["Utilities", "Education", "Andere"]

    def test_sum_preserved(self) -> None:
        """Test no amount is lost or double counted."""
        transactions = [_tx(i, name, 10.25 * (i + 1)) for i, name in enumerate(
            ["Shopping", "Others", "Shopping", "Healthcare", "Others", "Utilities"]
        )]

        result = aggregate(transactions)

        assert sum(c.total for c in result.categories) == pytest.approx(
            sum(tx.amount for tx in transactions)
        )
        assert sum(c.count for c in result.categories) == len(transactions)

    def test_unknown_category_uses_fallback(self) -> None:
        """Test categories missing from the catalog get Others metadata."""
        result = aggregate([_tx(0, "Gifts", 10), _tx(1, "Others", 10)])

        for category in result.categories:
            assert category.color == "#6B7280"
            assert category.icon == "more-horizontal"
            assert category.budget == 500

    def test_empty(self) -> None:
        """Test no transactions give no categories or alerts."""
        result = aggregate([])

        assert result.categories == []
        assert result.alerts == []

    def test_budget_override(self) -> None:
        """Test an override replaces the catalog budget."""
        result = aggregate([_tx(0, "Shopping", 300)], budget_overrides({"Shopping": 250}))

        assert result.categories[0].budget == 250
        assert result.alerts[0].severity == "danger"

    def test_override_returning_none_keeps_default(self) -> None:
        """Test categories without an override keep the catalog budget."""
        result = aggregate([_tx(0, "Education", 300)], lambda name: None)

        assert result.categories[0].budget == 2000

    def test_fresh_result_each_call(self) -> None:
        """Test each call builds new lists."""
        transactions = [_tx(0, "Shopping", 10)]

        first = aggregate(transactions)
        second = aggregate(transactions)

        assert first == second
        assert first.categories is not second.categories


class TestBudgetAlerts:
    """Tests for budget_alerts function."""

    def test_alert_order_follows_categories(self) -> None:
        """Test alerts keep category order."""
        categories = [
            Category("B", 900, 1, "#000000", "zap", 1000),
            Category("A", 10, 1, "#000000", "zap", 1000),
            Category("C", 2000, 1, "#000000", "zap", 1000),
        ]

        alerts = budget_alerts(categories)

        assert [a.category for a in alerts] == ["B", "C"]
        assert [a.severity for a in alerts] == ["warning", "danger"]


class TestBudgetOverrides:
    """Tests for budget_overrides function."""

    def test_lookup(self) -> None:
        """Test lookup returns overrides and None otherwise."""
        budget_for = budget_overrides({"Shopping": 2000, "Others": "750"})

        assert budget_for("Shopping") == 2000.0
        assert budget_for("Others") == 750.0
        assert budget_for("Utilities") is None

    @pytest.mark.parametrize("value", [0, -10, "abc", None, float("nan"), float("inf")])
    def test_rejects_invalid(self, value: object) -> None:
        """Test non-positive, non-finite or non-numeric budgets are rejected."""
        with pytest.raises(ConfigError):
            budget_overrides({"Shopping": value})  # type: ignore[dict-item]
