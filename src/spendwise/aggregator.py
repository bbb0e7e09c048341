"""Aggregate transactions into per-category totals and budget alerts."""

import math
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import NamedTuple

from spendwise.categories import FALLBACK_RULE, find_rule
from spendwise.errors import ConfigError
from spendwise.models import DANGER, WARNING, BudgetAlert, Category, Transaction

# Spend above this share of the budget raises a warning
ALERT_THRESHOLD = 0.8

BudgetLookup = Callable[[str], float | None]


class Aggregation(NamedTuple):
    """Categories in first-seen order and the alerts derived from them."""

    categories: list[Category]
    alerts: list[BudgetAlert]


def budget_overrides(budgets: Mapping[str, float]) -> BudgetLookup:
    """
    Build a budget lookup from a {category: budget} mapping.

    Args:
        budgets: Budget per category name

    Returns:
        Callable returning the override for a category, or None

    Raises:
        ConfigError: If a budget is not a positive number
    """
    table: dict[str, float] = {}
    for name, value in budgets.items():
        try:
            amount = float(value)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Budget for {name!r} is not a number: {value!r}") from e
        if not 0 < amount < math.inf:
            raise ConfigError(f"Budget for {name!r} must be positive and finite, got {value!r}")
        table[name] = amount

    return table.get


def build_categories(
    transactions: Iterable[Transaction],
    budget_for: BudgetLookup | None = None,
) -> list[Category]:
    """Total up transactions per category, in order of first appearance."""
    totals: dict[str, float] = {}
    counts: dict[str, int] = {}

    for tx in transactions:
        totals[tx.category] = totals.get(tx.category, 0.0) + tx.amount
        counts[tx.category] = counts.get(tx.category, 0) + 1

    categories: list[Category] = []
    for name, total in totals.items():
        rule = find_rule(name) or FALLBACK_RULE
        budget = rule.budget
        if budget_for is not None:
            override = budget_for(name)
            if override is not None:
                budget = override

        categories.append(
            Category(
                name=name,
                total=total,
                count=counts[name],
                color=rule.color,
                icon=rule.icon,
                budget=budget,
            )
        )

    return categories


def budget_alerts(categories: Iterable[Category]) -> list[BudgetAlert]:
    """Alert on every category that has spent more than 80% of its budget."""
    alerts: list[BudgetAlert] = []

    for category in categories:
        if category.total <= category.budget * ALERT_THRESHOLD:
            continue
        alerts.append(
            BudgetAlert(
                category=category.name,
                spent=category.total,
                budget=category.budget,
                percentage=category.total / category.budget * 100,
                severity=DANGER if category.total > category.budget else WARNING,
            )
        )

    return alerts


def aggregate(
    transactions: Sequence[Transaction],
    budget_for: BudgetLookup | None = None,
) -> Aggregation:
    """
    Compute category totals and budget alerts for a set of transactions.

    Transactions are grouped by their stored category; the rule engine is not
    consulted again. Display metadata comes from the category catalog, with
    the "Others" defaults for names the catalog does not know.

    Args:
        transactions: Normalized transactions
        budget_for: Optional lookup whose non-None results replace catalog budgets

    Returns:
        Aggregation of categories and alerts
    """
    categories = build_categories(transactions, budget_for)
    return Aggregation(categories=categories, alerts=budget_alerts(categories))
