"""Views over a pipeline result: filtering, sorting, CSV export and summaries."""

import csv
from collections.abc import Callable, Iterable
from datetime import date
from pathlib import Path
from typing import Any

from spendwise.categories import render_icon
from spendwise.models import PipelineResult, Transaction
from spendwise.utils import parse_date

_SORT_KEYS: dict[str, Callable[[Transaction], Any]] = {
    "date": lambda tx: parse_date(tx.date) or date.min,
    "amount": lambda tx: tx.amount,
    "description": lambda tx: tx.description.lower(),
}
SORT_KEYS = list(_SORT_KEYS)

CSV_FIELDS = ["id", "date", "description", "merchant", "amount", "category"]


def filter_transactions(
    transactions: Iterable[Transaction],
    search: str = "",
    category: str = "",
) -> list[Transaction]:
    """
    Filter transactions by free text and category.

    Args:
        transactions: Transactions to filter
        search: Case-insensitive text to find in description or merchant
        category: Exact category name ("" for all)

    Returns:
        Matching transactions in their original order
    """
    needle = search.lower()
    return [
        tx
        for tx in transactions
        if (needle in tx.description.lower() or needle in tx.merchant.lower())
        and (not category or tx.category == category)
    ]


def sort_transactions(
    transactions: Iterable[Transaction],
    by: str = "date",
    descending: bool = True,
) -> list[Transaction]:
    """
    Sort transactions by date, amount or description.

    Dates that cannot be parsed sort before all real dates.

    Raises:
        ValueError: If ``by`` is not a supported sort key
    """
    if by not in _SORT_KEYS:
        raise ValueError(f"Cannot sort by {by!r}; expected one of {', '.join(SORT_KEYS)}")

    return sorted(transactions, key=_SORT_KEYS[by], reverse=descending)


def write_transactions_csv(
    transactions: Iterable[Transaction],
    output_path: Path,
    delimiter: str = ",",
) -> int:
    """
    Write transactions to CSV file.

    Args:
        transactions: List of transactions
        output_path: Output file path
        delimiter: CSV delimiter (default comma)

    Returns:
        Number of transactions written
    """
    count = 0
    with open(output_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=CSV_FIELDS, delimiter=delimiter)
        writer.writeheader()
        for tx in transactions:
            writer.writerow(tx.to_dict())
            count += 1
    return count


def result_to_dict(result: PipelineResult) -> dict[str, Any]:
    """Convert a pipeline result to a JSON-serializable dictionary."""
    return {
        "mapping": result.mapping.to_dict(),
        "transactions": [tx.to_dict() for tx in result.transactions],
        "categories": [category.to_dict() for category in result.categories],
        "alerts": [alert.to_dict() for alert in result.alerts],
        "totals": {
            "spent": round(result.total_spent, 2),
            "budget": round(result.total_budget, 2),
            "remaining": round(result.remaining_budget, 2),
            "transactions": len(result.transactions),
        },
    }


def format_summary(result: PipelineResult) -> str:
    """Render a plain-text dashboard for a pipeline result."""
    lines = [
        f"Transactions: {len(result.transactions)}",
        f"Total spent:  {result.total_spent:>12.2f}",
        f"Total budget: {result.total_budget:>12.2f}",
        f"Remaining:    {result.remaining_budget:>12.2f}",
        "",
    ]

    if result.categories:
        lines.append("Categories:")
        width = max(len(category.name) for category in result.categories)
        for category in result.categories:
            lines.append(
                f"  {render_icon(category.icon)} {category.name:<{width}}  "
                f"{category.total:>10.2f} / {category.budget:<10.2f} "
                f"{category.percentage_used:5.1f}%  "
                f"({category.count} txn, {category.remaining:.2f} left)"
            )

    if result.alerts:
        lines.append("")
        lines.append("Budget alerts:")
        for alert in result.alerts:
            label = "OVER BUDGET" if alert.is_overspent else "Near limit"
            lines.append(
                f"  [{label}] {alert.category}: {alert.spent:.2f} of "
                f"{alert.budget:.2f} spent ({alert.percentage:.0f}%)"
            )

    return "\n".join(lines)
