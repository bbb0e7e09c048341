"""Turn decoded rows into categorized transactions."""

from collections.abc import Mapping, Sequence
from typing import Any

from spendwise.categories import categorize
from spendwise.logging_setup import get_logger
from spendwise.models import ColumnMapping, Transaction
from spendwise.utils import extract_merchant, parse_amount

logger = get_logger(__name__)


def _cell(row: Mapping[str, Any], column: str | None) -> str:
    """Return a cell value as a string, or "" if the column is missing."""
    if column is None:
        return ""
    value = row.get(column)
    if value is None:
        return ""
    return str(value)


def normalize_row(
    index: int,
    row: Mapping[str, Any],
    mapping: ColumnMapping,
    match_merchant: bool = False,
) -> Transaction | None:
    """
    Build the transaction for one row.

    Args:
        index: Position of the row in the dataset (used for the id)
        row: Decoded CSV row
        mapping: Detected column mapping
        match_merchant: Also match category keywords against the merchant

    Returns:
        Transaction, or None if the amount is zero, negative or unparseable
    """
    value = parse_amount(_cell(row, mapping.amount_column))
    if value <= 0:
        return None

    description = _cell(row, mapping.description_column)
    merchant = extract_merchant(description)
    rule = categorize(description, merchant) if match_merchant else categorize(description)

    return Transaction(
        id=f"txn-{index}",
        date=_cell(row, mapping.date_column),
        description=description,
        merchant=merchant,
        amount=value,
        category=rule.category,
        original_data=dict(row),
    )


def normalize(
    rows: Sequence[Mapping[str, Any]],
    mapping: ColumnMapping,
    *,
    match_merchant: bool = False,
) -> list[Transaction]:
    """
    Normalize rows into transactions, keeping their input order.

    Rows without a positive amount are dropped silently; the surviving
    transactions keep the id of their original row index.

    Args:
        rows: Decoded CSV rows
        mapping: Column mapping (callers check it is complete)
        match_merchant: Also match category keywords against the merchant

    Returns:
        List of Transaction objects
    """
    transactions: list[Transaction] = []

    for index, row in enumerate(rows):
        tx = normalize_row(index, row, mapping, match_merchant=match_merchant)
        if tx is None:
            logger.debug(
                "Dropped row %d: no positive amount in %r",
                index,
                _cell(row, mapping.amount_column),
            )
            continue
        transactions.append(tx)

    dropped = len(rows) - len(transactions)
    if dropped:
        logger.info("Skipped %d of %d rows without a positive amount", dropped, len(rows))

    return transactions
