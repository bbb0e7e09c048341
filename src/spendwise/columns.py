"""Detect which CSV headers hold the date, description and amount."""

from collections.abc import Mapping, Sequence
from typing import Any

from spendwise.logging_setup import get_logger
from spendwise.models import ColumnMapping

logger = get_logger(__name__)

# Ranked header fragments. Earlier fragments win over later ones, even when a
# later fragment matches a header further to the left.
DATE_COLUMNS: tuple[str, ...] = (
    "date",
    "transaction date",
    "txn date",
    "timestamp",
    "created_at",
    "posting date",
    "value date",
    "effective date",
    "process date",
    "settlement date",
    "booking date",
    "trans date",
    "tran date",
    "transaction_date",
    "post_date",
    "posted_date",
    "cleared_date",
)

DESCRIPTION_COLUMNS: tuple[str, ...] = (
    "description",
    "details",
    "merchant",
    "txn details",
    "narration",
    "reference",
    "particulars",
    "remarks",
    "payee",
    "memo",
    "note",
    "comment",
    "transaction details",
    "trans details",
    "purpose",
    "reason",
    "beneficiary",
    "vendor",
    "supplier",
    "customer",
    "counterparty",
)

AMOUNT_COLUMNS: tuple[str, ...] = (
    "amount",
    "debit",
    "credit",
    "txn amount",
    "transaction amount",
    "value",
    "price",
    "cost",
    "debit amount",
    "credit amount",
    "net amount",
    "gross amount",
    "total",
    "sum",
    "balance",
    "withdrawal",
    "deposit",
    "payment",
    "receipt",
    "charge",
    "fee",
    "trans amount",
    "tran amount",
)


def find_column(headers: Sequence[str], fragments: Sequence[str]) -> str | None:
    """
    Find the header matching the highest-ranked fragment.

    Args:
        headers: Header names in column order
        fragments: Lowercase name fragments, best first

    Returns:
        The matching header in its original spelling, or None
    """
    lowered = [header.lower() for header in headers]

    for fragment in fragments:
        for index, header in enumerate(lowered):
            if fragment in header:
                return headers[index]

    return None


def detect_columns(rows: Sequence[Mapping[str, Any]]) -> ColumnMapping:
    """
    Infer the column mapping from the headers of the first row.

    All rows are assumed to share the first row's headers. An empty dataset
    yields a mapping with every field unset.

    Args:
        rows: Decoded CSV rows

    Returns:
        ColumnMapping (fields are None where nothing matched)
    """
    if not rows:
        return ColumnMapping()

    headers = list(rows[0].keys())
    mapping = ColumnMapping(
        date_column=find_column(headers, DATE_COLUMNS),
        description_column=find_column(headers, DESCRIPTION_COLUMNS),
        amount_column=find_column(headers, AMOUNT_COLUMNS),
    )

    logger.debug("Detected columns %s from headers %s", mapping.to_dict(), headers)
    return mapping
