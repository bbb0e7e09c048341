"""Entry points that run detection, categorization and aggregation."""

import threading
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from spendwise.aggregator import BudgetLookup, aggregate, budget_overrides
from spendwise.columns import detect_columns
from spendwise.decoder import read_rows
from spendwise.errors import (
    ColumnDetectionError,
    DecodeError,
    EmptyDatasetError,
    SpendwiseError,
)
from spendwise.logging_setup import get_logger
from spendwise.models import PipelineResult
from spendwise.normalizer import normalize

logger = get_logger(__name__)


def run_pipeline(
    rows: Sequence[Mapping[str, Any]],
    *,
    budget_for: BudgetLookup | None = None,
    match_merchant: bool = False,
) -> PipelineResult:
    """
    Run the full pipeline over one decoded dataset.

    Args:
        rows: Decoded CSV rows
        budget_for: Optional budget override lookup
        match_merchant: Also match category keywords against the merchant

    Returns:
        PipelineResult with transactions, categories and alerts

    Raises:
        EmptyDatasetError: If there are no rows
        ColumnDetectionError: If date, description or amount was not detected
    """
    if not rows:
        raise EmptyDatasetError()

    mapping = detect_columns(rows)
    if not mapping.is_complete:
        raise ColumnDetectionError(mapping)

    transactions = normalize(rows, mapping, match_merchant=match_merchant)
    categories, alerts = aggregate(transactions, budget_for)

    logger.info(
        "Processed %d rows into %d transactions across %d categories (%d alerts)",
        len(rows),
        len(transactions),
        len(categories),
        len(alerts),
    )

    return PipelineResult(
        mapping=mapping,
        transactions=tuple(transactions),
        categories=tuple(categories),
        alerts=tuple(alerts),
    )


def process_upload(
    filepath: Path,
    *,
    budget_for: BudgetLookup | None = None,
    match_merchant: bool = False,
) -> PipelineResult:
    """
    Decode a file and run the pipeline on it.

    Raises:
        DecodeError: If the file cannot be read or has malformed lines
        EmptyDatasetError: If the file has no data rows
        ColumnDetectionError: If required columns were not detected
    """
    decoded = read_rows(filepath)
    if decoded.errors:
        raise DecodeError(
            f"CSV parsing error: {decoded.errors[0]}",
            errors=decoded.errors,
        )

    return run_pipeline(decoded.rows, budget_for=budget_for, match_merchant=match_merchant)


class BudgetSession:
    """
    Holds the current result for one interactive session.

    Each upload takes a ticket from begin_upload(); only the most recent
    ticket may publish its result, so a slow upload that finishes after a
    newer one started is discarded.

    Usage:
        session = BudgetSession()
        ticket = session.begin_upload()
        session.complete_upload(ticket, rows)
        session.set_budget("Shopping", 2000)
    """

    def __init__(
        self,
        budgets: Mapping[str, float] | None = None,
        match_merchant: bool = False,
    ) -> None:
        """
        Initialize session.

        Args:
            budgets: Initial budget overrides by category name
            match_merchant: Also match category keywords against the merchant
        """
        self.match_merchant = match_merchant
        self._budgets: dict[str, float] = {}
        if budgets:
            budget_overrides(budgets)  # validates
            self._budgets = {name: float(value) for name, value in budgets.items()}
        self._lock = threading.Lock()
        self._latest_ticket = 0
        self._result: PipelineResult | None = None
        self._last_error: SpendwiseError | None = None

    @property
    def result(self) -> PipelineResult | None:
        """Get the most recently published result."""
        with self._lock:
            return self._result

    @property
    def last_error(self) -> SpendwiseError | None:
        """Get the failure of the most recent upload, if it failed."""
        with self._lock:
            return self._last_error

    @property
    def budgets(self) -> dict[str, float]:
        """Get a copy of the session's budget overrides."""
        with self._lock:
            return self._budgets.copy()

    def begin_upload(self) -> int:
        """Start a new upload and return its ticket."""
        with self._lock:
            self._latest_ticket += 1
            return self._latest_ticket

    def is_current(self, ticket: int) -> bool:
        """Return True if no newer upload has started."""
        with self._lock:
            return ticket == self._latest_ticket

    def complete_upload(
        self, ticket: int, rows: Sequence[Mapping[str, Any]]
    ) -> PipelineResult | None:
        """
        Run the pipeline for an upload and publish its result.

        Args:
            ticket: Ticket from begin_upload()
            rows: Decoded CSV rows

        Returns:
            The published result, or None if a newer upload superseded this one

        Raises:
            SpendwiseError: If the pipeline fails (also kept as last_error)
        """
        budgets = self.budgets
        try:
            result = run_pipeline(
                rows, budget_for=budget_overrides(budgets), match_merchant=self.match_merchant
            )
        except SpendwiseError as e:
            self.fail_upload(ticket, e)
            raise

        with self._lock:
            if ticket != self._latest_ticket:
                logger.info("Discarding result of superseded upload %d", ticket)
                return None
            self._result = result
            self._last_error = None
            # Budgets edited while the pipeline ran
            if self._budgets != budgets:
                self._refresh()
            return self._result

    def fail_upload(self, ticket: int, error: SpendwiseError) -> None:
        """Record the failure of an upload if it is still the latest one."""
        with self._lock:
            if ticket != self._latest_ticket:
                logger.info("Ignoring failure of superseded upload %d: %s", ticket, error)
                return
            self._last_error = error
        logger.warning("Upload %d failed: %s", ticket, error)

    def set_budget(self, category: str, amount: float) -> PipelineResult | None:
        """
        Override the budget for a category and refresh the current result.

        Returns:
            The refreshed result, or None if nothing has been uploaded yet

        Raises:
            ConfigError: If the amount is not positive
        """
        budget_overrides({category: amount})  # validates
        with self._lock:
            self._budgets[category] = float(amount)
            return self._refresh()

    def reset_budgets(self) -> PipelineResult | None:
        """Drop all budget overrides and refresh the current result."""
        with self._lock:
            self._budgets.clear()
            return self._refresh()

    def _refresh(self) -> PipelineResult | None:
        """Re-aggregate the current transactions (lock must be held)."""
        if self._result is None:
            return None

        categories, alerts = aggregate(
            self._result.transactions, budget_overrides(self._budgets)
        )
        self._result = PipelineResult(
            mapping=self._result.mapping,
            transactions=self._result.transactions,
            categories=tuple(categories),
            alerts=tuple(alerts),
        )
        return self._result
