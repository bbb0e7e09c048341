"""Exceptions raised by spendwise."""

from dataclasses import dataclass

from spendwise.models import ColumnMapping


@dataclass(frozen=True)
class RowError:
    """A problem found while decoding one CSV line."""

    row: int
    message: str

    def __str__(self) -> str:
        return f"Row {self.row}: {self.message}"


class SpendwiseError(Exception):
    """Base class for all spendwise errors."""


class DecodeError(SpendwiseError):
    """The input file could not be read or is not well-formed CSV."""

    def __init__(self, message: str, errors: list[RowError] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class ColumnDetectionError(SpendwiseError):
    """One or more of the date/description/amount columns was not found."""

    def __init__(self, mapping: ColumnMapping) -> None:
        self.mapping = mapping
        self.missing = mapping.missing_fields()
        super().__init__(
            "Could not detect required columns in CSV file "
            f"(missing: {', '.join(self.missing)})"
        )


class EmptyDatasetError(SpendwiseError):
    """The input contained a header but no data rows."""

    def __init__(self, message: str = "CSV file contains no transactions") -> None:
        super().__init__(message)


class ConfigError(SpendwiseError, ValueError):
    """Invalid configuration value or budget override."""
