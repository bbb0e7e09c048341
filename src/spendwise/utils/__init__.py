"""Utility functions for spendwise."""

from spendwise.utils.parsing import (
    extract_merchant,
    parse_amount,
    parse_date,
    read_file,
)

__all__ = ["parse_date", "parse_amount", "extract_merchant", "read_file"]
