"""Decode CSV exports into header-keyed rows."""

import csv
from io import StringIO
from pathlib import Path
from typing import NamedTuple

from spendwise.errors import DecodeError, RowError
from spendwise.logging_setup import get_logger
from spendwise.utils import read_file

logger = get_logger(__name__)

RawRow = dict[str, str]


class DecodedCSV(NamedTuple):
    """Rows keyed by header plus any problems found while decoding."""

    rows: list[RawRow]
    errors: list[RowError]

    @property
    def headers(self) -> list[str]:
        """Header names of the first row (empty for an empty file)."""
        return list(self.rows[0].keys()) if self.rows else []


def _unique_headers(names: list[str]) -> list[str]:
    """Suffix repeated header names with _1, _2, ... so no column is lost."""
    used = set(names)
    counts: dict[str, int] = {}
    headers: list[str] = []
    for name in names:
        if name not in counts:
            counts[name] = 1
            headers.append(name)
            continue

        suffix = counts[name]
        while f"{name}_{suffix}" in used:
            suffix += 1
        counts[name] = suffix + 1
        renamed = f"{name}_{suffix}"
        used.add(renamed)
        headers.append(renamed)
        logger.warning("Duplicate header %r renamed to %r", name, renamed)
    return headers


def decode_csv(content: str, delimiter: str = ",") -> DecodedCSV:
    """
    Decode CSV text using its first line as the header row.

    Empty lines are skipped; a line of empty fields such as ",," is still a
    row. Header names are kept as written, except that a repeated name gets
    a "_1", "_2", ... suffix. A line with fewer fields than the header is
    padded with empty strings and a line with more fields is truncated; both
    are reported as errors so the caller can refuse the file.

    Args:
        content: CSV text
        delimiter: Field delimiter

    Returns:
        DecodedCSV with every row sharing the header's keys
    """
    rows: list[RawRow] = []
    errors: list[RowError] = []

    try:
        lines = list(csv.reader(StringIO(content), delimiter=delimiter))
    except csv.Error as e:
        return DecodedCSV(rows=[], errors=[RowError(row=0, message=str(e))])

    records = [line for line in lines if line and line != [""]]
    if not records:
        return DecodedCSV(rows=[], errors=[])

    header = _unique_headers(records[0])

    for number, record in enumerate(records[1:], start=1):
        if len(record) < len(header):
            errors.append(
                RowError(
                    row=number,
                    message=f"Too few fields: expected {len(header)} fields "
                    f"but parsed {len(record)}",
                )
            )
            record = record + [""] * (len(header) - len(record))
        elif len(record) > len(header):
            errors.append(
                RowError(
                    row=number,
                    message=f"Too many fields: expected {len(header)} fields "
                    f"but parsed {len(record)}",
                )
            )
            record = record[: len(header)]

        rows.append(dict(zip(header, record, strict=True)))

    logger.debug("Decoded %d rows with %d errors", len(rows), len(errors))
    return DecodedCSV(rows=rows, errors=errors)


def read_rows(filepath: Path) -> DecodedCSV:
    """
    Read and decode a CSV or Excel export.

    Args:
        filepath: Path to the file

    Returns:
        DecodedCSV for the file

    Raises:
        DecodeError: If the file cannot be read
    """
    try:
        content = read_file(filepath)
    except ValueError as e:
        raise DecodeError(str(e)) from e

    delimiter = "\t" if filepath.suffix.lower() == ".tsv" else ","
    return decode_csv(content, delimiter=delimiter)
