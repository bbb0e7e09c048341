"""Parsing utilities for transaction exports."""

import re
from datetime import date, datetime
from pathlib import Path

# Leading decimal number, e.g. "12", "-3.5", ".75", "1e3"
_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

UNKNOWN_MERCHANT = "Unknown"

EXCEL_EXTENSIONS = [".xls", ".xlsx"]


def parse_amount(amount_str: str | None) -> float:
    """
    Parse the leading number of an amount cell.

    Parsing is deliberately naive: only the numeric prefix is read, so
    "12.50 INR" gives 12.5 while "$12.50" and "1,234.00" stop at the first
    non-numeric character ("$12.50" -> 0.0, "1,234.00" -> 1.0).

    Args:
        amount_str: Raw cell value

    Returns:
        Parsed float, or 0.0 when no number can be read
    """
    if not amount_str:
        return 0.0

    match = _LEADING_NUMBER.match(amount_str)
    if not match:
        return 0.0

    try:
        return float(match.group(1))
    except ValueError:
        return 0.0


def extract_merchant(description: str) -> str:
    """Return the first word of a description, or "Unknown" if it is blank."""
    words = description.split()
    return words[0] if words else UNKNOWN_MERCHANT


def parse_date(date_str: str) -> date | None:
    """
    Parse various date formats to date object.

    Only used for sorting; transactions keep their raw date string.

    Supported formats:
    - YYYY-MM-DD (2026-01-30), optionally followed by a time
    - DD/MM/YYYY (30/01/2026)
    - DD MMM YYYY (30 Jan 2026)
    - DD-MM-YYYY (30-01-2026)
    - DD MMMM YYYY (30 January 2026)
    - YYYY/MM/DD (2026/01/30)

    Args:
        date_str: Date string to parse

    Returns:
        date object if successful, None otherwise
    """
    date_str = date_str.strip().strip('"').strip()

    if not date_str:
        return None

    # Drop a trailing time component ("2026-01-30T10:00:00", "2026-01-30 10:00")
    iso_match = re.match(r"^(\d{4}-\d{2}-\d{2})[T ]", date_str)
    if iso_match:
        date_str = iso_match.group(1)

    formats = [
        "%Y-%m-%d",  # 2026-01-30
        "%d/%m/%Y",  # 30/01/2026
        "%d %b %Y",  # 30 Jan 2026
        "%d-%m-%Y",  # 30-01-2026
        "%d %B %Y",  # 30 January 2026
        "%Y/%m/%d",  # 2026/01/30
    ]

    for fmt in formats:
        try:
            return datetime.strptime(date_str, fmt).date()
        except ValueError:
            continue

    return None


def read_file(filepath: Path) -> str:
    """
    Read file content, handling both text and Excel files.

    Args:
        filepath: Path to the file

    Returns:
        File content as string (Excel files converted to CSV format)

    Raises:
        ValueError: If file cannot be read
    """
    if not filepath.exists():
        raise ValueError(f"File not found: {filepath}")

    if _is_excel(filepath):
        return _read_excel(filepath)
    return _read_text(filepath)


def _is_excel(filepath: Path) -> bool:
    """Check extension and magic bytes for an Excel workbook."""
    if filepath.suffix.lower() in EXCEL_EXTENSIONS:
        return True

    try:
        with open(filepath, "rb") as f:
            magic = f.read(4)
    except OSError as e:
        raise ValueError(f"Could not read file {filepath}: {e}") from e

    # OLE2 (.xls) and zip (.xlsx) containers
    return magic in (b"\xd0\xcf\x11\xe0", b"PK\x03\x04")


def _read_text(filepath: Path) -> str:
    """Read text file with encoding detection."""
    encodings = ["utf-8-sig", "utf-8", "latin-1", "cp1252"]

    for encoding in encodings:
        try:
            with open(filepath, encoding=encoding) as f:
                return f.read()
        except UnicodeDecodeError:
            continue
        except OSError as e:
            raise ValueError(f"Could not read file {filepath}: {e}") from e

    raise ValueError(f"Could not decode file {filepath} with any known encoding")


def _format_cell(value: str) -> str:
    """Quote a cell value for CSV output when needed."""
    if "," in value or '"' in value or "\n" in value:
        return '"' + value.replace('"', '""') + '"'
    return value


def _read_excel(filepath: Path) -> str:
    """Read the first sheet of an Excel file and convert it to CSV text."""
    try:
        import xlrd  # type: ignore[import-untyped]
    except ImportError as err:
        raise ValueError(
            "xlrd is required to read Excel files. Install with: pip install xlrd"
        ) from err

    try:
        wb = xlrd.open_workbook(str(filepath))
        sheet = wb.sheet_by_index(0)

        lines = []
        for row in range(sheet.nrows):
            row_data = []
            for col in range(sheet.ncols):
                cell = sheet.cell(row, col)
                if cell.ctype == xlrd.XL_CELL_DATE:
                    dt = xlrd.xldate_as_datetime(cell.value, wb.datemode)
                    row_data.append(dt.strftime("%Y-%m-%d"))
                elif cell.ctype == xlrd.XL_CELL_NUMBER and float(cell.value).is_integer():
                    row_data.append(str(int(cell.value)))
                else:
                    row_data.append(_format_cell(str(cell.value)))
            lines.append(",".join(row_data))

        return "\n".join(lines)

    except Exception as e:
        raise ValueError(f"Could not read Excel file {filepath}: {e}") from e
