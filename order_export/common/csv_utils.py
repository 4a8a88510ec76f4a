"""
CSV Utilities

Common functions for writing CSV output with consistent quoting.
"""

import csv
import io
from pathlib import Path
from typing import List, Sequence


def rows_to_csv(header: Sequence[str], rows: List[Sequence[str]]) -> str:
    """
    Render a header and rows as CSV text.

    Data cells are always quoted; header cells only when needed. Lines
    are joined with '\\n' and there is no trailing newline, matching the
    spreadsheet download the organisers already import.

    Args:
        header: Column names
        rows: Row values, in header order

    Returns:
        CSV text using '\\n' line endings
    """
    buf = io.StringIO()
    csv.writer(buf, lineterminator='\n').writerow(header)
    csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator='\n').writerows(rows)
    return buf.getvalue().rstrip('\n')


def write_csv(
    file_path: str | Path,
    header: Sequence[str],
    rows: List[Sequence[str]],
    encoding: str = 'utf-8'
) -> int:
    """
    Write rows to CSV file.

    Args:
        file_path: Path to output CSV file
        header: Column names
        rows: Row values, in header order
        encoding: File encoding (default: utf-8)

    Returns:
        Number of rows written
    """
    with open(file_path, 'w', encoding=encoding, newline='') as f:
        f.write(rows_to_csv(header, rows))

    return len(rows)
