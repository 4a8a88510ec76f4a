"""
Order CSV Exporter

Renders export records in the booking spreadsheet layout used by the
course organisers.
"""

import logging
from pathlib import Path
from typing import Iterable, List

from ..common.csv_utils import rows_to_csv, write_csv
from ..models import ExportRecord

logger = logging.getLogger(__name__)

# (CSV header, ExportRecord attribute)
EXPORT_COLUMNS = [
    ('Order Number', 'orderNumber'),
    ('Order Date', 'orderDate'),
    ('Customer Name', 'customerName'),
    ('Customer Email', 'customerEmail'),
    ('Course Name', 'courseName'),
    ("Child's Name", 'childName'),
    ("Child's Age", 'childAge'),
    ("Child's Date of Birth", 'childDOB'),
    ('Medical Conditions', 'medicalConditions'),
    ('Contact Telephone', 'contactPhone'),
    ('Contact Email', 'contactEmail'),
]

EXPORT_FIELDNAMES = [header for header, _ in EXPORT_COLUMNS]


def export_filename(start_date: str, end_date: str) -> str:
    """Default download filename for a date range (YYYY-MM-DD strings)."""
    return f"rcfc-courses-{start_date}-to-{end_date}.csv"


class OrderCSVExporter:
    """
    Exports ExportRecords to CSV.

    Usage:
        exporter = OrderCSVExporter()
        text = exporter.render(records)
        exporter.export(records, "output/bookings.csv")
    """

    def __init__(self):
        self.fieldnames = EXPORT_FIELDNAMES

    def record_to_row(self, record: ExportRecord) -> List[str]:
        return [str(getattr(record, attr) or '') for _, attr in EXPORT_COLUMNS]

    def render(self, records: Iterable[ExportRecord]) -> str:
        """Render records as CSV text, header first."""
        return rows_to_csv(self.fieldnames, [self.record_to_row(r) for r in records])

    def export(self, records: Iterable[ExportRecord], output_path: str | Path) -> int:
        """
        Write records to a CSV file.

        Args:
            records: Records to write
            output_path: Output file path (parent dirs are created)

        Returns:
            Number of records written
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        rows = [self.record_to_row(r) for r in records]
        count = write_csv(output_path, self.fieldnames, rows)
        logger.info("Exported %d bookings to %s", count, output_path)
        return count
