"""
CSV Exporter Module.

Writes the attendance sheet in the layout payroll staff paste into their
spreadsheets:

    Date,Labour Name,Site Name,Salary,Day,OT Hours,OT Amount,Total Pay
    2024-01-01,"Ravi","Site A",800,1,2,200.00,1000.00

Name and site are always quoted. The date is quoted only when it holds
a comma, quote or line break. OT Amount and Total Pay always carry two
decimals.

Author: ML Engineering Team
"""

from pathlib import Path
from typing import List, Optional, Sequence

from config import get_config
from attendance_pro.utils.logger import get_logger
from attendance_pro.utils.helpers import ensure_directory, format_number, today_iso
from attendance_pro.utils.exceptions import ExportError
from attendance_pro.models import AttendanceRecord

logger = get_logger(__name__)


class CsvExporter:
    """
    Exports attendance records to CSV.

    Attributes:
        output_dir: Directory for output files
        filename_pattern: Default filename, with a {date} placeholder

    Example:
        >>> exporter = CsvExporter()
        >>> text = exporter.to_csv_string(session.records)
        >>> path = exporter.export(session.records)
    """

    HEADERS = ['Date', 'Labour Name', 'Site Name', 'Salary', 'Day', 'OT Hours', 'OT Amount', 'Total Pay']

    def __init__(self) -> None:
        """Initialize the CSV exporter with configuration."""
        self.output_dir = Path(get_config("paths.output_dir", "outputs"))
        self.filename_pattern = get_config("output.csv.filename_pattern", "attendance_{date}.csv")

        logger.debug(f"CsvExporter initialized (output_dir: {self.output_dir})")

    def default_filename(self) -> str:
        return self.filename_pattern.format(date=today_iso())

    @staticmethod
    def _quote(value: str) -> str:
        return '"' + value.replace('"', '""') + '"'

    @classmethod
    def _escape(cls, value: str) -> str:
        if any(c in value for c in (',', '"', '\n', '\r')):
            return cls._quote(value)
        return value

    def format_row(self, record: AttendanceRecord) -> List[str]:
        """Render one record as CSV cells, in HEADERS order."""
        return [
            self._escape(record.date),
            self._quote(record.labour_name),
            self._quote(record.site_name),
            format_number(record.base_salary),
            format_number(record.day),
            format_number(record.ot_hours),
            f"{record.ot_amount:.2f}",
            f"{record.total_payable:.2f}",
        ]

    def to_csv_string(self, records: Sequence[AttendanceRecord]) -> str:
        """
        Render records as CSV text (header line included, no trailing newline).
        """
        lines = [','.join(self.HEADERS)]
        lines.extend(','.join(self.format_row(record)) for record in records)
        return '\n'.join(lines)

    def export(
        self,
        records: Sequence[AttendanceRecord],
        filename: Optional[str] = None,
        output_dir: Optional[str] = None
    ) -> str:
        """
        Write records to a CSV file.

        Args:
            records: Records to export, in display order.
            filename: Output filename. Defaults to attendance_<today>.csv.
            output_dir: Output directory. Defaults to paths.output_dir.

        Returns:
            Path to the created file.

        Raises:
            ExportError: If the file cannot be written.
        """
        out_dir = ensure_directory(output_dir or self.output_dir)
        filepath = out_dir / (filename or self.default_filename())

        try:
            filepath.write_text(self.to_csv_string(records), encoding='utf-8')
        except OSError as e:
            logger.error(f"CSV export failed: {e}")
            raise ExportError(str(filepath), str(e))

        logger.info(f"CSV file saved: {filepath} ({len(records)} records)")
        return str(filepath)
