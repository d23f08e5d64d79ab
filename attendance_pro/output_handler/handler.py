"""
Main Output Handler Module.

This module provides the unified OutputHandler class that coordinates
exports of a session's attendance sheet.

Author: ML Engineering Team
"""

from typing import Dict, Optional

from attendance_pro.utils.logger import get_logger
from attendance_pro.session import AttendanceSession
from .csv_exporter import CsvExporter
from .excel_exporter import ExcelExporter

logger = get_logger(__name__)


class OutputHandler:
    """
    Unified output handler for a session's records.

    Attributes:
        csv_exporter: CsvExporter instance
        excel_exporter: ExcelExporter instance (created on first use)

    Example:
        >>> handler = OutputHandler()
        >>> handler.to_csv(session)
        >>> handler.save(session, excel=True)
    """

    def __init__(self) -> None:
        self.csv_exporter = CsvExporter()
        self._excel_exporter = None

        logger.debug("OutputHandler initialized")

    @property
    def excel_exporter(self) -> ExcelExporter:
        """Get or create the Excel exporter."""
        if self._excel_exporter is None:
            self._excel_exporter = ExcelExporter()
        return self._excel_exporter

    def to_csv(
        self,
        session: AttendanceSession,
        filename: Optional[str] = None,
        output_dir: Optional[str] = None
    ) -> str:
        """Export the session's records to CSV and return the file path."""
        return self.csv_exporter.export(session.records, filename, output_dir)

    def to_excel(
        self,
        session: AttendanceSession,
        filename: Optional[str] = None,
        output_dir: Optional[str] = None
    ) -> str:
        """Export records and learned rules to Excel and return the file path."""
        return self.excel_exporter.export(
            session.records,
            filename,
            output_dir,
            rules=session.rules
        )

    def save(
        self,
        session: AttendanceSession,
        csv: bool = True,
        excel: bool = False,
        output_dir: Optional[str] = None
    ) -> Dict[str, Optional[str]]:
        """
        Export to every requested format.

        A failure in one format is logged and does not stop the other.

        Returns:
            Dictionary with 'csv_path' and 'excel_path' (None when
            skipped or failed).
        """
        output_info = {'csv_path': None, 'excel_path': None}

        if csv:
            try:
                output_info['csv_path'] = self.to_csv(session, output_dir=output_dir)
            except Exception as e:
                logger.error(f"CSV export failed: {e}")

        if excel:
            try:
                output_info['excel_path'] = self.to_excel(session, output_dir=output_dir)
            except Exception as e:
                logger.error(f"Excel export failed: {e}")

        return output_info
