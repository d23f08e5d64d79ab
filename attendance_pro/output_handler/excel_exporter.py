"""
Excel Exporter Module.

This module provides Excel file generation for the attendance sheet.
Uses openpyxl for modern Excel format support.

Features:
    - Formatted headers
    - Two-decimal money columns
    - Review status column
    - Optional knowledge-base sheet with learned rules

Author: ML Engineering Team
"""

from pathlib import Path
from typing import List, Optional, Sequence

import openpyxl
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from config import get_config
from attendance_pro.utils.logger import get_logger
from attendance_pro.utils.helpers import ensure_directory, today_iso
from attendance_pro.utils.exceptions import ExportError
from attendance_pro.models import AttendanceRecord, LearningRule

logger = get_logger(__name__)


class ExcelExporter:
    """
    Exports attendance records to Excel format.

    Attributes:
        output_dir: Directory for output files
        sheet_name: Title of the attendance sheet
        include_rules: Whether to add the knowledge-base sheet

    Example:
        >>> exporter = ExcelExporter()
        >>> filepath = exporter.export(session.records, rules=session.rules)
        >>> print(f"Saved to: {filepath}")
    """

    # (header, attribute, number format)
    COLUMNS = [
        ('Date', 'date', None),
        ('Labour Name', 'labour_name', None),
        ('Site Name', 'site_name', None),
        ('Salary', 'base_salary', None),
        ('Day', 'day', None),
        ('OT Hours', 'ot_hours', None),
        ('OT Amount', 'ot_amount', '0.00'),
        ('Total Pay', 'total_payable', '0.00'),
    ]

    RULE_COLUMNS = [
        ('Pattern', 'pattern'),
        ('Interpretation', 'explanation'),
    ]

    def __init__(self) -> None:
        """Initialize the Excel exporter with configuration."""
        self.output_dir = Path(get_config("paths.output_dir", "outputs"))
        self.sheet_name = get_config("output.excel.sheet_name", "Attendance Sheet")
        self.include_rules = get_config("output.excel.include_rules", True)
        self.filename_pattern = get_config("output.excel.filename_pattern", "attendance_{date}.xlsx")

        logger.debug(f"ExcelExporter initialized (output_dir: {self.output_dir})")

    def default_filename(self) -> str:
        return self.filename_pattern.format(date=today_iso())

    def export(
        self,
        records: Sequence[AttendanceRecord],
        filename: Optional[str] = None,
        output_dir: Optional[str] = None,
        rules: Optional[Sequence[LearningRule]] = None
    ) -> str:
        """
        Export attendance records to an Excel file.

        Args:
            records: Records to export, in display order.
            filename: Output filename. If None, attendance_<today>.xlsx.
            output_dir: Output directory. If None, uses configured dir.
            rules: Learned rules for the knowledge-base sheet.

        Returns:
            Path to the created Excel file.

        Raises:
            ExportError: If export fails.
        """
        out_dir = ensure_directory(output_dir or self.output_dir)
        filepath = out_dir / (filename or self.default_filename())

        try:
            workbook = openpyxl.Workbook()
            self._create_data_sheet(workbook, list(records))

            if self.include_rules and rules:
                self._create_rules_sheet(workbook, list(rules))

            workbook.save(filepath)

        except Exception as e:
            logger.error(f"Excel export failed: {e}")
            raise ExportError(str(filepath), str(e))

        logger.info(f"Excel file saved: {filepath} ({len(records)} records)")
        return str(filepath)

    @staticmethod
    def _style_header(cell, fill_color: str) -> None:
        thin = Side(style='thin')
        cell.font = Font(bold=True, color="FFFFFF")
        cell.fill = PatternFill(start_color=fill_color, end_color=fill_color, fill_type="solid")
        cell.alignment = Alignment(horizontal="center", vertical="center")
        cell.border = Border(left=thin, right=thin, top=thin, bottom=thin)

    def _create_data_sheet(self, workbook, records: List[AttendanceRecord]) -> None:
        """
        Create the attendance sheet: one row per record plus a status column.
        """
        sheet = workbook.active
        sheet.title = self.sheet_name

        headers = [header for header, _, _ in self.COLUMNS] + ['Status']
        for col, header in enumerate(headers, 1):
            self._style_header(sheet.cell(row=1, column=col, value=header), "4472C4")

        for row_num, record in enumerate(records, 2):
            for col, (_, attribute, number_format) in enumerate(self.COLUMNS, 1):
                cell = sheet.cell(row=row_num, column=col, value=getattr(record, attribute))
                if number_format:
                    cell.number_format = number_format

            status = 'Confirmed' if record.is_confirmed else 'Review Needed'
            sheet.cell(row=row_num, column=len(headers), value=status)

        for col, header in enumerate(headers, 1):
            max_length = len(header)
            for row in range(2, len(records) + 2):
                value = sheet.cell(row=row, column=col).value
                if value is not None:
                    max_length = max(max_length, len(str(value)))
            sheet.column_dimensions[get_column_letter(col)].width = min(max_length + 2, 50)

        sheet.freeze_panes = 'A2'

    def _create_rules_sheet(self, workbook, rules: List[LearningRule]) -> None:
        """Create the knowledge-base sheet listing learned rules."""
        sheet = workbook.create_sheet(title="Knowledge Base")

        for col, (header, _) in enumerate(self.RULE_COLUMNS, 1):
            self._style_header(sheet.cell(row=1, column=col, value=header), "548235")

        for row_num, rule in enumerate(rules, 2):
            for col, (_, attribute) in enumerate(self.RULE_COLUMNS, 1):
                sheet.cell(row=row_num, column=col, value=getattr(rule, attribute))

        for col in range(1, len(self.RULE_COLUMNS) + 1):
            sheet.column_dimensions[get_column_letter(col)].width = 50
