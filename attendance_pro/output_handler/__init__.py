"""
Output Handler Module for Attendance Pro.

This module provides functionality for:
    - CSV export of the reviewed attendance sheet
    - Excel export with a knowledge-base sheet
    - Output formatting (two-decimal money columns)

Author: ML Engineering Team
"""

from .handler import OutputHandler
from .csv_exporter import CsvExporter
from .excel_exporter import ExcelExporter

__all__ = ['OutputHandler', 'CsvExporter', 'ExcelExporter']
