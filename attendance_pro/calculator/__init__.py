"""
Derived-Field Calculator Module for Attendance Pro.

Turns raw candidate records from the extraction gateway into complete
AttendanceRecord objects:
    - Default-filling of missing fields
    - Overtime amount and total payable computation
    - Batch-level source and confirmation flags

Author: ML Engineering Team
"""

from .calculator import DerivedFieldCalculator

__all__ = ['DerivedFieldCalculator']
