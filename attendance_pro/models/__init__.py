"""
Domain Model Module for Attendance Pro.

Defines the three entity types the session owns:
    - AttendanceRecord: one person's pay for one date at one site
    - LearningRule: a durable interpretation hint for the extractor
    - ClarificationRequest: an open question raised by an extraction
"""

from .attendance_record import AttendanceRecord, NaturalKey
from .learning import LearningRule, ClarificationRequest

__all__ = ['AttendanceRecord', 'NaturalKey', 'LearningRule', 'ClarificationRequest']
