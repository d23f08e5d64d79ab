"""
Utility Module for Attendance Pro.

This module provides common utilities used across all other modules:
    - Logging configuration
    - Custom exceptions
    - Common helpers
"""

from .logger import setup_logger, get_logger
from .helpers import ensure_directory, generate_id, now_millis, today_iso

__all__ = [
    'setup_logger',
    'get_logger',
    'ensure_directory',
    'generate_id',
    'now_millis',
    'today_iso'
]
