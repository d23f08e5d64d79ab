"""
Session Module for Attendance Pro.

The AttendanceSession is the single owner of the in-memory record set,
learning rules and pending clarifications. All mutations go through
its methods.

Author: ML Engineering Team
"""

from .controller import AttendanceSession, ProcessingOutcome

__all__ = ['AttendanceSession', 'ProcessingOutcome']
