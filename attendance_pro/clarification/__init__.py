"""
Clarification Module for Attendance Pro.

Tracks questions raised by extraction and the learning rules created
when a person answers them. Rules are fed back into every later
extraction request.

Author: ML Engineering Team
"""

from .tracker import ClarificationTracker

__all__ = ['ClarificationTracker']
