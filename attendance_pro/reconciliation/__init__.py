"""
Reconciliation Module for Attendance Pro.

Merges newly extracted records into the current record set by natural
key (date, labour name, site name):
    - Unseen keys are appended
    - Known keys with changed pay inputs are refreshed in place
    - Known keys with identical pay inputs are left untouched

Author: ML Engineering Team
"""

from .reconciler import RecordReconciler, MergeReport, merge

__all__ = ['RecordReconciler', 'MergeReport', 'merge']
