"""
Record Reconciler.

Re-pasting the same chat messages, or a corrected version of them, must
not accumulate duplicate rows. Each new record is matched to the current
set by its natural key and then appended, refreshed in place, or dropped
as a no-op.

Author: ML Engineering Team
"""

from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from attendance_pro.utils.logger import get_logger
from attendance_pro.models import AttendanceRecord, NaturalKey

logger = get_logger(__name__)


@dataclass
class MergeReport:
    """
    Outcome of one merge.

    Attributes:
        records: The merged, ordered record set
        added: Number of records appended under new keys
        updated: Number of existing records refreshed in place
        unchanged: Number of new records matching an existing one exactly
    """
    records: List[AttendanceRecord] = field(default_factory=list)
    added: int = 0
    updated: int = 0
    unchanged: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {'added': self.added, 'updated': self.updated, 'unchanged': self.unchanged}


class RecordReconciler:
    """
    Merges a batch of new records into an existing record set.

    Algorithm:
        1. Index the existing set by natural key. If a key already occurs
           more than once, the last occurrence wins.
        2. For each new record, in order:
           - key not indexed: append the new record as is
           - key indexed and base_salary, ot_hours or day differ
             (strict inequality): put the new record at the existing
             record's position, keeping the existing id
           - key indexed and nothing differs: leave the existing record
             alone, including its timestamp and confirmation state
        3. Return the merged list; the inputs are not modified.

    The index is built once from the pre-merge set, so records under a
    new key are never matched against each other. A key repeated in the
    batch is compared with whatever the batch already wrote at that
    position, which keeps a re-merge of the same batch a no-op.

    Example:
        >>> reconciler = RecordReconciler()
        >>> report = reconciler.merge(existing, new)
        >>> print(report.added, report.updated, report.unchanged)
    """

    def merge(
        self,
        existing: Sequence[AttendanceRecord],
        new: Sequence[AttendanceRecord]
    ) -> MergeReport:
        """
        Merge new records into existing ones.

        Args:
            existing: Current record set, in display order.
            new: Freshly calculated records, in gateway order.

        Returns:
            MergeReport with the merged records and counts.
        """
        merged = list(existing)
        report = MergeReport(records=merged)

        if not new:
            return report

        positions: Dict[NaturalKey, int] = {}
        for position, record in enumerate(existing):
            positions[record.natural_key] = position

        for record in new:
            position = positions.get(record.natural_key)

            if position is None:
                merged.append(record)
                report.added += 1
                continue

            current = merged[position]
            if record.differs_from(current):
                merged[position] = record.with_id(current.id)
                report.updated += 1
                logger.debug(f"Refreshed record {current.id} for {record.natural_key}")
            else:
                report.unchanged += 1

        logger.info(
            f"Merge complete: {report.added} added, "
            f"{report.updated} updated, {report.unchanged} unchanged"
        )
        return report


def merge(
    existing: Sequence[AttendanceRecord],
    new: Sequence[AttendanceRecord]
) -> List[AttendanceRecord]:
    """
    Convenience function returning only the merged record list.

    Args:
        existing: Current record set.
        new: Freshly calculated records.

    Returns:
        Merged, ordered record list.
    """
    return RecordReconciler().merge(existing, new).records
