"""
Attendance Session Controller.

This module provides the AttendanceSession class that orchestrates one
user's working session:

    text/images -> Gateway -> Calculator -> Reconciler -> record set
                                   |
                                   +-> uncertainties -> Clarifications
                                                            |
                              answer -> LearningRule -> next Gateway call

State lives only in memory. Extraction is the only slow step; a
non-blocking lock stops a second extraction from starting while one is
in flight, without blocking edits, deletes or resolutions.

Author: ML Engineering Team
"""

import threading
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Sequence

from attendance_pro.utils.logger import get_logger
from attendance_pro.utils.exceptions import ExtractionInProgressError, RecordUpdateError
from attendance_pro.models import AttendanceRecord, ClarificationRequest, LearningRule
from attendance_pro.extraction import ExtractionGateway, ExtractionResponse
from attendance_pro.calculator import DerivedFieldCalculator
from attendance_pro.reconciliation import RecordReconciler, MergeReport
from attendance_pro.clarification import ClarificationTracker

logger = get_logger(__name__)

# Fields a user may change from the review table
EDITABLE_FIELDS = [
    'date', 'labour_name', 'site_name', 'base_salary', 'day', 'ot_hours', 'is_confirmed'
]


@dataclass
class ProcessingOutcome:
    """
    Result of one process() call.

    Attributes:
        response: Gateway response (None when nothing was sent)
        records: Records calculated from this response
        merge: Reconciliation counts for this batch
        clarifications: Clarification requests opened by this batch
    """
    response: Optional[ExtractionResponse] = None
    records: List[AttendanceRecord] = field(default_factory=list)
    merge: MergeReport = field(default_factory=MergeReport)
    clarifications: List[ClarificationRequest] = field(default_factory=list)

    @property
    def skipped(self) -> bool:
        """True when there was no input and the gateway was not called."""
        return self.response is None


class AttendanceSession:
    """
    Controller owning records, learning rules and clarifications.

    Collections are returned as copies; change them only through the
    methods below so the derived-field and natural-key invariants hold.

    Attributes:
        gateway: Extraction gateway
        calculator: DerivedFieldCalculator instance
        reconciler: RecordReconciler instance
        tracker: ClarificationTracker instance

    Example:
        >>> session = AttendanceSession(gateway)
        >>> outcome = session.process("Ravi full day 800, 2h OT at Site A")
        >>> for question in session.clarifications:
        ...     session.resolve_clarification(question.id, "Always 800")
        >>> print(session.summary())
    """

    def __init__(
        self,
        gateway: ExtractionGateway,
        calculator: Optional[DerivedFieldCalculator] = None,
        reconciler: Optional[RecordReconciler] = None,
        tracker: Optional[ClarificationTracker] = None
    ) -> None:
        self.gateway = gateway
        self.calculator = calculator or DerivedFieldCalculator()
        self.reconciler = reconciler or RecordReconciler()
        self.tracker = tracker or ClarificationTracker()

        self._records: List[AttendanceRecord] = []
        self._busy = threading.Lock()

        logger.info(f"AttendanceSession initialized (gateway={getattr(gateway, 'name', type(gateway).__name__)})")

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def records(self) -> List[AttendanceRecord]:
        return list(self._records)

    @property
    def rules(self) -> List[LearningRule]:
        return self.tracker.rules

    @property
    def clarifications(self) -> List[ClarificationRequest]:
        return self.tracker.pending

    @property
    def is_processing(self) -> bool:
        return self._busy.locked()

    def get_record(self, record_id: str) -> Optional[AttendanceRecord]:
        for record in self._records:
            if record.id == record_id:
                return record
        return None

    # ------------------------------------------------------------------
    # Extraction
    # ------------------------------------------------------------------

    def process(self, text: str = "", images: Sequence[str] = ()) -> ProcessingOutcome:
        """
        Extract, calculate and merge records from pasted text and images.

        Steps:
        1. Skip entirely if there is no text and no image
        2. Send text, images and all learned rules to the gateway
        3. Calculate complete records from the candidates
        4. Merge them into the current record set
        5. Open a clarification request per uncertainty

        Args:
            text: Pasted chat text.
            images: Base64-encoded screenshots.

        Returns:
            ProcessingOutcome for this batch.

        Raises:
            ExtractionInProgressError: If another extraction is running.
        """
        images = list(images)
        if not (text or "").strip() and not images:
            logger.debug("Nothing to process: no text and no images")
            return ProcessingOutcome()

        if not self._busy.acquire(blocking=False):
            logger.warning("Extraction requested while another one is in flight")
            raise ExtractionInProgressError()

        try:
            response = self._extract(text, images)

            new_records = self.calculator.calculate_batch(
                response,
                has_images=bool(images),
                raw_content=text or None
            )
            report = self.merge_records(new_records)

            opened = self.tracker.open_requests(
                response.uncertainties,
                context={'text': text, 'images': images}
            )

            return ProcessingOutcome(
                response=response,
                records=new_records,
                merge=report,
                clarifications=opened
            )
        finally:
            self._busy.release()

    def _extract(self, text: str, images: List[str]) -> ExtractionResponse:
        """
        Call the gateway and turn any failure into the fallback response.
        """
        rules = self.tracker.rules_for_prompt()
        try:
            return self.gateway.extract(text, images, rules)
        except Exception as e:
            logger.error(f"Extraction gateway failed: {e}")
            return ExtractionResponse.fallback()

    def merge_records(self, new_records: Sequence[AttendanceRecord]) -> MergeReport:
        """
        Merge calculated records into the current record set.

        Args:
            new_records: Records from the calculator.

        Returns:
            MergeReport for the batch.
        """
        report = self.reconciler.merge(self._records, new_records)
        self._records = report.records
        return report

    # ------------------------------------------------------------------
    # Clarifications and rules
    # ------------------------------------------------------------------

    def resolve_clarification(self, request_id: str, answer: str) -> Optional[LearningRule]:
        """
        Answer a pending clarification.

        Creates one learning rule and then marks every record currently
        held as confirmed, not only those from the batch that raised the
        question. An unknown id is a silent no-op.

        Args:
            request_id: Id of a pending clarification.
            answer: Human explanation.

        Returns:
            The new LearningRule, or None for an unknown id.
        """
        rule = self.tracker.resolve(request_id, answer)
        if rule is None:
            return None

        self._records = [replace(record, is_confirmed=True) for record in self._records]
        logger.info(f"Confirmed all {len(self._records)} records after clarification")
        return rule

    def remove_rule(self, rule_id: str) -> bool:
        """Delete a learned rule by id. Unknown ids are ignored."""
        return self.tracker.remove_rule(rule_id)

    # ------------------------------------------------------------------
    # Direct edits
    # ------------------------------------------------------------------

    def delete_record(self, record_id: str) -> bool:
        """
        Remove a record by id.

        Returns:
            True if a record was removed, False if the id was unknown.
        """
        remaining = [record for record in self._records if record.id != record_id]
        removed = len(remaining) != len(self._records)
        self._records = remaining

        if removed:
            logger.info(f"Deleted record {record_id}")
        else:
            logger.debug(f"Ignoring delete of unknown record: {record_id}")
        return removed

    def update_record(self, record_id: str, **changes: Any) -> Optional[AttendanceRecord]:
        """
        Apply a user edit to a record and recompute its derived fields.

        Args:
            record_id: Id of the record to edit.
            **changes: New values for any of EDITABLE_FIELDS.

        Returns:
            The updated record, or None if the id was unknown.

        Raises:
            RecordUpdateError: If a change names a field outside
                EDITABLE_FIELDS.
        """
        for name in changes:
            if name not in EDITABLE_FIELDS:
                raise RecordUpdateError(name, EDITABLE_FIELDS)

        for position, record in enumerate(self._records):
            if record.id == record_id:
                updated = self.calculator.recalculate(replace(record, **changes))
                self._records[position] = updated
                logger.info(f"Updated record {record_id}: {sorted(changes)}")
                return updated

        logger.debug(f"Ignoring update of unknown record: {record_id}")
        return None

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    def summary(self) -> Dict[str, Any]:
        """
        Get counts and totals for the current session.

        Returns:
            Dictionary with record, rule and clarification statistics.
        """
        confirmed = sum(1 for record in self._records if record.is_confirmed)
        return {
            'records': len(self._records),
            'confirmed': confirmed,
            'needs_review': len(self._records) - confirmed,
            'pending_clarifications': self.tracker.pending_count,
            'rules': len(self.tracker.rules),
            'total_payable': sum(record.total_payable for record in self._records),
            'is_processing': self.is_processing
        }
