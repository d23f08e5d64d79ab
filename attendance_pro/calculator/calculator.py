"""
Derived-Field Calculator.

This module provides the DerivedFieldCalculator class, the only place
where overtime amount and total payable are computed.

Formulas:
    ot_amount     = (base_salary / hours_per_day) * ot_hours
    total_payable = base_salary * day + ot_amount

No rounding happens here; two-decimal formatting is an export concern.

Author: ML Engineering Team
"""

from dataclasses import replace
from typing import Any, Dict, List, Optional

from config import get_config
from attendance_pro.utils.logger import get_logger
from attendance_pro.utils.helpers import generate_id, now_millis, today_iso
from attendance_pro.models import AttendanceRecord
from attendance_pro.extraction.extraction_response import ExtractionResponse

logger = get_logger(__name__)

SOURCE_TEXT = 'text'
SOURCE_IMAGE = 'image'


class DerivedFieldCalculator:
    """
    Builds complete attendance records from partial candidates.

    A candidate field counts as missing when it is absent, None, an empty
    string, or not a number where a number is expected. day = 0 also
    counts as missing and becomes 1.

    Attributes:
        hours_per_day: Divisor turning a daily rate into an hourly rate
        unknown_labour: Name used when labourName is missing
        unknown_site: Name used when siteName is missing

    Example:
        >>> calculator = DerivedFieldCalculator()
        >>> record = calculator.calculate(
        ...     {"date": "2024-01-01", "labourName": "Ravi",
        ...      "siteName": "Site A", "baseSalary": 800, "otHours": 2}
        ... )
        >>> record.ot_amount, record.total_payable
        (200.0, 1000.0)
    """

    def __init__(self) -> None:
        """Initialize the calculator with configuration."""
        self.hours_per_day = get_config("calculator.hours_per_day", 8)
        self.unknown_labour = get_config("calculator.unknown_labour", "Unknown Labour")
        self.unknown_site = get_config("calculator.unknown_site", "Unknown Site")

        logger.debug(f"DerivedFieldCalculator initialized (hours_per_day={self.hours_per_day})")

    def ot_amount(self, base_salary: float, ot_hours: float) -> float:
        return (base_salary / self.hours_per_day) * ot_hours

    def total_payable(self, base_salary: float, day: float, ot_amount: float) -> float:
        return base_salary * day + ot_amount

    def calculate(
        self,
        candidate: Dict[str, Any],
        source: str = SOURCE_TEXT,
        is_confirmed: bool = True,
        record_id: Optional[str] = None,
        timestamp: Optional[int] = None,
        raw_content: Optional[str] = None
    ) -> AttendanceRecord:
        """
        Build one complete record from a partial candidate.

        Args:
            candidate: Raw candidate with camelCase keys, any of which
                      may be missing.
            source: 'text' or 'image'.
            is_confirmed: Confirmation flag for the record.
            record_id: Identifier to use. Generated if None.
            timestamp: Creation instant in epoch ms. Now if None.
            raw_content: Original message text to keep on the record.

        Returns:
            AttendanceRecord with derived fields filled in.
        """
        timestamp = timestamp if timestamp is not None else now_millis()

        base_salary = self._number(candidate.get('baseSalary'), 0.0)
        ot_hours = self._number(candidate.get('otHours'), 0.0)
        day = self._number(candidate.get('day'), 1.0)
        ot_amount = self.ot_amount(base_salary, ot_hours)

        return AttendanceRecord(
            id=record_id or f"{timestamp}-{generate_id(5)}",
            date=self._text(candidate.get('date')) or today_iso(),
            labour_name=self._text(candidate.get('labourName')) or self.unknown_labour,
            site_name=self._text(candidate.get('siteName')) or self.unknown_site,
            base_salary=base_salary,
            day=day,
            ot_hours=ot_hours,
            ot_amount=ot_amount,
            total_payable=self.total_payable(base_salary, day, ot_amount),
            source=source,
            timestamp=timestamp,
            is_confirmed=is_confirmed,
            raw_content=raw_content
        )

    def calculate_batch(
        self,
        response: ExtractionResponse,
        has_images: bool,
        raw_content: Optional[str] = None
    ) -> List[AttendanceRecord]:
        """
        Build records for every candidate in one gateway response.

        Source and confirmation are batch-level: every record is 'image'
        when the request carried at least one image, and every record is
        unconfirmed when the response carried any uncertainty.

        Args:
            response: Gateway response.
            has_images: Whether the originating request included images.
            raw_content: Original message text to keep on each record.

        Returns:
            Records in gateway response order.
        """
        source = SOURCE_IMAGE if has_images else SOURCE_TEXT
        is_confirmed = not response.has_uncertainties
        timestamp = now_millis()
        batch_tag = generate_id(5)

        records = [
            self.calculate(
                candidate,
                source=source,
                is_confirmed=is_confirmed,
                record_id=f"{timestamp}-{batch_tag}-{index}",
                timestamp=timestamp,
                raw_content=raw_content
            )
            for index, candidate in enumerate(response.records)
        ]

        logger.debug(
            f"Calculated {len(records)} records "
            f"(source={source}, confirmed={is_confirmed})"
        )
        return records

    def recalculate(self, record: AttendanceRecord) -> AttendanceRecord:
        """
        Return a copy of a record with its derived fields recomputed.

        Args:
            record: Record whose base_salary, day or ot_hours may have
                   changed.

        Returns:
            New AttendanceRecord with consistent ot_amount and total_payable.
        """
        ot_amount = self.ot_amount(record.base_salary, record.ot_hours)
        return replace(
            record,
            ot_amount=ot_amount,
            total_payable=self.total_payable(record.base_salary, record.day, ot_amount)
        )

    @staticmethod
    def _number(value: Any, default: float) -> float:
        """
        Coerce a candidate value to float, falling back to default.

        Falsy values (None, "", 0) and anything non-numeric give default.
        """
        if isinstance(value, bool) or not value:
            return default

        try:
            number = float(value)
        except (TypeError, ValueError):
            return default

        if number != number:  # NaN
            return default
        return number

    @staticmethod
    def _text(value: Any) -> Optional[str]:
        """Return the value as a string, or None when it is missing."""
        if value is None or value == "":
            return None
        return str(value)
