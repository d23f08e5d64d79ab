"""
Attendance Record Data Class.

This module defines the fully computed attendance record that the
session holds, merges and exports.

Author: ML Engineering Team
"""

from dataclasses import dataclass, field, replace
from typing import Dict, Any, Optional, Tuple

from attendance_pro.utils.helpers import now_millis

# (date, labour_name, site_name)
NaturalKey = Tuple[str, str, str]


@dataclass(frozen=True)
class AttendanceRecord:
    """
    One person's pay for one date at one site.

    ot_amount and total_payable are derived fields. They are filled in by
    DerivedFieldCalculator. Records are frozen; edits go through
    dataclasses.replace followed by DerivedFieldCalculator.recalculate.

    Attributes:
        id: Process-assigned unique identifier
        date: Attendance date (YYYY-MM-DD)
        labour_name: Worker name (natural key component)
        site_name: Site name (natural key component)
        base_salary: Full-day rate
        day: Attendance multiplier (1.0 full day, 0.5 half day)
        ot_hours: Overtime hours
        ot_amount: (base_salary / 8) * ot_hours
        total_payable: base_salary * day + ot_amount
        source: 'text' or 'image'
        timestamp: Creation instant in epoch milliseconds
        is_confirmed: False while a clarification for its batch is open
        raw_content: Original message text, when kept

    Example:
        >>> record = AttendanceRecord(
        ...     id="1704067200000-0",
        ...     date="2024-01-01",
        ...     labour_name="Ravi",
        ...     site_name="Site A",
        ...     base_salary=800,
        ...     ot_hours=2,
        ...     ot_amount=200,
        ...     total_payable=1000
        ... )
        >>> record.natural_key
        ('2024-01-01', 'Ravi', 'Site A')
    """
    id: str
    date: str
    labour_name: str
    site_name: str
    base_salary: float = 0.0
    day: float = 1.0
    ot_hours: float = 0.0
    ot_amount: float = 0.0
    total_payable: float = 0.0
    source: str = 'text'
    timestamp: int = field(default_factory=now_millis)
    is_confirmed: bool = True
    raw_content: Optional[str] = None

    @property
    def natural_key(self) -> NaturalKey:
        """Identity of the logical attendance entry."""
        return (self.date, self.labour_name, self.site_name)

    def differs_from(self, other: 'AttendanceRecord') -> bool:
        """
        Whether the pay inputs of two records differ.

        Only base_salary, ot_hours and day are compared, with strict
        inequality and no tolerance.
        """
        return (
            self.base_salary != other.base_salary
            or self.ot_hours != other.ot_hours
            or self.day != other.day
        )

    def with_id(self, record_id: str) -> 'AttendanceRecord':
        """Return a copy of this record carrying a different id."""
        return replace(self, id=record_id)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to the camelCase dictionary used by presentation consumers.

        Returns:
            Dictionary representation of the record.
        """
        result = {
            'id': self.id,
            'date': self.date,
            'labourName': self.labour_name,
            'siteName': self.site_name,
            'baseSalary': self.base_salary,
            'day': self.day,
            'otHours': self.ot_hours,
            'otAmount': self.ot_amount,
            'totalPayable': self.total_payable,
            'source': self.source,
            'timestamp': self.timestamp,
            'isConfirmed': self.is_confirmed,
        }
        if self.raw_content is not None:
            result['rawContent'] = self.raw_content
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AttendanceRecord':
        """
        Create an AttendanceRecord from a camelCase dictionary.

        Derived fields are taken as given; run the result through
        DerivedFieldCalculator.recalculate() if they may be stale.
        """
        return cls(
            id=data['id'],
            date=data['date'],
            labour_name=data['labourName'],
            site_name=data['siteName'],
            base_salary=data.get('baseSalary', 0.0),
            day=data.get('day', 1.0),
            ot_hours=data.get('otHours', 0.0),
            ot_amount=data.get('otAmount', 0.0),
            total_payable=data.get('totalPayable', 0.0),
            source=data.get('source', 'text'),
            timestamp=data.get('timestamp', now_millis()),
            is_confirmed=data.get('isConfirmed', True),
            raw_content=data.get('rawContent')
        )

    def __repr__(self) -> str:
        return (
            f"AttendanceRecord("
            f"id={self.id}, "
            f"key={self.natural_key}, "
            f"total={self.total_payable:.2f}, "
            f"confirmed={self.is_confirmed})"
        )
