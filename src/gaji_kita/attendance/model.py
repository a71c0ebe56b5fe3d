from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    attendance_id: int
    employee_id: int
    work_date: date
    check_in: Optional[datetime]
    check_out: Optional[datetime]
    status: AttendanceStatus
    notes: Optional[str] = None
    employee_name: Optional[str] = None


@dataclass(frozen=True)
class NewAttendance:
    """Attendance row ready to be written (insert or in-place update)."""

    employee_id: int
    work_date: date
    check_in: Optional[datetime]
    check_out: Optional[datetime]
    status: AttendanceStatus
    notes: Optional[str] = None
    api_key_id: Optional[int] = None


@dataclass(frozen=True)
class AbsenceRecord:
    absence_id: int
    employee_id: int
    work_date: date
    employee_name: Optional[str] = None


@dataclass(frozen=True)
class Mismatch:
    employee_name: str
    reason: str


@dataclass
class ImportStatus:
    """Outcome of one reconciliation batch.

    Partial success is normal: rejected rows land in `errors` (malformed
    input) or `mismatches` (valid input that cannot be applied).
    """

    timestamp: datetime
    total_rows: int
    success_count: int = 0
    updated_count: int = 0
    errors: List[str] = field(default_factory=list)
    mismatches: List[Mismatch] = field(default_factory=list)
    attendance_ids: List[int] = field(default_factory=list)
    calendar_event_count: int = 0
