from __future__ import annotations

from datetime import date
from typing import Dict, Optional, Protocol, Sequence, Set, Tuple

from .model import AbsenceRecord, AttendanceRecord, NewAttendance

EmployeeDay = Tuple[int, date]


class AttendanceRepository(Protocol):
    """Attendance and absence rows, keyed by (employee_id, date)."""

    def find_for_pairs(self, pairs: Sequence[EmployeeDay]) -> Dict[EmployeeDay, AttendanceRecord]:
        raise NotImplementedError

    def insert(self, record: NewAttendance) -> int:
        raise NotImplementedError

    def update(self, attendance_id: int, record: NewAttendance) -> None:
        raise NotImplementedError

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_between(self, start: date, end: date) -> Sequence[AttendanceRecord]:
        """Records with start <= date < end."""
        raise NotImplementedError

    def absence_pairs(self, pairs: Sequence[EmployeeDay]) -> Set[EmployeeDay]:
        raise NotImplementedError

    def insert_absence(self, employee_id: int, work_date: date) -> int:
        raise NotImplementedError

    def delete_absence(self, employee_id: int, work_date: date) -> bool:
        raise NotImplementedError

    def list_absences_for_dates(self, dates: Sequence[date]) -> Sequence[AbsenceRecord]:
        raise NotImplementedError
