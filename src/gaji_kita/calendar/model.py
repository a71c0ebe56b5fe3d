from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import CalendarEventType


@dataclass(frozen=True)
class NewCalendarEvent:
    title: str
    description: Optional[str]
    event_type: CalendarEventType
    start_time: datetime
    end_time: datetime
    is_synced: bool = False
    employee_id: Optional[int] = None
    attendance_id: Optional[int] = None
    earliest_check_in_attendance_id: Optional[int] = None
    latest_check_out_attendance_id: Optional[int] = None
    payroll_period_start: Optional[date] = None
    payroll_period_end: Optional[date] = None


@dataclass(frozen=True)
class CalendarEvent:
    event_id: int
    title: str
    description: Optional[str]
    event_type: CalendarEventType
    start_time: datetime
    end_time: datetime
    is_synced: bool = False
    employee_id: Optional[int] = None
    attendance_id: Optional[int] = None
    earliest_check_in_attendance_id: Optional[int] = None
    latest_check_out_attendance_id: Optional[int] = None
    payroll_period_start: Optional[date] = None
    payroll_period_end: Optional[date] = None
