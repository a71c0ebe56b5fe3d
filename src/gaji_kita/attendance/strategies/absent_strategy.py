from __future__ import annotations

from datetime import date

from .base import AttendanceStrategy, PunchTimes


class AbsentStrategy(AttendanceStrategy):
    """Absent or on leave: no punches, plus an absence row."""

    records_absence = True

    def punch_times(self, *, work_date: date) -> PunchTimes:
        return PunchTimes(check_in=None, check_out=None)
