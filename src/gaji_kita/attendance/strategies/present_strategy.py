from __future__ import annotations

from datetime import date, datetime

from ...core.constants import WORK_END, WORK_START
from .base import AttendanceStrategy, PunchTimes


class PresentStrategy(AttendanceStrategy):
    """On time: a full working day."""

    def punch_times(self, *, work_date: date) -> PunchTimes:
        return PunchTimes(
            check_in=datetime.combine(work_date, WORK_START),
            check_out=datetime.combine(work_date, WORK_END),
        )
