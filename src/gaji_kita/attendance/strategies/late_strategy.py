from __future__ import annotations

from datetime import date, datetime

from ...core.constants import LATE_CHECK_IN, WORK_END
from .base import AttendanceStrategy, PunchTimes


class LateStrategy(AttendanceStrategy):
    """Late check-in."""

    def punch_times(self, *, work_date: date) -> PunchTimes:
        return PunchTimes(
            check_in=datetime.combine(work_date, LATE_CHECK_IN),
            check_out=datetime.combine(work_date, WORK_END),
        )
