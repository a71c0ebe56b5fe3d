from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class PunchTimes:
    check_in: Optional[datetime]
    check_out: Optional[datetime]


class AttendanceStrategy(ABC):
    """Strategy Pattern: how a status-only row becomes punch times."""

    records_absence: bool = False

    @abstractmethod
    def punch_times(self, *, work_date: date) -> PunchTimes:
        raise NotImplementedError
