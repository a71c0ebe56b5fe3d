from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import AttendanceStatus
from .strategies.absent_strategy import AbsentStrategy
from .strategies.base import AttendanceStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.present_strategy import PresentStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on the row status."""

    def for_status(self, status: AttendanceStatus) -> AttendanceStrategy:
        if status == AttendanceStatus.LATE:
            return LateStrategy()
        if status in (AttendanceStatus.ABSENT, AttendanceStatus.LEAVE):
            return AbsentStrategy()
        return PresentStrategy()
