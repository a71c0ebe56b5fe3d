from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence, Tuple

from .model import NewPayroll, PayrollRecord


class PayrollRepository(Protocol):
    def period_exists(self, period_start: date, period_end: date) -> bool:
        raise NotImplementedError

    def insert_many(self, records: Sequence[NewPayroll]) -> int:
        raise NotImplementedError

    def list_records(
        self, *, period_start: Optional[date] = None, period_end: Optional[date] = None
    ) -> Sequence[PayrollRecord]:
        """All payroll rows, or only those of one period, newest period first."""
        raise NotImplementedError

    def distinct_periods(self) -> Sequence[Tuple[date, date]]:
        raise NotImplementedError
