from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional

from ..model import PayrollComponents


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def compute(
        self,
        *,
        basic_salary: Decimal,
        incentive: Optional[Decimal] = None,
        transportation_fee: Optional[Decimal] = None,
    ) -> PayrollComponents:
        raise NotImplementedError
