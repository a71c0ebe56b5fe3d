from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Position:
    position_id: int
    name: str
    department_id: Optional[int]
    base_salary: Decimal
    department_name: Optional[str] = None
