from __future__ import annotations

from decimal import Decimal
from typing import Optional, Protocol, Sequence

from .position_model import Position


class PositionRepository(Protocol):
    def list_all(self, *, department_id: Optional[int] = None) -> Sequence[Position]:
        raise NotImplementedError

    def get_by_id(self, position_id: int) -> Optional[Position]:
        raise NotImplementedError

    def create(self, *, name: str, department_id: Optional[int], base_salary: Decimal) -> int:
        raise NotImplementedError

    def update(self, position_id: int, *, name: str, department_id: Optional[int], base_salary: Decimal) -> bool:
        raise NotImplementedError

    def delete_by_id(self, position_id: int) -> bool:
        raise NotImplementedError
