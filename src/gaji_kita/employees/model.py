from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class EmployeeData:
    """Field values accepted when creating or updating an employee."""

    first_name: str
    hire_date: date
    basic_salary: Decimal
    last_name: Optional[str] = None
    nik: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    birth_date: Optional[date] = None
    bank_name: Optional[str] = None
    bank_account: Optional[str] = None
    npwp_account: Optional[str] = None
    bpjs_account: Optional[str] = None
    incentive: Optional[Decimal] = None
    transportation_fee: Optional[Decimal] = None
    department_id: Optional[int] = None
    position_id: Optional[int] = None


@dataclass(frozen=True)
class Employee:
    """Entitas karyawan.

    `department_name`, `position_name` and `position_base_salary` are filled by
    the repository join and are read-only here.
    """

    employee_id: int
    first_name: str
    last_name: Optional[str]
    hire_date: date
    nik: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    birth_date: Optional[date] = None
    bank_name: Optional[str] = None
    bank_account: Optional[str] = None
    npwp_account: Optional[str] = None
    bpjs_account: Optional[str] = None
    basic_salary: Optional[Decimal] = None
    incentive: Optional[Decimal] = None
    transportation_fee: Optional[Decimal] = None
    department_id: Optional[int] = None
    position_id: Optional[int] = None
    is_active: bool = True
    department_name: Optional[str] = None
    position_name: Optional[str] = None
    position_base_salary: Optional[Decimal] = None

    @property
    def full_name(self) -> str:
        return " ".join(p for p in (self.first_name, self.last_name or "") if p).strip()

    @property
    def effective_basic_salary(self) -> Decimal:
        """Employee's own salary, or the position's base salary when unset."""
        if self.basic_salary:
            return self.basic_salary
        return self.position_base_salary or Decimal("0")
