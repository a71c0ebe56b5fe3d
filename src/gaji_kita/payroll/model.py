from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from ..core.enums import PaymentStatus


@dataclass(frozen=True)
class PayrollComponents:
    """Monthly pay breakdown for one employee, every amount in rupiah."""

    basic_salary: Decimal
    allowances: Decimal
    bpjs_kes_employee: Decimal
    bpjs_kes_company: Decimal
    bpjs_tk_jht_employee: Decimal
    bpjs_tk_jht_company: Decimal
    bpjs_tk_jp_employee: Decimal
    bpjs_tk_jp_company: Decimal
    bpjs_tk_jkk: Decimal
    bpjs_tk_jkm: Decimal
    pph21: Decimal
    net_salary: Decimal

    @property
    def gross(self) -> Decimal:
        return self.basic_salary + self.allowances

    @property
    def bpjs_employee_total(self) -> Decimal:
        return self.bpjs_kes_employee + self.bpjs_tk_jht_employee + self.bpjs_tk_jp_employee

    @property
    def bpjs_company_total(self) -> Decimal:
        return (
            self.bpjs_kes_company
            + self.bpjs_tk_jht_company
            + self.bpjs_tk_jp_company
            + self.bpjs_tk_jkk
            + self.bpjs_tk_jkm
        )

    @property
    def deductions(self) -> Decimal:
        return self.bpjs_employee_total + self.pph21


@dataclass(frozen=True)
class NewPayroll:
    employee_id: int
    employee_name: str
    period_start: date
    period_end: date
    components: PayrollComponents
    payment_status: PaymentStatus = PaymentStatus.PAID
    payment_date: Optional[date] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class PayrollRecord:
    payroll_id: int
    employee_id: int
    employee_name: str
    period_start: date
    period_end: date
    components: PayrollComponents
    payment_status: PaymentStatus
    payment_date: Optional[date] = None
    notes: Optional[str] = None
    department_name: Optional[str] = None
    npwp_account: Optional[str] = None
    bpjs_account: Optional[str] = None


@dataclass(frozen=True)
class PayrollPeriodSummary:
    period_start: date
    period_end: date
    label: str
    employee_count: int
    total_gross: Decimal
    total_pph21: Decimal
    total_bpjs: Decimal
    total_net: Decimal
    status: str
