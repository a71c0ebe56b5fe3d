from __future__ import annotations

import logging
from collections import OrderedDict
from contextlib import nullcontext
from datetime import date
from decimal import Decimal
from typing import Any, Callable, ContextManager, List, Optional, Sequence

from ..common.datetime_utils import format_date_id, format_period_label
from ..core.context import SessionContext
from ..core.enums import PaymentStatus, Role
from ..core.exceptions import NotFoundError, PayrollPeriodExistsError, ValidationError
from ..employees.repository import EmployeeRepository
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import NewPayroll, PayrollPeriodSummary, PayrollRecord
from .repository import PayrollRepository

logger = logging.getLogger(__name__)

STATUS_DONE = "Selesai"
STATUS_PENDING = "Menunggu Pembayaran"


class PayrollComputer:
    """Use case: process payroll for one period and the whole active roster.

    Unlike attendance import this is all-or-nothing: an already processed
    period or a single employee without a base salary rejects the batch
    before anything is written.
    """

    def __init__(
        self,
        payroll: PayrollRepository,
        employees: EmployeeRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
        transaction: Optional[Callable[[], ContextManager[Any]]] = None,
    ):
        self._payroll = payroll
        self._employees = employees
        self._calculator = calculator or StandardPayrollCalculator()
        self._transaction = transaction or nullcontext

    def process_period(
        self,
        ctx: SessionContext,
        *,
        period_start: date,
        period_end: date,
        payment_date: Optional[date] = None,
        notes: Optional[str] = None,
    ) -> List[NewPayroll]:
        ctx.require(Role.ADMIN)
        if period_end < period_start:
            raise ValidationError("Tanggal akhir periode tidak boleh sebelum tanggal mulai")

        label = format_period_label(period_start, period_end)
        if self._payroll.period_exists(period_start, period_end):
            raise PayrollPeriodExistsError(f"Penggajian untuk periode {label} sudah diproses")

        employees = self._employees.list_all(active_only=True)
        if not employees:
            raise ValidationError("Tidak ada karyawan aktif untuk diproses")

        missing = [e for e in employees if e.effective_basic_salary <= 0]
        if missing:
            raise ValidationError(f"Gaji pokok untuk {missing[0].full_name} belum diatur")

        paid_on = payment_date or date.today()
        entries = [
            NewPayroll(
                employee_id=e.employee_id,
                employee_name=e.full_name,
                period_start=period_start,
                period_end=period_end,
                components=self._calculator.compute(
                    basic_salary=e.effective_basic_salary,
                    incentive=e.incentive,
                    transportation_fee=e.transportation_fee,
                ),
                payment_status=PaymentStatus.PAID,
                payment_date=paid_on,
                notes=notes,
            )
            for e in employees
        ]

        with self._transaction():
            self._payroll.insert_many(entries)

        logger.info(
            "Payroll %s processed by %s: employees=%d net=%s",
            label,
            ctx.full_name,
            len(entries),
            sum((p.components.net_salary for p in entries), Decimal("0")),
        )
        return entries


class PayrollHistoryService:
    """Read side: processed periods and their rows."""

    def __init__(self, payroll: PayrollRepository):
        self._payroll = payroll

    def list_periods(self, ctx: SessionContext) -> List[PayrollPeriodSummary]:
        ctx.require(Role.ADMIN)
        grouped: "OrderedDict[tuple[date, date], list[PayrollRecord]]" = OrderedDict()
        for record in self._payroll.list_records():
            grouped.setdefault((record.period_start, record.period_end), []).append(record)

        out: List[PayrollPeriodSummary] = []
        for (start, end), records in grouped.items():
            zero = Decimal("0")
            out.append(
                PayrollPeriodSummary(
                    period_start=start,
                    period_end=end,
                    label=format_period_label(start, end),
                    employee_count=len(records),
                    total_gross=sum((r.components.gross for r in records), zero),
                    total_pph21=sum((r.components.pph21 for r in records), zero),
                    total_bpjs=sum(
                        (r.components.bpjs_employee_total + r.components.bpjs_company_total for r in records), zero
                    ),
                    total_net=sum((r.components.net_salary for r in records), zero),
                    status=STATUS_DONE if all(r.payment_status == PaymentStatus.PAID for r in records) else STATUS_PENDING,
                )
            )
        return out

    def period_details(self, ctx: SessionContext, *, period_start: date, period_end: date) -> Sequence[PayrollRecord]:
        ctx.require(Role.ADMIN)
        records = self._payroll.list_records(period_start=period_start, period_end=period_end)
        if not records:
            raise NotFoundError(
                f"Belum ada penggajian untuk periode {format_date_id(period_start)} - {format_date_id(period_end)}"
            )
        return records
