from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List

from ..attendance.repository import AttendanceRepository
from ..attendance.status import compute_status
from ..common.datetime_utils import MONTH_NAMES_ID, format_period_label, month_bounds
from ..core.context import SessionContext
from ..core.enums import AttendanceStatus, PaymentStatus, Role
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from ..payroll.repository import PayrollRepository

PAYMENT_LABELS = {PaymentStatus.PAID: "Dibayar", PaymentStatus.PENDING: "Menunggu"}


@dataclass(frozen=True)
class Report:
    """Tabular report: `rows` are keyed by the labels in `columns`."""

    key: str
    title: str
    columns: List[str]
    rows: List[Dict[str, Any]] = field(default_factory=list)


class ReportService:
    def __init__(
        self,
        payroll: PayrollRepository,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
    ):
        self._payroll = payroll
        self._attendance = attendance
        self._employees = employees

    def _period_records(self, period_start: date, period_end: date):
        records = self._payroll.list_records(period_start=period_start, period_end=period_end)
        if not records:
            raise NotFoundError("Belum ada data penggajian untuk periode ini")
        return records

    def payroll_report(self, ctx: SessionContext, *, period_start: date, period_end: date) -> Report:
        ctx.require(Role.ADMIN)
        columns = [
            "Nama Karyawan",
            "Departemen",
            "Gaji Pokok",
            "Tunjangan",
            "Potongan BPJS",
            "PPh21",
            "Gaji Bersih",
            "Status",
            "Tanggal Bayar",
        ]
        rows = [
            {
                "Nama Karyawan": r.employee_name,
                "Departemen": r.department_name or "-",
                "Gaji Pokok": r.components.basic_salary,
                "Tunjangan": r.components.allowances,
                "Potongan BPJS": r.components.bpjs_employee_total,
                "PPh21": r.components.pph21,
                "Gaji Bersih": r.components.net_salary,
                "Status": PAYMENT_LABELS.get(r.payment_status, r.payment_status.value),
                "Tanggal Bayar": r.payment_date.isoformat() if r.payment_date else "-",
            }
            for r in self._period_records(period_start, period_end)
        ]
        label = format_period_label(period_start, period_end)
        return Report(key="payroll", title=f"Laporan Penggajian {label}", columns=columns, rows=rows)

    def tax_report(self, ctx: SessionContext, *, period_start: date, period_end: date) -> Report:
        ctx.require(Role.ADMIN)
        columns = ["Nama Karyawan", "NPWP", "Penghasilan Bruto", "PPh21"]
        rows = [
            {
                "Nama Karyawan": r.employee_name,
                "NPWP": r.npwp_account or "-",
                "Penghasilan Bruto": r.components.gross,
                "PPh21": r.components.pph21,
            }
            for r in self._period_records(period_start, period_end)
        ]
        label = format_period_label(period_start, period_end)
        return Report(key="tax", title=f"Laporan PPh21 {label}", columns=columns, rows=rows)

    def bpjs_report(self, ctx: SessionContext, *, period_start: date, period_end: date) -> Report:
        ctx.require(Role.ADMIN)
        columns = [
            "Nama Karyawan",
            "No. BPJS",
            "Kesehatan (Karyawan)",
            "Kesehatan (Perusahaan)",
            "JHT (Karyawan)",
            "JHT (Perusahaan)",
            "JP (Karyawan)",
            "JP (Perusahaan)",
            "JKK",
            "JKM",
            "Total",
        ]
        rows = []
        for r in self._period_records(period_start, period_end):
            p = r.components
            rows.append(
                {
                    "Nama Karyawan": r.employee_name,
                    "No. BPJS": r.bpjs_account or "-",
                    "Kesehatan (Karyawan)": p.bpjs_kes_employee,
                    "Kesehatan (Perusahaan)": p.bpjs_kes_company,
                    "JHT (Karyawan)": p.bpjs_tk_jht_employee,
                    "JHT (Perusahaan)": p.bpjs_tk_jht_company,
                    "JP (Karyawan)": p.bpjs_tk_jp_employee,
                    "JP (Perusahaan)": p.bpjs_tk_jp_company,
                    "JKK": p.bpjs_tk_jkk,
                    "JKM": p.bpjs_tk_jkm,
                    "Total": p.bpjs_employee_total + p.bpjs_company_total,
                }
            )
        label = format_period_label(period_start, period_end)
        return Report(key="bpjs", title=f"Laporan BPJS {label}", columns=columns, rows=rows)

    def attendance_summary(self, ctx: SessionContext, *, year: int, month: int) -> Report:
        """Per-employee counts of each derived status for one month."""
        ctx.require(Role.ADMIN)
        if not 1 <= month <= 12:
            raise ValidationError("Bulan tidak valid")
        start, end = month_bounds(year, month)

        counts: Dict[int, Dict[AttendanceStatus, int]] = {}
        for record in self._attendance.list_between(start, end):
            per_employee = counts.setdefault(record.employee_id, {s: 0 for s in AttendanceStatus})
            per_employee[compute_status(record.check_in, record.status)] += 1

        columns = ["Nama Karyawan", "Departemen", "Hadir", "Terlambat", "Tidak Hadir", "Cuti", "Total"]
        rows = []
        for employee in self._employees.list_all(active_only=True):
            c = counts.get(employee.employee_id, {s: 0 for s in AttendanceStatus})
            rows.append(
                {
                    "Nama Karyawan": employee.full_name,
                    "Departemen": employee.department_name or "-",
                    "Hadir": c[AttendanceStatus.PRESENT],
                    "Terlambat": c[AttendanceStatus.LATE],
                    "Tidak Hadir": c[AttendanceStatus.ABSENT],
                    "Cuti": c[AttendanceStatus.LEAVE],
                    "Total": sum(c.values()),
                }
            )
        title = f"Rekap Kehadiran {MONTH_NAMES_ID[month - 1]} {year}"
        return Report(key="attendance", title=title, columns=columns, rows=rows)
