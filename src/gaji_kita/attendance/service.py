from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, List, Mapping, Optional

from ..core.context import SessionContext
from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import ValidationError
from ..employees.repository import EmployeeRepository
from .reconciler import AttendanceReconciler
from .repository import AttendanceRepository
from .status import compute_status

NOT_RECORDED = "Belum Tercatat"


@dataclass(frozen=True)
class DailyAttendanceRow:
    employee_id: int
    employee_name: str
    department_name: Optional[str]
    attendance_id: Optional[int]
    check_in: Optional[datetime]
    check_out: Optional[datetime]
    status: Optional[AttendanceStatus]
    status_label: str
    notes: Optional[str] = None


@dataclass(frozen=True)
class DaySummary:
    present: int
    absent: int
    late: int
    leave: int
    total: int


@dataclass(frozen=True)
class DailyAttendance:
    work_date: date
    rows: List[DailyAttendanceRow]
    summary: DaySummary


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        reconciler: AttendanceReconciler,
    ):
        self._attendance = attendance
        self._employees = employees
        self._reconciler = reconciler

    def daily_view(self, ctx: SessionContext, work_date: date) -> DailyAttendance:
        """Every active employee with the status derived from their record, if any."""
        ctx.require(Role.ADMIN)
        records = {r.employee_id: r for r in self._attendance.list_for_date(work_date)}

        rows: List[DailyAttendanceRow] = []
        counts = {s: 0 for s in AttendanceStatus}
        for employee in self._employees.list_all(active_only=True):
            record = records.get(employee.employee_id)
            if record is None:
                rows.append(
                    DailyAttendanceRow(
                        employee_id=employee.employee_id,
                        employee_name=employee.full_name,
                        department_name=employee.department_name,
                        attendance_id=None,
                        check_in=None,
                        check_out=None,
                        status=None,
                        status_label=NOT_RECORDED,
                    )
                )
                continue

            status = compute_status(record.check_in, record.status)
            counts[status] += 1
            rows.append(
                DailyAttendanceRow(
                    employee_id=employee.employee_id,
                    employee_name=employee.full_name,
                    department_name=employee.department_name,
                    attendance_id=record.attendance_id,
                    check_in=record.check_in,
                    check_out=record.check_out,
                    status=status,
                    status_label=status.label,
                    notes=record.notes,
                )
            )

        summary = DaySummary(
            present=counts[AttendanceStatus.PRESENT],
            absent=counts[AttendanceStatus.ABSENT],
            late=counts[AttendanceStatus.LATE],
            leave=counts[AttendanceStatus.LEAVE],
            total=len(rows),
        )
        return DailyAttendance(work_date=work_date, rows=rows, summary=summary)

    def record_manual(self, ctx: SessionContext, payload: Mapping[str, Any]) -> int:
        """Record one attendance row entered by an operator.

        Goes through the reconciler; a rejected row is raised as a
        ValidationError carrying the row's message.
        """
        ctx.require(Role.ADMIN)
        row = {
            "employee_id": payload.get("employee_id"),
            "name": payload.get("name"),
            "date": payload.get("date"),
            "status": payload.get("status"),
            "check_in": payload.get("check_in"),
            "check_out": payload.get("check_out"),
            "notes": payload.get("notes"),
        }
        result = self._reconciler.reconcile(ctx, [row])
        if result.errors:
            raise ValidationError(result.errors[0])
        if result.mismatches:
            m = result.mismatches[0]
            raise ValidationError(f"{m.employee_name}: {m.reason}")
        return result.attendance_ids[0]
