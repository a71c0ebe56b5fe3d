from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Dict, Optional, Sequence, Tuple

from ..core.enums import PaymentStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_decimal
from .model import NewPayroll, PayrollComponents, PayrollRecord
from .repository import PayrollRepository

_AMOUNT_COLUMNS = (
    "basic_salary",
    "allowances",
    "bpjs_kes_employee",
    "bpjs_kes_company",
    "bpjs_tk_jht_employee",
    "bpjs_tk_jht_company",
    "bpjs_tk_jp_employee",
    "bpjs_tk_jp_company",
    "bpjs_tk_jkk",
    "bpjs_tk_jkm",
    "pph21",
    "net_salary",
)


def _to_record(r: Dict[str, Any]) -> PayrollRecord:
    amounts = {col: to_decimal(r.get(col)) or Decimal("0") for col in _AMOUNT_COLUMNS}
    return PayrollRecord(
        payroll_id=int(r["id"]),
        employee_id=int(r["employee_id"]),
        employee_name=r.get("employee_name") or "",
        period_start=r["period_start"],
        period_end=r["period_end"],
        components=PayrollComponents(**amounts),
        payment_status=PaymentStatus(r.get("payment_status") or PaymentStatus.PENDING.value),
        payment_date=r.get("payment_date"),
        notes=r.get("notes"),
        department_name=r.get("department_name"),
        npwp_account=r.get("npwp_account"),
        bpjs_account=r.get("bpjs_account"),
    )


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def period_exists(self, period_start: date, period_end: date) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id FROM payroll WHERE period_start=%s AND period_end=%s LIMIT 1",
                (period_start, period_end),
            )
            return fetchone(cur) is not None

    def insert_many(self, records: Sequence[NewPayroll]) -> int:
        if not records:
            return 0
        columns = ", ".join(("employee_id", "period_start", "period_end") + _AMOUNT_COLUMNS)
        placeholders = ", ".join(["%s"] * (3 + len(_AMOUNT_COLUMNS) + 3))
        rows = [
            (p.employee_id, p.period_start, p.period_end)
            + tuple(getattr(p.components, col) for col in _AMOUNT_COLUMNS)
            + (p.payment_status.value, p.payment_date, p.notes)
            for p in records
        ]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                f"INSERT INTO payroll({columns}, payment_status, payment_date, notes) VALUES({placeholders})",
                rows,
            )
        return len(rows)

    def list_records(
        self, *, period_start: Optional[date] = None, period_end: Optional[date] = None
    ) -> Sequence[PayrollRecord]:
        where = ""
        params: tuple = ()
        if period_start is not None and period_end is not None:
            where = "WHERE p.period_start=%s AND p.period_end=%s"
            params = (period_start, period_end)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT p.*,
                       TRIM(CONCAT(e.first_name, ' ', COALESCE(e.last_name, ''))) AS employee_name,
                       e.npwp_account, e.bpjs_account, d.name AS department_name
                FROM payroll p
                JOIN employees e ON e.id = p.employee_id
                LEFT JOIN departments d ON d.id = e.department_id
                {where}
                ORDER BY p.period_start DESC, p.period_end DESC, e.first_name, e.last_name
                """,
                params,
            )
            return [_to_record(r) for r in fetchall(cur)]

    def distinct_periods(self) -> Sequence[Tuple[date, date]]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT DISTINCT period_start, period_end FROM payroll ORDER BY period_start, period_end"
            )
            return [(r["period_start"], r["period_end"]) for r in fetchall(cur)]
