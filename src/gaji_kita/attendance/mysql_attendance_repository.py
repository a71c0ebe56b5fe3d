from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Sequence, Set

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import AbsenceRecord, AttendanceRecord, NewAttendance
from .repository import AttendanceRepository, EmployeeDay

_SELECT = """
    SELECT a.id, a.employee_id, a.`date`, a.check_in, a.check_out, a.status, a.notes,
           TRIM(CONCAT(e.first_name, ' ', COALESCE(e.last_name, ''))) AS employee_name
    FROM attendance a
    JOIN employees e ON e.id = a.employee_id
"""


def _status(value: Any) -> AttendanceStatus:
    try:
        return AttendanceStatus.parse(str(value or ""))
    except ValueError:
        # Rows written by other tools may carry labels we do not model.
        return AttendanceStatus.PRESENT


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["date"],
        check_in=r.get("check_in"),
        check_out=r.get("check_out"),
        status=_status(r.get("status")),
        notes=r.get("notes"),
        employee_name=r.get("employee_name"),
    )


def _pair_clause(pairs: Sequence[EmployeeDay]) -> tuple[str, tuple]:
    placeholders = ", ".join(["(%s, %s)"] * len(pairs))
    params: list[object] = []
    for employee_id, work_date in pairs:
        params.extend([int(employee_id), work_date])
    return placeholders, tuple(params)


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_for_pairs(self, pairs: Sequence[EmployeeDay]) -> Dict[EmployeeDay, AttendanceRecord]:
        if not pairs:
            return {}
        placeholders, params = _pair_clause(pairs)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE (a.employee_id, a.`date`) IN ({placeholders})", params)
            records = [_to_record(r) for r in fetchall(cur)]
        return {(r.employee_id, r.work_date): r for r in records}

    def insert(self, record: NewAttendance) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(employee_id, `date`, check_in, check_out, status, notes, api_key_id)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(record.employee_id),
                    record.work_date,
                    record.check_in,
                    record.check_out,
                    record.status.value,
                    record.notes,
                    record.api_key_id,
                ),
            )
            return int(cur.lastrowid)

    def update(self, attendance_id: int, record: NewAttendance) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance
                SET check_in=%s, check_out=%s, status=%s, notes=%s, api_key_id=COALESCE(%s, api_key_id)
                WHERE id=%s
                """,
                (
                    record.check_in,
                    record.check_out,
                    record.status.value,
                    record.notes,
                    record.api_key_id,
                    int(attendance_id),
                ),
            )

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE a.id=%s", (int(attendance_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE a.`date`=%s ORDER BY e.first_name, e.last_name", (work_date,))
            return [_to_record(r) for r in fetchall(cur)]

    def list_between(self, start: date, end: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_SELECT} WHERE a.`date` >= %s AND a.`date` < %s ORDER BY a.`date`, e.first_name",
                (start, end),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def absence_pairs(self, pairs: Sequence[EmployeeDay]) -> Set[EmployeeDay]:
        if not pairs:
            return set()
        placeholders, params = _pair_clause(pairs)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT employee_id, `date` FROM absences WHERE (employee_id, `date`) IN ({placeholders})",
                params,
            )
            return {(int(r["employee_id"]), r["date"]) for r in fetchall(cur)}

    def insert_absence(self, employee_id: int, work_date: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO absences(employee_id, `date`) VALUES(%s,%s)", (int(employee_id), work_date))
            return int(cur.lastrowid)

    def delete_absence(self, employee_id: int, work_date: date) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM absences WHERE employee_id=%s AND `date`=%s", (int(employee_id), work_date))
            return cur.rowcount > 0

    def list_absences_for_dates(self, dates: Sequence[date]) -> Sequence[AbsenceRecord]:
        if not dates:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT ab.id, ab.employee_id, ab.`date`,
                       TRIM(CONCAT(e.first_name, ' ', COALESCE(e.last_name, ''))) AS employee_name
                FROM absences ab
                JOIN employees e ON e.id = ab.employee_id
                WHERE ab.`date` IN ({in_clause(dates)})
                ORDER BY ab.id
                """,
                tuple(dates),
            )
            return [
                AbsenceRecord(
                    absence_id=int(r["id"]),
                    employee_id=int(r["employee_id"]),
                    work_date=r["date"],
                    employee_name=r.get("employee_name"),
                )
                for r in fetchall(cur)
            ]
