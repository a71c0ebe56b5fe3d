from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_decimal
from .model import Employee, EmployeeData
from .repository import EmployeeRepository

_SELECT = """
    SELECT e.id, e.nik, e.first_name, e.last_name, e.email, e.phone, e.birth_date, e.hire_date,
           e.bank_name, e.bank_account, e.npwp_account, e.bpjs_account,
           e.basic_salary, e.incentive, e.transportation_fee,
           e.department_id, e.position_id, e.is_active,
           d.name AS department_name, p.name AS position_name, p.base_salary AS position_base_salary
    FROM employees e
    LEFT JOIN departments d ON d.id = e.department_id
    LEFT JOIN positions p ON p.id = e.position_id
"""


def _to_employee(r: Dict[str, Any]) -> Employee:
    return Employee(
        employee_id=int(r["id"]),
        nik=r.get("nik"),
        first_name=r["first_name"],
        last_name=r.get("last_name"),
        email=r.get("email"),
        phone=r.get("phone"),
        birth_date=r.get("birth_date"),
        hire_date=r["hire_date"],
        bank_name=r.get("bank_name"),
        bank_account=r.get("bank_account"),
        npwp_account=r.get("npwp_account"),
        bpjs_account=r.get("bpjs_account"),
        basic_salary=to_decimal(r.get("basic_salary")),
        incentive=to_decimal(r.get("incentive")),
        transportation_fee=to_decimal(r.get("transportation_fee")),
        department_id=r.get("department_id"),
        position_id=r.get("position_id"),
        is_active=bool(r.get("is_active", True)),
        department_name=r.get("department_name"),
        position_name=r.get("position_name"),
        position_base_salary=to_decimal(r.get("position_base_salary")),
    )


def _params(data: EmployeeData) -> tuple:
    return (
        data.nik,
        data.first_name,
        data.last_name,
        data.email,
        data.phone,
        data.birth_date,
        data.hire_date,
        data.bank_name,
        data.bank_account,
        data.npwp_account,
        data.bpjs_account,
        data.basic_salary,
        data.incentive,
        data.transportation_fee,
        data.department_id,
        data.position_id,
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self, *, active_only: bool = False, search: Optional[str] = None) -> Sequence[Employee]:
        clauses: list[str] = []
        params: list[object] = []
        if active_only:
            clauses.append("e.is_active=1")
        if search:
            like = f"%{search.strip().lower()}%"
            clauses.append("(LOWER(e.first_name) LIKE %s OR LOWER(COALESCE(e.last_name, '')) LIKE %s OR LOWER(COALESCE(e.nik, '')) LIKE %s)")
            params.extend([like, like, like])
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} {where} ORDER BY e.first_name, e.last_name", tuple(params))
            return [_to_employee(r) for r in fetchall(cur)]

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE e.id=%s", (int(employee_id),))
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def get_by_nik(self, nik: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE e.nik=%s", (nik,))
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def create(self, data: EmployeeData, *, api_key_id: Optional[int] = None) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employees(
                    nik, first_name, last_name, email, phone, birth_date, hire_date,
                    bank_name, bank_account, npwp_account, bpjs_account,
                    basic_salary, incentive, transportation_fee, department_id, position_id, api_key_id
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                _params(data) + (api_key_id,),
            )
            return int(cur.lastrowid)

    def update(self, employee_id: int, data: EmployeeData) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE employees
                SET nik=%s, first_name=%s, last_name=%s, email=%s, phone=%s, birth_date=%s, hire_date=%s,
                    bank_name=%s, bank_account=%s, npwp_account=%s, bpjs_account=%s,
                    basic_salary=%s, incentive=%s, transportation_fee=%s, department_id=%s, position_id=%s
                WHERE id=%s
                """,
                _params(data) + (int(employee_id),),
            )
            return cur.rowcount > 0

    def set_active(self, employee_id: int, *, is_active: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE employees SET is_active=%s WHERE id=%s", (1 if is_active else 0, int(employee_id)))
            return cur.rowcount > 0

    def delete_by_id(self, employee_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employees WHERE id=%s", (int(employee_id),))
            return cur.rowcount > 0
