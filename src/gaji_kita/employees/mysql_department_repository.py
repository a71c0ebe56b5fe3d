from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .department_model import Department
from .department_repository import DepartmentRepository


class MySQLDepartmentRepository(DepartmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Department]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT d.id, d.name, d.description, COUNT(e.id) AS employee_count
                FROM departments d
                LEFT JOIN employees e ON e.department_id = d.id
                GROUP BY d.id, d.name, d.description
                ORDER BY d.name
                """
            )
            return [
                Department(
                    department_id=int(r["id"]),
                    name=r["name"],
                    description=r.get("description"),
                    employee_count=int(r.get("employee_count") or 0),
                )
                for r in fetchall(cur)
            ]

    def get_by_id(self, department_id: int) -> Optional[Department]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, description FROM departments WHERE id=%s", (int(department_id),))
            r = fetchone(cur)
            if not r:
                return None
            return Department(department_id=int(r["id"]), name=r["name"], description=r.get("description"))

    def get_by_name(self, name: str) -> Optional[Department]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, description FROM departments WHERE name=%s", (name,))
            r = fetchone(cur)
            if not r:
                return None
            return Department(department_id=int(r["id"]), name=r["name"], description=r.get("description"))

    def create(self, *, name: str, description: Optional[str]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO departments(name, description) VALUES(%s,%s)", (name, description))
            return int(cur.lastrowid)

    def update(self, department_id: int, *, name: str, description: Optional[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE departments SET name=%s, description=%s WHERE id=%s",
                (name, description, int(department_id)),
            )
            return cur.rowcount > 0

    def delete_by_id(self, department_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM departments WHERE id=%s", (int(department_id),))
            return cur.rowcount > 0
