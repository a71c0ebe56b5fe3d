from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_decimal
from .position_model import Position
from .position_repository import PositionRepository


def _to_position(r: Dict[str, Any]) -> Position:
    return Position(
        position_id=int(r["id"]),
        name=r["name"],
        department_id=r.get("department_id"),
        base_salary=to_decimal(r.get("base_salary")) or Decimal("0"),
        department_name=r.get("department_name"),
    )


class MySQLPositionRepository(PositionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self, *, department_id: Optional[int] = None) -> Sequence[Position]:
        where = "WHERE p.department_id=%s" if department_id is not None else ""
        params = (int(department_id),) if department_id is not None else ()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT p.id, p.name, p.department_id, p.base_salary, d.name AS department_name
                FROM positions p
                LEFT JOIN departments d ON d.id = p.department_id
                {where}
                ORDER BY p.name
                """,
                params,
            )
            return [_to_position(r) for r in fetchall(cur)]

    def get_by_id(self, position_id: int) -> Optional[Position]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT p.id, p.name, p.department_id, p.base_salary, d.name AS department_name
                FROM positions p
                LEFT JOIN departments d ON d.id = p.department_id
                WHERE p.id=%s
                """,
                (int(position_id),),
            )
            r = fetchone(cur)
            return _to_position(r) if r else None

    def create(self, *, name: str, department_id: Optional[int], base_salary: Decimal) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO positions(name, department_id, base_salary) VALUES(%s,%s,%s)",
                (name, department_id, base_salary),
            )
            return int(cur.lastrowid)

    def update(self, position_id: int, *, name: str, department_id: Optional[int], base_salary: Decimal) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE positions SET name=%s, department_id=%s, base_salary=%s WHERE id=%s",
                (name, department_id, base_salary, int(position_id)),
            )
            return cur.rowcount > 0

    def delete_by_id(self, position_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM positions WHERE id=%s", (int(position_id),))
            return cur.rowcount > 0
