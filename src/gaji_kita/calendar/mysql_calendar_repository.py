from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Sequence

from ..core.enums import CalendarEventType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import CalendarEvent, NewCalendarEvent
from .repository import CalendarRepository

_COLUMNS = (
    "title, description, event_type, start_time, end_time, is_synced, employee_id, attendance_id, "
    "earliest_check_in_attendance_id, latest_check_out_attendance_id, payroll_period_start, payroll_period_end"
)


def _to_event(r: Dict[str, Any]) -> CalendarEvent:
    return CalendarEvent(
        event_id=int(r["id"]),
        title=r["title"],
        description=r.get("description"),
        event_type=CalendarEventType(r["event_type"]),
        start_time=r["start_time"],
        end_time=r["end_time"],
        is_synced=bool(r.get("is_synced")),
        employee_id=r.get("employee_id"),
        attendance_id=r.get("attendance_id"),
        earliest_check_in_attendance_id=r.get("earliest_check_in_attendance_id"),
        latest_check_out_attendance_id=r.get("latest_check_out_attendance_id"),
        payroll_period_start=r.get("payroll_period_start"),
        payroll_period_end=r.get("payroll_period_end"),
    )


class MySQLCalendarRepository(CalendarRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def insert_many(self, events: Sequence[NewCalendarEvent]) -> int:
        if not events:
            return 0
        rows = [
            (
                e.title,
                e.description,
                e.event_type.value,
                e.start_time,
                e.end_time,
                1 if e.is_synced else 0,
                e.employee_id,
                e.attendance_id,
                e.earliest_check_in_attendance_id,
                e.latest_check_out_attendance_id,
                e.payroll_period_start,
                e.payroll_period_end,
            )
            for e in events
        ]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                f"INSERT INTO calendar_events({_COLUMNS}) VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)",
                rows,
            )
        return len(rows)

    def list_between(self, start: datetime, end: datetime) -> Sequence[CalendarEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT id, {_COLUMNS}
                FROM calendar_events
                WHERE start_time >= %s AND start_time < %s
                ORDER BY start_time, id
                """,
                (start, end),
            )
            return [_to_event(r) for r in fetchall(cur)]

    def exists(self, *, title: str, start: datetime, end: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id FROM calendar_events WHERE title=%s AND start_time >= %s AND start_time < %s LIMIT 1",
                (title, start, end),
            )
            return fetchone(cur) is not None
