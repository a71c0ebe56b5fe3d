from __future__ import annotations

import logging
from collections import defaultdict
from contextlib import nullcontext
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Callable, ContextManager, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..calendar.model import NewCalendarEvent
from ..calendar.repository import CalendarRepository
from ..common.datetime_utils import coerce_date, coerce_datetime, format_date_id, now_local
from ..common.validators import optional_text
from ..core.constants import WORK_END, WORK_START
from ..core.context import SessionContext
from ..core.enums import AttendanceStatus, CalendarEventType, Role
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .factory import AttendanceStrategyFactory
from .model import ImportStatus, Mismatch, NewAttendance
from .repository import AttendanceRepository, EmployeeDay
from .status import compute_status

logger = logging.getLogger(__name__)

TransactionFactory = Callable[[], ContextManager[Any]]

EMPLOYEE_NOT_FOUND = "Karyawan tidak ditemukan di database."
EMPLOYEE_AMBIGUOUS = "Nama karyawan ambigu (lebih dari satu karyawan cocok)."
ATTENDANCE_EXISTS = "Data kehadiran untuk tanggal ini sudah tercatat."
ABSENCE_EXISTS = "Data ketidakhadiran untuk tanggal ini sudah tercatat."


def normalize_name(value: Any) -> str:
    return " ".join(str(value or "").split()).lower()


@dataclass(frozen=True)
class _Row:
    display_name: str
    employee: Employee
    work_date: date
    source_status: AttendanceStatus
    check_in: Optional[datetime]
    check_out: Optional[datetime]
    has_punches: bool
    notes: Optional[str]

    @property
    def key(self) -> EmployeeDay:
        return self.employee.employee_id, self.work_date


@dataclass(frozen=True)
class _Written:
    attendance_id: int
    employee_name: str
    employee_id: int
    work_date: date
    check_in: Optional[datetime]
    check_out: Optional[datetime]
    status: AttendanceStatus


class _Roster:
    """Lookup of employees by id, NIK and normalised full name."""

    def __init__(self, employees: Sequence[Employee]):
        self._by_id = {e.employee_id: e for e in employees}
        self._by_nik = {e.nik.strip(): e for e in employees if e.nik}
        self._by_name: Dict[str, List[Employee]] = defaultdict(list)
        for e in employees:
            self._by_name[normalize_name(e.full_name)].append(e)

    def resolve(self, *, employee_id: Optional[int], nik: Optional[str], name: Optional[str]):
        """Return (employee, mismatch_reason)."""
        if employee_id is not None:
            found = self._by_id.get(employee_id)
            return (found, None) if found else (None, EMPLOYEE_NOT_FOUND)
        if nik:
            found = self._by_nik.get(nik)
            return (found, None) if found else (None, EMPLOYEE_NOT_FOUND)

        matches = self._by_name.get(normalize_name(name), [])
        if not matches:
            return None, EMPLOYEE_NOT_FOUND
        if len(matches) > 1:
            return None, EMPLOYEE_AMBIGUOUS
        return matches[0], None


class AttendanceReconciler:
    """Turns raw attendance rows into attendance/absence rows plus one
    calendar summary per affected date.

    File import, manual entry and the attendance-machine API all go through
    `reconcile`. Each row succeeds or is rejected on its own; storage errors
    abort the whole batch and roll back every write made by it.
    """

    def __init__(
        self,
        employees: EmployeeRepository,
        attendance: AttendanceRepository,
        calendar: CalendarRepository,
        *,
        strategy_factory: Optional[AttendanceStrategyFactory] = None,
        transaction: Optional[TransactionFactory] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._employees = employees
        self._attendance = attendance
        self._calendar = calendar
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._transaction = transaction or nullcontext
        self._clock = clock

    def reconcile(
        self,
        ctx: SessionContext,
        rows: Iterable[Mapping[str, Any]],
        *,
        update_existing: bool = False,
    ) -> ImportStatus:
        ctx.require(Role.ADMIN, Role.INTEGRATION)
        rows = list(rows)
        result = ImportStatus(timestamp=self._clock(), total_rows=len(rows))
        roster = _Roster(self._employees.list_all())

        parsed: List[_Row] = []
        for number, raw in enumerate(rows, start=1):
            row = self._parse(number, raw, roster, result)
            if row is not None:
                parsed.append(row)

        pairs = list(dict.fromkeys(r.key for r in parsed))
        with self._transaction():
            existing = self._attendance.find_for_pairs(pairs)
            absent = self._attendance.absence_pairs(pairs)

            written: List[_Written] = []
            seen: set[EmployeeDay] = set()
            for row in parsed:
                if row.key in seen:
                    result.mismatches.append(Mismatch(row.display_name, ATTENDANCE_EXISTS))
                    continue
                current = existing.get(row.key)
                if current and not update_existing:
                    result.mismatches.append(Mismatch(row.display_name, ATTENDANCE_EXISTS))
                    continue
                if row.key in absent and not update_existing:
                    result.mismatches.append(Mismatch(row.display_name, ABSENCE_EXISTS))
                    continue

                seen.add(row.key)
                if current:
                    result.updated_count += 1
                written.append(self._write(ctx, row, current_id=current.attendance_id if current else None, absent=absent))

            result.success_count = len(written)
            result.attendance_ids = [w.attendance_id for w in written]
            events = self._build_events(written)
            result.calendar_event_count = self._calendar.insert_many(events) if events else 0

        logger.info(
            "Attendance batch by %s: rows=%d saved=%d errors=%d mismatches=%d",
            ctx.full_name,
            result.total_rows,
            result.success_count,
            len(result.errors),
            len(result.mismatches),
        )
        return result

    def _parse(self, number: int, raw: Mapping[str, Any], roster: _Roster, result: ImportStatus) -> Optional[_Row]:
        name = optional_text(raw.get("name"))
        nik = optional_text(raw.get("nik"))
        employee_id = raw.get("employee_id")
        date_value = raw.get("date")
        status_value = optional_text(raw.get("status"))

        if (not name and not nik and employee_id in (None, "")) or _blank(date_value) or not status_value:
            result.errors.append(f"Baris {number}: Data tidak lengkap (nama, tanggal, dan status wajib diisi).")
            return None

        try:
            work_date = coerce_date(date_value)
        except ValueError:
            work_date = None
        if work_date is None:
            result.errors.append(f"Baris {number}: Format tanggal tidak valid ({date_value}).")
            return None

        try:
            source_status = AttendanceStatus.parse(status_value)
        except ValueError:
            result.errors.append(
                f"Baris {number}: Status '{status_value}' tidak dikenal (gunakan present, absent, late, atau leave)."
            )
            return None

        try:
            check_in = coerce_datetime(raw.get("check_in"), on=work_date)
            check_out = coerce_datetime(raw.get("check_out"), on=work_date)
        except ValueError:
            result.errors.append(f"Baris {number}: Format jam masuk/keluar tidak valid.")
            return None

        try:
            parsed_id = int(employee_id) if employee_id not in (None, "") else None
        except (TypeError, ValueError):
            result.errors.append(f"Baris {number}: ID karyawan tidak valid ({employee_id}).")
            return None

        display_name = name or nik or str(parsed_id)
        employee, reason = roster.resolve(employee_id=parsed_id, nik=nik, name=name)
        if employee is None:
            result.mismatches.append(Mismatch(display_name, reason or EMPLOYEE_NOT_FOUND))
            return None

        return _Row(
            display_name=name or employee.full_name,
            employee=employee,
            work_date=work_date,
            source_status=source_status,
            check_in=check_in,
            check_out=check_out,
            has_punches=check_in is not None or check_out is not None,
            notes=optional_text(raw.get("notes")),
        )

    def _write(self, ctx: SessionContext, row: _Row, *, current_id: Optional[int], absent: set) -> _Written:
        if row.has_punches:
            check_in, check_out = row.check_in, row.check_out
            status = compute_status(check_in, row.source_status)
        else:
            punches = self._factory.for_status(row.source_status).punch_times(work_date=row.work_date)
            check_in, check_out = punches.check_in, punches.check_out
            status = row.source_status

        record = NewAttendance(
            employee_id=row.employee.employee_id,
            work_date=row.work_date,
            check_in=check_in,
            check_out=check_out,
            status=status,
            notes=row.notes,
            api_key_id=ctx.api_key_id,
        )
        if current_id is not None:
            self._attendance.update(current_id, record)
            attendance_id = current_id
        else:
            attendance_id = self._attendance.insert(record)

        needs_absence = self._factory.for_status(status).records_absence
        if needs_absence and row.key not in absent:
            self._attendance.insert_absence(row.employee.employee_id, row.work_date)
        elif not needs_absence and row.key in absent:
            self._attendance.delete_absence(row.employee.employee_id, row.work_date)

        return _Written(
            attendance_id=attendance_id,
            employee_name=row.employee.full_name,
            employee_id=row.employee.employee_id,
            work_date=row.work_date,
            check_in=check_in,
            check_out=check_out,
            status=status,
        )

    def _build_events(self, written: Sequence[_Written]) -> List[NewCalendarEvent]:
        by_date: Dict[date, List[_Written]] = defaultdict(list)
        for w in written:
            by_date[w.work_date].append(w)
        if not by_date:
            return []

        absences = []
        for absence in self._attendance.list_absences_for_dates(sorted(by_date)):
            day = by_date.get(absence.work_date, [])
            if not any(w.employee_id == absence.employee_id for w in day):
                absences.append(absence)
        # Absence rows exist for leave as well; the attendance row decides the label.
        recorded = self._attendance.find_for_pairs([(a.employee_id, a.work_date) for a in absences])

        extra: Dict[date, Dict[int, Tuple[str, AttendanceStatus]]] = defaultdict(dict)
        for absence in absences:
            record = recorded.get((absence.employee_id, absence.work_date))
            status = compute_status(record.check_in, record.status) if record else AttendanceStatus.ABSENT
            name = absence.employee_name or str(absence.employee_id)
            extra[absence.work_date].setdefault(absence.employee_id, (name, status))

        return [self._daily_event(d, by_date[d], list(extra[d].values())) for d in sorted(by_date)]

    def _daily_event(
        self,
        day: date,
        records: Sequence[_Written],
        others: Sequence[Tuple[str, AttendanceStatus]],
    ) -> NewCalendarEvent:
        counts = {s: 0 for s in AttendanceStatus}
        lines = ["Rincian kehadiran:"]
        earliest: Optional[_Written] = None
        latest: Optional[_Written] = None

        for w in records:
            effective = compute_status(w.check_in, w.status)
            counts[effective] += 1
            lines.append(f"- {w.employee_name}: {effective.label}")
            if w.check_in is not None and (earliest is None or w.check_in < earliest.check_in):
                earliest = w
            if w.check_out is not None and (latest is None or w.check_out > latest.check_out):
                latest = w

        for name, status in others:
            counts[status] += 1
            lines.append(f"- {name}: {status.label}")

        lines.append("")
        lines.append(f"Total Hadir: {counts[AttendanceStatus.PRESENT]}")
        lines.append(f"Total Terlambat: {counts[AttendanceStatus.LATE]}")
        lines.append(f"Total Tidak Hadir: {counts[AttendanceStatus.ABSENT]}")
        lines.append(f"Total Cuti: {counts[AttendanceStatus.LEAVE]}")
        if earliest is not None:
            lines.append(f"Jam masuk paling awal: {earliest.check_in:%H:%M} ({earliest.employee_name})")
        if latest is not None:
            lines.append(f"Jam keluar paling akhir: {latest.check_out:%H:%M} ({latest.employee_name})")

        start_time = earliest.check_in if earliest else datetime.combine(day, WORK_START)
        end_time = latest.check_out if latest else datetime.combine(day, WORK_END)
        if end_time < start_time:
            end_time = start_time

        return NewCalendarEvent(
            title=f"Kehadiran {format_date_id(day)}",
            description="\n".join(lines),
            event_type=CalendarEventType.ATTENDANCE,
            start_time=start_time,
            end_time=end_time,
            is_synced=False,
            earliest_check_in_attendance_id=earliest.attendance_id if earliest else None,
            latest_check_out_attendance_id=latest.attendance_id if latest else None,
        )


def _blank(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()
