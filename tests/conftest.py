from __future__ import annotations

from contextlib import contextmanager
from dataclasses import asdict, replace
from datetime import date
from decimal import Decimal

import pytest

from gaji_kita.attendance.model import AbsenceRecord, AttendanceRecord
from gaji_kita.calendar.model import CalendarEvent
from gaji_kita.core.context import SessionContext
from gaji_kita.core.enums import Role
from gaji_kita.core.exceptions import StorageError
from gaji_kita.employees.model import Employee
from gaji_kita.payroll.model import PayrollRecord


def make_employee(employee_id, first_name, last_name=None, *, basic_salary="0", **kwargs) -> Employee:
    return Employee(
        employee_id=employee_id,
        first_name=first_name,
        last_name=last_name,
        hire_date=kwargs.pop("hire_date", date(2024, 1, 1)),
        basic_salary=Decimal(basic_salary),
        **kwargs,
    )


class FakeEmployeeRepo:
    def __init__(self, employees=()):
        self._rows = {e.employee_id: e for e in employees}
        self._next_id = max(self._rows, default=0) + 1
        self.created_api_key_ids = []

    def list_all(self, *, active_only=False, search=None):
        rows = sorted(self._rows.values(), key=lambda e: e.employee_id)
        if active_only:
            rows = [e for e in rows if e.is_active]
        if search:
            needle = search.lower()
            rows = [e for e in rows if needle in e.full_name.lower() or needle in (e.nik or "").lower()]
        return rows

    def get_by_id(self, employee_id):
        return self._rows.get(int(employee_id))

    def get_by_nik(self, nik):
        return next((e for e in self._rows.values() if e.nik == nik), None)

    def create(self, data, *, api_key_id=None):
        employee_id = self._next_id
        self._next_id += 1
        self._rows[employee_id] = Employee(employee_id=employee_id, **asdict(data))
        self.created_api_key_ids.append(api_key_id)
        return employee_id

    def update(self, employee_id, data):
        self._rows[employee_id] = Employee(employee_id=employee_id, **asdict(data))
        return True

    def set_active(self, employee_id, *, is_active):
        self._rows[employee_id] = replace(self._rows[employee_id], is_active=is_active)
        return True

    def delete_by_id(self, employee_id):
        return self._rows.pop(employee_id, None) is not None


class FakeAttendanceRepo:
    """Keeps the (employee_id, date) unique keys of the real tables."""

    def __init__(self, employees: FakeEmployeeRepo):
        self._employees = employees
        self.records: dict[int, AttendanceRecord] = {}
        self.absences: dict[int, AbsenceRecord] = {}
        self.fail_with: Exception | None = None
        self._next_id = 1

    def _name(self, employee_id):
        e = self._employees.get_by_id(employee_id)
        return e.full_name if e else None

    def add_record(self, record: AttendanceRecord):
        self.records[record.attendance_id] = record
        self._next_id = max(self._next_id, record.attendance_id + 1)

    def find_for_pairs(self, pairs):
        wanted = set(pairs)
        return {(r.employee_id, r.work_date): r for r in self.records.values() if (r.employee_id, r.work_date) in wanted}

    def insert(self, record):
        if self.fail_with is not None:
            raise self.fail_with
        if any((r.employee_id, r.work_date) == (record.employee_id, record.work_date) for r in self.records.values()):
            raise StorageError("Duplicate entry for key 'uq_attendance_employee_date'")
        attendance_id = self._next_id
        self._next_id += 1
        self.records[attendance_id] = AttendanceRecord(
            attendance_id=attendance_id,
            employee_id=record.employee_id,
            work_date=record.work_date,
            check_in=record.check_in,
            check_out=record.check_out,
            status=record.status,
            notes=record.notes,
            employee_name=self._name(record.employee_id),
        )
        return attendance_id

    def update(self, attendance_id, record):
        self.records[attendance_id] = replace(
            self.records[attendance_id],
            check_in=record.check_in,
            check_out=record.check_out,
            status=record.status,
            notes=record.notes,
        )

    def get_by_id(self, attendance_id):
        return self.records.get(attendance_id)

    def list_for_date(self, work_date):
        return [r for r in self.records.values() if r.work_date == work_date]

    def list_between(self, start, end):
        return [r for r in self.records.values() if start <= r.work_date < end]

    def absence_pairs(self, pairs):
        wanted = set(pairs)
        return {(a.employee_id, a.work_date) for a in self.absences.values() if (a.employee_id, a.work_date) in wanted}

    def insert_absence(self, employee_id, work_date):
        if any((a.employee_id, a.work_date) == (employee_id, work_date) for a in self.absences.values()):
            raise StorageError("Duplicate entry for key 'uq_absences_employee_date'")
        absence_id = len(self.absences) + 1
        self.absences[absence_id] = AbsenceRecord(
            absence_id=absence_id,
            employee_id=employee_id,
            work_date=work_date,
            employee_name=self._name(employee_id),
        )
        return absence_id

    def delete_absence(self, employee_id, work_date):
        for absence_id, a in list(self.absences.items()):
            if (a.employee_id, a.work_date) == (employee_id, work_date):
                del self.absences[absence_id]
                return True
        return False

    def list_absences_for_dates(self, dates):
        wanted = set(dates)
        return [a for a in self.absences.values() if a.work_date in wanted]


class FakeCalendarRepo:
    def __init__(self):
        self.events: list[CalendarEvent] = []

    def insert_many(self, events):
        for e in events:
            self.events.append(CalendarEvent(event_id=len(self.events) + 1, **asdict(e)))
        return len(events)

    def list_between(self, start, end):
        return sorted((e for e in self.events if start <= e.start_time < end), key=lambda e: e.start_time)

    def exists(self, *, title, start, end):
        return any(e.title == title and start <= e.start_time < end for e in self.events)


class FakePayrollRepo:
    def __init__(self):
        self.records: list[PayrollRecord] = []
        self.insert_calls = 0

    def period_exists(self, period_start, period_end):
        return any((r.period_start, r.period_end) == (period_start, period_end) for r in self.records)

    def insert_many(self, records):
        self.insert_calls += 1
        for p in records:
            self.records.append(
                PayrollRecord(
                    payroll_id=len(self.records) + 1,
                    employee_id=p.employee_id,
                    employee_name=p.employee_name,
                    period_start=p.period_start,
                    period_end=p.period_end,
                    components=p.components,
                    payment_status=p.payment_status,
                    payment_date=p.payment_date,
                    notes=p.notes,
                )
            )
        return len(records)

    def list_records(self, *, period_start=None, period_end=None):
        rows = self.records
        if period_start is not None and period_end is not None:
            rows = [r for r in rows if (r.period_start, r.period_end) == (period_start, period_end)]
        return sorted(rows, key=lambda r: (r.period_start, r.period_end), reverse=True)

    def distinct_periods(self):
        return sorted({(r.period_start, r.period_end) for r in self.records})


class RecordingTransaction:
    """Stands in for DatabaseConnection.transaction and remembers how each block ended."""

    def __init__(self):
        self.outcomes: list[str] = []

    @contextmanager
    def __call__(self):
        try:
            yield None
        except Exception:
            self.outcomes.append("rollback")
            raise
        self.outcomes.append("commit")


@pytest.fixture
def admin_ctx():
    return SessionContext(user_id=1, full_name="Admin", role=Role.ADMIN)


@pytest.fixture
def machine_ctx():
    return SessionContext(user_id=None, full_name="Mesin Absensi", role=Role.INTEGRATION, api_key_id=7)


@pytest.fixture
def employees_repo():
    return FakeEmployeeRepo(
        [
            make_employee(
                1,
                "Ahmad",
                "Surya",
                basic_salary="5000000",
                incentive=Decimal("200000"),
                transportation_fee=Decimal("100000"),
                nik="EMP001",
            ),
            make_employee(2, "Budi", "Santoso", basic_salary="4000000", nik="EMP002"),
            make_employee(3, "Citra", "Dewi", position_base_salary=Decimal("4500000"), nik="EMP003"),
        ]
    )


@pytest.fixture
def attendance_repo(employees_repo):
    return FakeAttendanceRepo(employees_repo)


@pytest.fixture
def calendar_repo():
    return FakeCalendarRepo()


@pytest.fixture
def payroll_repo():
    return FakePayrollRepo()


@pytest.fixture
def transaction():
    return RecordingTransaction()
