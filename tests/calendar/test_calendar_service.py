from datetime import date, datetime

import pytest

from gaji_kita.calendar.service import CalendarService
from gaji_kita.core.enums import CalendarEventType
from gaji_kita.core.exceptions import AuthorizationError
from gaji_kita.payroll.service import PayrollComputer


@pytest.fixture
def service(calendar_repo, payroll_repo):
    return CalendarService(calendar_repo, payroll_repo)


def test_manual_event_gets_default_title_and_hour(service, admin_ctx, calendar_repo):
    service.add_event(admin_ctx, on_date=date(2025, 4, 17), event_type=CalendarEventType.TAX)

    (event,) = calendar_repo.events
    assert event.title == "Acara pada 17 April 2025"
    assert event.event_type == CalendarEventType.TAX
    assert (event.start_time, event.end_time) == (datetime(2025, 4, 17, 9, 0), datetime(2025, 4, 17, 10, 0))


def test_events_by_day_and_month(service, admin_ctx):
    service.add_event(admin_ctx, on_date=date(2025, 4, 17), title="Rapat")
    service.add_event(admin_ctx, on_date=date(2025, 4, 30), title="Tutup buku")
    service.add_event(admin_ctx, on_date=date(2025, 5, 1), title="Hari Buruh")

    assert [e.title for e in service.events_on(admin_ctx, date(2025, 4, 17))] == ["Rapat"]
    assert [e.title for e in service.events_in_month(admin_ctx, 2025, 4)] == ["Rapat", "Tutup buku"]
    assert [e.title for e in service.events_in_month(admin_ctx, 2025, 5)] == ["Hari Buruh"]


def test_payroll_sync_is_idempotent(service, admin_ctx, payroll_repo, employees_repo, calendar_repo):
    computer = PayrollComputer(payroll_repo, employees_repo)
    computer.process_period(admin_ctx, period_start=date(2025, 3, 1), period_end=date(2025, 3, 31))
    computer.process_period(admin_ctx, period_start=date(2025, 4, 1), period_end=date(2025, 4, 30))

    assert service.sync_payroll_periods(admin_ctx) == 2
    assert service.sync_payroll_periods(admin_ctx) == 0

    march, april = calendar_repo.events
    assert march.title == "Penggajian Maret 2025"
    assert march.event_type == CalendarEventType.PAYROLL
    assert march.start_time == datetime(2025, 3, 31, 9, 0)
    assert april.payroll_period_start == date(2025, 4, 1)
    assert april.description == "Periode penggajian 1 April 2025 - 30 April 2025"


def test_calendar_is_admin_only(service, machine_ctx):
    with pytest.raises(AuthorizationError):
        service.events_on(machine_ctx, date(2025, 4, 17))
