from datetime import date, datetime

import pytest

from gaji_kita.attendance.model import AttendanceRecord
from gaji_kita.attendance.reconciler import AttendanceReconciler
from gaji_kita.attendance.service import NOT_RECORDED, AttendanceService
from gaji_kita.core.enums import AttendanceStatus
from gaji_kita.core.exceptions import AuthorizationError, ValidationError

DAY = date(2025, 4, 10)


@pytest.fixture
def service(employees_repo, attendance_repo, calendar_repo):
    reconciler = AttendanceReconciler(employees_repo, attendance_repo, calendar_repo)
    return AttendanceService(attendance_repo, employees_repo, reconciler)


def test_daily_view_derives_status_and_marks_missing(service, admin_ctx, attendance_repo):
    attendance_repo.add_record(
        AttendanceRecord(
            attendance_id=1,
            employee_id=1,
            work_date=DAY,
            check_in=datetime(2025, 4, 10, 9, 5),
            check_out=datetime(2025, 4, 10, 17, 0),
            # stored as present, but the check-in is after 09:00
            status=AttendanceStatus.PRESENT,
        )
    )
    attendance_repo.add_record(
        AttendanceRecord(
            attendance_id=2,
            employee_id=2,
            work_date=DAY,
            check_in=datetime(2025, 4, 10, 8, 0),
            check_out=None,
            status=AttendanceStatus.LEAVE,
        )
    )

    view = service.daily_view(admin_ctx, DAY)

    by_id = {r.employee_id: r for r in view.rows}
    assert by_id[1].status == AttendanceStatus.LATE
    assert by_id[2].status_label == "Cuti"
    assert by_id[3].status is None
    assert by_id[3].status_label == NOT_RECORDED
    assert (view.summary.late, view.summary.leave, view.summary.present, view.summary.total) == (1, 1, 0, 3)


def test_daily_view_is_admin_only(service, machine_ctx):
    with pytest.raises(AuthorizationError):
        service.daily_view(machine_ctx, DAY)


def test_record_manual_returns_new_id(service, admin_ctx, attendance_repo):
    attendance_id = service.record_manual(
        admin_ctx, {"employee_id": "3", "date": "2025-04-10", "status": "present", "check_in": "08:10"}
    )

    record = attendance_repo.records[attendance_id]
    assert record.employee_id == 3
    assert record.check_in == datetime(2025, 4, 10, 8, 10)
    assert record.status == AttendanceStatus.PRESENT


def test_record_manual_raises_row_problems(service, admin_ctx):
    service.record_manual(admin_ctx, {"name": "Budi Santoso", "date": "2025-04-10", "status": "late"})

    with pytest.raises(ValidationError, match="sudah tercatat"):
        service.record_manual(admin_ctx, {"name": "Budi Santoso", "date": "2025-04-10", "status": "present"})
    with pytest.raises(ValidationError, match="Baris 1: Status 'sakit'"):
        service.record_manual(admin_ctx, {"employee_id": 1, "date": "2025-04-10", "status": "sakit"})
