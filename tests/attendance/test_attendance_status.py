from datetime import datetime, time

from gaji_kita.attendance.status import compute_status
from gaji_kita.core.enums import AttendanceStatus


def test_leave_wins_regardless_of_check_in():
    assert compute_status(datetime(2025, 4, 10, 11, 0), "leave") == AttendanceStatus.LEAVE
    assert compute_status(None, AttendanceStatus.LEAVE) == AttendanceStatus.LEAVE
    assert compute_status(time(7, 0), " LEAVE ") == AttendanceStatus.LEAVE


def test_missing_check_in_is_absent():
    assert compute_status(None, "present") == AttendanceStatus.ABSENT
    assert compute_status(None, None) == AttendanceStatus.ABSENT


def test_nine_oclock_sharp_is_present():
    assert compute_status(datetime(2025, 4, 10, 9, 0, 0), "late") == AttendanceStatus.PRESENT
    assert compute_status(time(8, 0), "present") == AttendanceStatus.PRESENT


def test_one_second_after_nine_is_late():
    assert compute_status(datetime(2025, 4, 10, 9, 0, 1), "present") == AttendanceStatus.LATE
    assert compute_status(time(9, 15), "present") == AttendanceStatus.LATE
