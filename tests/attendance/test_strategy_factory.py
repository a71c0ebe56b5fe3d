from datetime import date, datetime

from gaji_kita.attendance.factory import AttendanceStrategyFactory
from gaji_kita.attendance.strategies.absent_strategy import AbsentStrategy
from gaji_kita.attendance.strategies.late_strategy import LateStrategy
from gaji_kita.attendance.strategies.present_strategy import PresentStrategy
from gaji_kita.core.enums import AttendanceStatus


def test_factory_picks_strategy_per_status():
    factory = AttendanceStrategyFactory()

    assert isinstance(factory.for_status(AttendanceStatus.PRESENT), PresentStrategy)
    assert isinstance(factory.for_status(AttendanceStatus.LATE), LateStrategy)
    assert isinstance(factory.for_status(AttendanceStatus.ABSENT), AbsentStrategy)
    assert isinstance(factory.for_status(AttendanceStatus.LEAVE), AbsentStrategy)


def test_synthesized_punch_times():
    day = date(2025, 4, 10)
    factory = AttendanceStrategyFactory()

    present = factory.for_status(AttendanceStatus.PRESENT).punch_times(work_date=day)
    late = factory.for_status(AttendanceStatus.LATE).punch_times(work_date=day)
    absent = factory.for_status(AttendanceStatus.ABSENT).punch_times(work_date=day)

    assert (present.check_in, present.check_out) == (datetime(2025, 4, 10, 8, 0), datetime(2025, 4, 10, 17, 0))
    assert (late.check_in, late.check_out) == (datetime(2025, 4, 10, 9, 15), datetime(2025, 4, 10, 17, 0))
    assert (absent.check_in, absent.check_out) == (None, None)
    assert factory.for_status(AttendanceStatus.LEAVE).records_absence is True
    assert factory.for_status(AttendanceStatus.PRESENT).records_absence is False
