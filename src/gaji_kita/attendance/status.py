from __future__ import annotations

from datetime import datetime, time
from typing import Optional, Union

from ..core.constants import LATE_AFTER
from ..core.enums import AttendanceStatus


def _is_leave(source_status: Optional[Union[AttendanceStatus, str]]) -> bool:
    if isinstance(source_status, AttendanceStatus):
        return source_status == AttendanceStatus.LEAVE
    return (source_status or "").strip().lower() == AttendanceStatus.LEAVE.value


def compute_status(
    check_in: Optional[Union[datetime, time]],
    source_status: Optional[Union[AttendanceStatus, str]],
) -> AttendanceStatus:
    """Effective attendance status used everywhere a status is shown.

    Leave always wins; otherwise a missing check-in is absent and any
    check-in after 09:00:00 is late.
    """
    if _is_leave(source_status):
        return AttendanceStatus.LEAVE
    if check_in is None:
        return AttendanceStatus.ABSENT

    clock = check_in.time() if isinstance(check_in, datetime) else check_in
    if clock.replace(microsecond=0) > LATE_AFTER:
        return AttendanceStatus.LATE
    return AttendanceStatus.PRESENT
