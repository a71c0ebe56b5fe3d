from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Optional, Sequence

from ..common.datetime_utils import format_date_id, format_period_label, month_bounds
from ..common.validators import optional_text
from ..core.constants import MANUAL_EVENT_END, MANUAL_EVENT_START, PAYROLL_EVENT_END, PAYROLL_EVENT_START
from ..core.context import SessionContext
from ..core.enums import CalendarEventType, Role
from ..payroll.repository import PayrollRepository
from .model import CalendarEvent, NewCalendarEvent
from .repository import CalendarRepository

logger = logging.getLogger(__name__)


def _day_bounds(day: date) -> tuple[datetime, datetime]:
    start = datetime.combine(day, datetime.min.time())
    return start, start + timedelta(days=1)


class CalendarService:
    def __init__(self, calendar: CalendarRepository, payroll: PayrollRepository):
        self._calendar = calendar
        self._payroll = payroll

    def events_on(self, ctx: SessionContext, day: date) -> Sequence[CalendarEvent]:
        ctx.require(Role.ADMIN)
        return self._calendar.list_between(*_day_bounds(day))

    def events_in_month(self, ctx: SessionContext, year: int, month: int) -> Sequence[CalendarEvent]:
        ctx.require(Role.ADMIN)
        first, next_first = month_bounds(year, month)
        return self._calendar.list_between(
            datetime.combine(first, datetime.min.time()),
            datetime.combine(next_first, datetime.min.time()),
        )

    def add_event(
        self,
        ctx: SessionContext,
        *,
        on_date: date,
        event_type: CalendarEventType = CalendarEventType.ATTENDANCE,
        title: Optional[str] = None,
        description: Optional[str] = None,
    ) -> None:
        """Add an operator event, 09:00-10:00 on the chosen date."""
        ctx.require(Role.ADMIN)
        self._calendar.insert_many(
            [
                NewCalendarEvent(
                    title=optional_text(title) or f"Acara pada {format_date_id(on_date)}",
                    description=optional_text(description),
                    event_type=event_type,
                    start_time=datetime.combine(on_date, MANUAL_EVENT_START),
                    end_time=datetime.combine(on_date, MANUAL_EVENT_END),
                )
            ]
        )

    def sync_payroll_periods(self, ctx: SessionContext) -> int:
        """Project every processed payroll period onto the calendar.

        One event per period, dated on the period end; periods that already
        have an event with the same title on that date are skipped.
        """
        ctx.require(Role.ADMIN)
        events = []
        for period_start, period_end in self._payroll.distinct_periods():
            title = f"Penggajian {format_period_label(period_start, period_end)}"
            day_start, day_end = _day_bounds(period_end)
            if self._calendar.exists(title=title, start=day_start, end=day_end):
                continue
            events.append(
                NewCalendarEvent(
                    title=title,
                    description=(
                        f"Periode penggajian {format_date_id(period_start)} - {format_date_id(period_end)}"
                    ),
                    event_type=CalendarEventType.PAYROLL,
                    start_time=datetime.combine(period_end, PAYROLL_EVENT_START),
                    end_time=datetime.combine(period_end, PAYROLL_EVENT_END),
                    payroll_period_start=period_start,
                    payroll_period_end=period_end,
                )
            )

        created = self._calendar.insert_many(events) if events else 0
        logger.info("Payroll calendar sync created %d events", created)
        return created
