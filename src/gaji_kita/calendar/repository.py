from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from .model import CalendarEvent, NewCalendarEvent


class CalendarRepository(Protocol):
    def insert_many(self, events: Sequence[NewCalendarEvent]) -> int:
        raise NotImplementedError

    def list_between(self, start: datetime, end: datetime) -> Sequence[CalendarEvent]:
        """Events with start <= start_time < end, ordered by start_time."""
        raise NotImplementedError

    def exists(self, *, title: str, start: datetime, end: datetime) -> bool:
        """True when an event with this title starts inside [start, end)."""
        raise NotImplementedError
