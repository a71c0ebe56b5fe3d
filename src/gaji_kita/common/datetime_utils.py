from __future__ import annotations

from datetime import date, datetime, time
from typing import Any, Optional

from ..core.exceptions import ValidationError

MONTH_NAMES_ID = [
    "Januari",
    "Februari",
    "Maret",
    "April",
    "Mei",
    "Juni",
    "Juli",
    "Agustus",
    "September",
    "Oktober",
    "November",
    "Desember",
]


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_date_field(value: str, field_name: str) -> date:
    try:
        return parse_iso_date((value or "").strip())
    except ValueError:
        raise ValidationError(f"{field_name} tidak valid (format YYYY-MM-DD)")


def coerce_date(value: Any) -> Optional[date]:
    """Accept date/datetime/pandas Timestamp/ISO string, return a date or None."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    s = str(value).strip()
    if not s:
        return None
    try:
        return datetime.fromisoformat(s).date()
    except ValueError:
        return parse_iso_date(s[:10])


def coerce_datetime(value: Any, *, on: Optional[date] = None) -> Optional[datetime]:
    """Accept a datetime, a time-of-day (combined with `on`) or an ISO string."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, time):
        if on is None:
            raise ValueError("time value needs a date")
        return datetime.combine(on, value)
    s = str(value).strip()
    if not s:
        return None
    if on is not None and len(s) <= 8 and ":" in s:
        parts = [int(p) for p in s.split(":")]
        while len(parts) < 3:
            parts.append(0)
        return datetime.combine(on, time(parts[0], parts[1], parts[2]))
    parsed = datetime.fromisoformat(s.replace("Z", "+00:00"))
    # Stored as naive local time, like the DATETIME columns.
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def format_date_id(value: date) -> str:
    """10 April 2025"""
    return f"{value.day} {MONTH_NAMES_ID[value.month - 1]} {value.year}"


def format_period_label(start: date, end: date) -> str:
    if start.day == 1 and start.month == end.month and start.year == end.year:
        return f"{MONTH_NAMES_ID[start.month - 1]} {start.year}"
    return f"{start.strftime('%d/%m/%Y')} - {end.strftime('%d/%m/%Y')}"


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """Return [first day of month, first day of next month)."""
    start = date(year, month, 1)
    if month == 12:
        return start, date(year + 1, 1, 1)
    return start, date(year, month + 1, 1)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
