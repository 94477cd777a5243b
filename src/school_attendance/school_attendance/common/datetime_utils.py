from __future__ import annotations

import calendar
from datetime import date, datetime


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date.

    Full ISO timestamps (``2024-02-10T08:15:00Z``) are truncated to their
    calendar day so clients can send either form.
    """
    value = value.strip()
    if len(value) > 10 and value[10] in "T ":
        value = value[:10]
    return datetime.strptime(value, "%Y-%m-%d").date()


def format_iso_date(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def days_in_month(month: int, year: int) -> int:
    return calendar.monthrange(year, month)[1]


def month_bounds(month: int, year: int) -> tuple[date, date]:
    """First and last calendar day of the month."""
    return date(year, month, 1), date(year, month, days_in_month(month, year))


def now_local() -> datetime:
    """Current local time; services take an explicit ``now`` or ``today`` in tests."""
    return datetime.now()
