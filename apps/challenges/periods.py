"""Calendar-month arithmetic shared by challenge and redemption rules."""

import calendar
from datetime import date, datetime, time, timezone as dt_timezone

from django.utils import timezone


def shift_months(value, months: int):
    """
    Move a date or datetime by whole months, clamping the day.

    ``shift_months(date(2024, 3, 31), -1)`` is ``date(2024, 2, 29)``.
    """
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def month_start(value) -> date:
    if isinstance(value, datetime):
        value = value.date()
    return value.replace(day=1)


def current_cycle_month(now=None) -> date:
    return month_start(now or timezone.now())


def month_window(cycle_month: date):
    """Aware ``[start, end)`` datetimes (UTC) covering the month."""
    start = datetime.combine(month_start(cycle_month), time.min, tzinfo=dt_timezone.utc)
    return start, shift_months(start, 1)
