"""
Reporting period helpers.

Dependencies: None
System role: Date range resolution for analytics
"""

import enum
from calendar import monthrange
from datetime import datetime, timedelta, timezone


class Period(str, enum.Enum):
    """Analytics reporting windows ending now."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


def _shift_months(moment: datetime, months: int) -> datetime:
    year = moment.year + (moment.month - 1 + months) // 12
    month = (moment.month - 1 + months) % 12 + 1
    day = min(moment.day, monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def period_start(period: Period, now: datetime | None = None) -> datetime:
    """
    Resolve the start of a reporting window.

    Month and year are calendar shifts (clamped to the last valid day),
    day and week are fixed offsets.
    """
    now = now or datetime.now(timezone.utc)
    if period == Period.DAY:
        return now - timedelta(days=1)
    if period == Period.WEEK:
        return now - timedelta(days=7)
    if period == Period.MONTH:
        return _shift_months(now, -1)
    return _shift_months(now, -12)


def period_range(period: Period, now: datetime | None = None) -> tuple[datetime, datetime]:
    """Return (start, end) for a period ending at now."""
    now = now or datetime.now(timezone.utc)
    return period_start(period, now), now


def last_n_days(n: int, now: datetime | None = None) -> list[str]:
    """ISO dates for the last n days, oldest first, including today."""
    today = (now or datetime.now(timezone.utc)).date()
    return [(today - timedelta(days=offset)).isoformat() for offset in range(n - 1, -1, -1)]
