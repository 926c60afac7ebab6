"""Date manipulation utilities"""

from datetime import date, timedelta

from dateutil.relativedelta import relativedelta


def add_months(from_date: date, months: int) -> date:
    """Shift by whole calendar months, clamping to the target month's last day (Jan 31 + 1 -> Feb 28/29)"""
    return from_date + relativedelta(months=months)


def days_inclusive(start: date, end: date) -> int:
    """Number of calendar days from start to end, counting both ends"""
    return (end - start).days + 1


def add_days(from_date: date, days: int) -> date:
    return from_date + timedelta(days=days)
