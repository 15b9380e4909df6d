from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta


def _reference_day(reference=None) -> date:
    if reference is None:
        return date.today()
    if isinstance(reference, datetime):
        return reference.date()
    if isinstance(reference, date):
        return reference
    return date.fromisoformat(str(reference)[:10])


def format_date(value) -> str:
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return date.fromisoformat(str(value)[:10]).isoformat()


def today(reference=None) -> str:
    return _reference_day(reference).isoformat()


def yesterday(reference=None) -> str:
    return days_ago(1, reference)


def days_ago(n: int, reference=None) -> str:
    return (_reference_day(reference) - timedelta(days=n)).isoformat()


def shift_day(day: str, days: int) -> str:
    return (date.fromisoformat(day) + timedelta(days=days)).isoformat()


def days_between(d1: str, d2: str) -> int:
    return abs((date.fromisoformat(d2) - date.fromisoformat(d1)).days)


def is_today(day: str, reference=None) -> bool:
    return day == today(reference)


def is_yesterday(day: str, reference=None) -> bool:
    return day == yesterday(reference)


def week_dates(offset: int = 0, reference=None) -> list[str]:
    current = _reference_day(reference)
    # weekday() is Monday=0, weeks here start on Sunday
    start = current - timedelta(days=(current.weekday() + 1) % 7) + timedelta(weeks=offset)
    return [(start + timedelta(days=i)).isoformat() for i in range(7)]


def month_dates(year: int, month: int) -> list[str]:
    days_in_month = calendar.monthrange(year, month)[1]
    return [date(year, month, day).isoformat() for day in range(1, days_in_month + 1)]


def days_remaining(deadline, reference=None) -> int:
    return (date.fromisoformat(format_date(deadline)) - _reference_day(reference)).days


def format_hour(hour: int) -> str:
    if hour == 0:
        return "12 AM"
    if hour < 12:
        return f"{hour} AM"
    if hour == 12:
        return "12 PM"
    return f"{hour - 12} PM"
