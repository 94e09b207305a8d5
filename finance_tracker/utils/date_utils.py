"""Date manipulation utilities"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current instant as an aware UTC datetime"""
    return datetime.now(timezone.utc)


def month_start(year: int, month: int) -> datetime:
    """First instant of a calendar month in UTC"""
    return datetime(year, month, 1, tzinfo=timezone.utc)


def next_month_start(year: int, month: int) -> datetime:
    """First instant of the month after (year, month); December rolls over"""
    if month == 12:
        return month_start(year + 1, 1)
    return month_start(year, month + 1)


def as_utc(value: datetime) -> datetime:
    """Normalise a datetime to aware UTC, treating naive values as UTC"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
