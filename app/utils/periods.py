# app/utils/periods.py
"""
Calendar helpers shared by the bill and report code.

A *period key* is a ``YYYY-MM`` string naming one calendar month; it is what
bill payments are deduplicated on.
"""
import calendar
import re
from datetime import date, datetime, timedelta, timezone
from typing import Tuple, Union

from app.core.exceptions import ValidationError

PERIOD_KEY_RE = re.compile(r"^(\d{4})-(\d{2})$")


def period_key(day: Union[date, datetime]) -> str:
    return f"{day.year:04d}-{day.month:02d}"


def to_naive_utc(moment: datetime) -> datetime:
    """Offset-aware datetimes are converted to UTC; naive ones pass through."""
    if moment.tzinfo is not None:
        return moment.astimezone(timezone.utc).replace(tzinfo=None)
    return moment


def parse_period_key(key: str) -> Tuple[int, int]:
    match = PERIOD_KEY_RE.match(key or "")
    if not match:
        raise ValidationError(f"Invalid period '{key}', expected YYYY-MM")
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise ValidationError(f"Invalid month in period '{key}'")
    return year, month


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def month_bounds(year: int, month: int) -> Tuple[date, date]:
    """First and last day of the month."""
    return date(year, month, 1), date(year, month, days_in_month(year, month))


def period_bounds(key: str) -> Tuple[date, date]:
    return month_bounds(*parse_period_key(key))


def previous_period(key: str) -> str:
    year, month = parse_period_key(key)
    if month == 1:
        return f"{year - 1:04d}-12"
    return f"{year:04d}-{month - 1:02d}"


def period_label(key: str) -> str:
    """``2024-03`` -> ``March 2024``"""
    year, month = parse_period_key(key)
    return f"{calendar.month_name[month]} {year}"


def week_bounds(today: date, start_of_week: int = 1) -> Tuple[date, date]:
    """
    First and last day of the week containing ``today``.

    ``start_of_week`` counts from Sunday (0) to Saturday (6).
    """
    # date.weekday() is Monday=0, shift it so Sunday=0
    sunday_based = (today.weekday() + 1) % 7
    start = today - timedelta(days=(sunday_based - start_of_week) % 7)
    return start, start + timedelta(days=6)


def day_of(value: Union[date, datetime]) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value
