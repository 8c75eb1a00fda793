"""
Day Counting Module

Whole-day date arithmetic for interest segments. Every date is a plain
datetime.date, so there is no time-of-day or timezone component to normalise.

Interest for a segment is annualised on the number of days in the calendar
year of the segment's *start* date, even when the segment straddles
December 31st. This actual/actual approximation is intentional: it is how the
court interest tables have always been worked, and changing it would change
financial results.
"""

from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Any, Optional

from .money import HUNDRED, ZERO

ONE_DAY = timedelta(days=1)


def parse_iso_date(value: Any) -> date:
    """
    Coerce a date-like value to datetime.date

    Accepts date, datetime (time of day dropped), an ISO "YYYY-MM-DD" string
    or a full ISO datetime string. Trailing text is rejected, not truncated.

    Raises:
        ValueError: If the value is not a valid calendar date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            text = value.strip()
            if len(text) > 10:
                return datetime.fromisoformat(text).date()
            return date.fromisoformat(text)
        except ValueError:
            raise ValueError(f"Invalid date '{value}', expected YYYY-MM-DD")
    raise ValueError(f"Invalid date {value!r}, expected YYYY-MM-DD")


def to_date_or_none(value: Any) -> Optional[date]:
    """Lenient variant of parse_iso_date for UI inputs that may be blank"""
    if value is None or value == "":
        return None
    try:
        return parse_iso_date(value)
    except ValueError:
        return None


def format_date(value: Optional[date]) -> str:
    """ISO display format, empty string for a missing date"""
    return value.isoformat() if value else ""


def day_before(value: date) -> date:
    return value - ONE_DAY


def day_after(value: date) -> date:
    return value + ONE_DAY


def is_leap_year(year: int) -> bool:
    """Gregorian rule: divisible by 4, not by 100 unless by 400"""
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_year(year: int) -> int:
    return 366 if is_leap_year(year) else 365


def inclusive_days(start: Optional[date], end: Optional[date]) -> int:
    """
    Count the days in [start, end], both ends included

    Returns 0 when either date is missing or end is before start.
    """
    if not isinstance(start, date) or not isinstance(end, date):
        return 0
    if end < start:
        return 0
    return (end - start).days + 1


def simple_interest(principal: Decimal, rate: Decimal, days: int, year: int) -> Decimal:
    """
    principal x rate/100 x days/days_in_year(year)

    Multiplications happen before the single division to keep Decimal exact
    for as long as possible.
    """
    if days <= 0 or principal <= ZERO or rate == ZERO:
        return ZERO
    return (principal * rate * Decimal(days)) / (HUNDRED * Decimal(days_in_year(year)))
