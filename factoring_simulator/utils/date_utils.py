"""Date manipulation utilities"""

from datetime import date, datetime
from decimal import Decimal

from factoring_simulator.domain.exceptions import ValidationError

DAYS_PER_MONTH = Decimal(30)


def parse_iso_date(value: str | date) -> date:
    """Parse an ISO-8601 date or datetime string into a calendar date"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        pass
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except (AttributeError, ValueError):
        raise ValidationError(f"Invalid ISO date: {value!r}")


def days_between(start: date, end: date) -> int:
    """Whole calendar days from start to end (negative if end is earlier)"""
    return (end - start).days


def term_in_months(days: int) -> Decimal:
    """Continuous term in 30-day months (45 days -> 1.5)"""
    return Decimal(days) / DAYS_PER_MONTH
