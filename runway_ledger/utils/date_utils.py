"""Date manipulation utilities"""

from datetime import date, datetime, timedelta
from typing import List

from runway_ledger.domain.exceptions import InvalidDateError


def generate_date_range(start: date, end: date) -> List[date]:
    """Generate list of dates from start to end (inclusive)"""
    days = (end - start).days + 1
    return [start + timedelta(days=i) for i in range(days)]


def parse_date(value) -> date:
    """
    Parse an ISO ``YYYY-MM-DD`` string (or pass through a plain date).

    Raises:
        InvalidDateError: value is not a calendar date
    """
    if isinstance(value, datetime):
        raise InvalidDateError(f"Expected a calendar date, got datetime {value.isoformat()}")
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError as e:
            raise InvalidDateError(f"Invalid date: {value!r}") from e
    raise InvalidDateError(f"Invalid date: {value!r}")
