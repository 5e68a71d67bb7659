"""
Date helpers shared by the analysis modules.

Entry dates are ISO ``YYYY-MM-DD`` strings. All day arithmetic is done on
``datetime.date`` values, so every date is already midnight-normalised.
"""

from datetime import date, datetime, timedelta
from typing import Callable, Iterator, Optional

DateFormatter = Callable[[date], str]

ENTRY_DATE_FORMAT = '%Y-%m-%d'


def parse_entry_date(entry_date: str) -> date:
    """Parse an entry's ``YYYY-MM-DD`` date. Raises ValueError on malformed input."""
    return datetime.strptime(entry_date, ENTRY_DATE_FORMAT).date()


def format_local_date(value: date) -> str:
    """Default date formatter: ``YYYY-MM-DD`` in local time."""
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def format_long_date(value: date) -> str:
    """Format a date as e.g. ``Jan 5, 2026``."""
    return f"{value.strftime('%b')} {value.day}, {value.year}"


def local_today() -> date:
    return datetime.now().astimezone().date()


def resolve_today(today: Optional[date] = None) -> date:
    return today if today is not None else local_today()


def days_between(start: date, end: date) -> int:
    """Whole days from ``start`` to ``end``."""
    return (end - start).days


def is_next_day(previous_entry_date: Optional[str], entry_date: str) -> bool:
    """True when ``entry_date`` falls exactly one calendar day after ``previous_entry_date``."""
    if previous_entry_date is None:
        return False
    return days_between(parse_entry_date(previous_entry_date), parse_entry_date(entry_date)) == 1


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every day from ``start`` to ``end`` inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)
