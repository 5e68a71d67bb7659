"""
Numeric helpers for tolerating missing or invalid metric values.

Non-finite or missing values are excluded from sums and counts, never
coerced to zero.
"""

from typing import Iterable, Optional

import numpy as np

from rythm.utils.constants import sleep_hours_range


def finite_or_none(value) -> Optional[float]:
    """Return ``value`` as a float when it is a finite number, else None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if np.isfinite(number) else None


def valid_sleep_or_none(value) -> Optional[float]:
    """Finite sleep hours inside the accepted range, else None."""
    hours = finite_or_none(value)
    low, high = sleep_hours_range
    if hours is None or not (low <= hours <= high):
        return None
    return hours


def mean_or_none(values: Iterable[float]) -> Optional[float]:
    """Plain arithmetic mean, or None for an empty input."""
    values = list(values)
    if not values:
        return None
    return sum(values) / len(values)


def delta_or_none(current: Optional[float], previous: Optional[float]) -> Optional[float]:
    if current is None or previous is None:
        return None
    return current - previous


def population_std_dev(values: Iterable[float]) -> Optional[float]:
    """Population (divide-by-N) standard deviation; None below two values."""
    values = list(values)
    if len(values) < 2:
        return None
    return float(np.std(np.asarray(values, dtype=float)))


def round_half_up(value: float) -> int:
    return int(np.floor(value + 0.5))
