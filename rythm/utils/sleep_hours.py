import re

from rythm.utils.numeric import finite_or_none, round_half_up

_SLEEP_HOURS_PATTERN = re.compile(r'^\s*(\d+)h(?:\s+(\d+)m)?\s*$')


def format_sleep_hours(value) -> str:
    """Format decimal hours as ``7h`` or ``7h 30m``, rounded to the nearest minute."""
    hours_value = finite_or_none(value)
    if hours_value is None:
        return ''
    total_minutes = round_half_up(hours_value * 60)
    hours, minutes = divmod(total_minutes, 60)
    if minutes == 0:
        return f"{hours}h"
    return f"{hours}h {minutes}m"


def parse_sleep_hours(text: str):
    """
    Parse a value produced by format_sleep_hours back into decimal hours.

    Returns None for an empty string; raises ValueError for anything else
    that does not look like ``<h>h`` or ``<h>h <m>m``.
    """
    if text is None or not str(text).strip():
        return None
    match = _SLEEP_HOURS_PATTERN.match(str(text))
    if not match:
        raise ValueError(f"Invalid sleep hours value: {text!r}")
    hours = int(match.group(1))
    minutes = int(match.group(2) or 0)
    if minutes >= 60:
        raise ValueError(f"Invalid minutes in sleep hours value: {text!r}")
    return hours + minutes / 60
