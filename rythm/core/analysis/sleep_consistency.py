# rythm/core/analysis/sleep_consistency.py
"""
Sleep consistency analysis.

Provides the consistency label derived from the spread of sleep hours and the
set of sleep-consistency badges computed over the date-sorted history.
"""

import logging
from collections import Counter
from typing import Iterable, List, Optional

from rythm.core.models.data_models import Entry
from rythm.core.models.output_models import Badge
from rythm.utils.constants import (
    balanced_sleep_range,
    balanced_week_length,
    monthly_milestone_entries,
    rest_reward_hours,
    rest_reward_window,
    sleep_consistency_fallback_label,
    sleep_consistency_labels,
)
from rythm.utils.dates import is_next_day
from rythm.utils.numeric import population_std_dev, valid_sleep_or_none

logger = logging.getLogger(__name__)


def get_sleep_consistency_std_dev(entries: Iterable[Entry]) -> Optional[float]:
    """Population standard deviation of finite sleep hours (None below two values)"""
    values = [valid_sleep_or_none(entry.sleep_hours) for entry in entries]
    return population_std_dev(value for value in values if value is not None)


def get_sleep_consistency_label(entries: Iterable[Entry]) -> Optional[str]:
    std_dev = get_sleep_consistency_std_dev(entries)
    if std_dev is None:
        return None
    for upper_bound, label in sleep_consistency_labels:
        if std_dev <= upper_bound:
            return label
    return sleep_consistency_fallback_label


def _sorted_by_date(entries: Iterable[Entry]) -> List[Entry]:
    return sorted(entries, key=lambda entry: entry.entry_date)


def _count_nights_at_least(entries: List[Entry], hours: float) -> int:
    count = 0
    for entry in entries:
        sleep = valid_sleep_or_none(entry.sleep_hours)
        if sleep is not None and sleep >= hours:
            count += 1
    return count


def _longest_logging_streak(entries: List[Entry]) -> int:
    best = 0
    current = 0
    previous_date = None
    for entry in entries:
        current = current + 1 if is_next_day(previous_date, entry.entry_date) else 1
        best = max(best, current)
        previous_date = entry.entry_date
    return best


def _longest_balanced_run(entries: List[Entry]) -> int:
    """Longest run of calendar-consecutive entries with sleep inside the balanced range"""
    low, high = balanced_sleep_range
    best = 0
    current = 0
    previous_date = None
    for entry in entries:
        sleep = valid_sleep_or_none(entry.sleep_hours)
        if sleep is None or not (low <= sleep <= high):
            current = 0
            previous_date = None
            continue
        current = current + 1 if is_next_day(previous_date, entry.entry_date) else 1
        best = max(best, current)
        previous_date = entry.entry_date
    return best


def _busiest_month_count(entries: List[Entry]) -> int:
    per_month = Counter(entry.entry_date[:7] for entry in entries)
    return max(per_month.values(), default=0)


def _best_rest_window(entries: List[Entry]) -> float:
    """Best summed sleep over any run of consecutive entries by position"""
    if len(entries) < rest_reward_window:
        return 0.0
    hours = [valid_sleep_or_none(entry.sleep_hours) or 0.0 for entry in entries]
    return max(
        sum(hours[start:start + rest_reward_window])
        for start in range(len(hours) - rest_reward_window + 1)
    )


def _progress_badge(badge_id, title, description, value, target, unit) -> Badge:
    unlocked = value >= target
    progress = min(value, target)
    return Badge(
        id=badge_id,
        title=title,
        description=description,
        unlocked=unlocked,
        progress_text=f"{progress:g}/{target} {unit}",
        progress_value=progress,
        progress_total=target,
        current_tier_index=1 if unlocked else 0,
        tier_count=1,
    )


def _badge_sort_key(badge: Badge):
    fraction = badge.progress_value / badge.progress_total if badge.progress_total else 0
    return (-fraction, not badge.unlocked, badge.title)


def get_sleep_consistency_badges(entries: Iterable[Entry]) -> List[Badge]:
    """
    Build the sleep-consistency badges for an entry history.

    Returns the badges ordered closest-to-complete first, unlocked before
    locked on ties, then alphabetically by title.
    """
    sorted_entries = _sorted_by_date(entries)
    longest_streak = _longest_logging_streak(sorted_entries)
    total_entries = len(sorted_entries)
    low, high = balanced_sleep_range

    badges = [
        _progress_badge(
            'sleep-7h-5', 'Solid Seven', 'Sleep 7+ hours on 5 nights.',
            _count_nights_at_least(sorted_entries, 7), 5, 'nights',
        ),
        _progress_badge(
            'sleep-8h-3', 'Eight Is Great', 'Sleep 8+ hours on 3 nights.',
            _count_nights_at_least(sorted_entries, 8), 3, 'nights',
        ),
        _progress_badge(
            'sleep-9h-1', 'Deep Recharge', 'Sleep 9+ hours in a single night.',
            _count_nights_at_least(sorted_entries, 9), 1, 'night',
        ),
        _progress_badge(
            'streak-3', '3-Day Streak', 'Log 3 days in a row.',
            longest_streak, 3, 'days',
        ),
        _progress_badge(
            'consistent-week', 'Consistent Week', 'Log 7 days in a row.',
            longest_streak, 7, 'days',
        ),
        _progress_badge(
            'sleep-balanced-week', 'Balanced Week',
            f"{balanced_week_length} days in a row with {low:g}-{high:g} hours of sleep.",
            _longest_balanced_run(sorted_entries), balanced_week_length, 'days',
        ),
        _progress_badge(
            'sleep-monthly-milestone', 'Monthly Milestone',
            f"Log {monthly_milestone_entries} days in one calendar month.",
            _busiest_month_count(sorted_entries), monthly_milestone_entries, 'days',
        ),
        _progress_badge(
            'century-club', 'Century Club', 'Log 100 days.',
            total_entries, 100, 'days',
        ),
        _progress_badge(
            'half-year-habit', 'Half-Year Habit', 'Log 180 days.',
            total_entries, 180, 'days',
        ),
        _progress_badge(
            'rest-reward', 'Rest Reward',
            f"Sleep {rest_reward_hours}+ hours across {rest_reward_window} logged nights in a row.",
            _best_rest_window(sorted_entries), rest_reward_hours, 'hours',
        ),
    ]

    logger.debug(f"Built {len(badges)} sleep consistency badges from {total_entries} entries")
    return sorted(badges, key=_badge_sort_key)
