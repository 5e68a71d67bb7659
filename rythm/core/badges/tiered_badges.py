# rythm/core/badges/tiered_badges.py
"""
Achievement badges.

Tiered badges climb through five ascending thresholds; non-incremental
badges are simply locked or unlocked. Consecutive-day checks compare whole
calendar days throughout.
"""

from datetime import timedelta
from typing import Iterable, List, NamedTuple, Optional, Sequence

from rythm.core.models.data_models import Entry
from rythm.core.models.output_models import Badge
from rythm.utils.constants import (
    balanced_sleep_range,
    balanced_week_length,
    max_level_text,
    monthly_milestone_entries,
    mood_good_threshold,
    non_incremental_badge_definitions,
    peak_mood,
    tiered_badge_definitions,
)
from rythm.utils.dates import is_next_day, iter_days, parse_entry_date
from rythm.utils.numeric import finite_or_none, valid_sleep_or_none


class TierState(NamedTuple):
    current_tier_index: int
    current_tier_label: Optional[str]
    next_threshold: Optional[int]
    next_tier_label: Optional[str]
    unlocked: bool
    progress_value: float
    progress_total: float
    progress_text: str


def _unit_for(target, unit_label: str) -> str:
    # "1/1 night", not "1/1 nights"
    if target == 1 and unit_label.endswith('s'):
        return unit_label[:-1]
    return unit_label


def get_tier_state(value, thresholds: Sequence[int], tier_labels: Sequence[str], unit_label: str) -> TierState:
    unlocked = value >= thresholds[0]
    tiers_reached = len([threshold for threshold in thresholds if value >= threshold])
    current_tier_index = min(tiers_reached - 1, len(thresholds) - 1) if unlocked else 0

    if current_tier_index + 1 < len(thresholds):
        next_threshold = thresholds[current_tier_index + 1]
        next_tier_label = tier_labels[current_tier_index + 1]
    else:
        next_threshold = None
        next_tier_label = None

    if not unlocked:
        first = thresholds[0]
        return TierState(
            current_tier_index=current_tier_index,
            current_tier_label=tier_labels[current_tier_index],
            next_threshold=next_threshold,
            next_tier_label=next_tier_label,
            unlocked=False,
            progress_value=min(value, first),
            progress_total=first,
            progress_text=f"{min(value, first)}/{first} {_unit_for(first, unit_label)}",
        )

    if next_threshold is not None:
        progress_value = min(value, next_threshold)
        progress_total = next_threshold
        progress_text = f"{progress_value}/{next_threshold} {_unit_for(next_threshold, unit_label)}"
    else:
        progress_value = value
        progress_total = max(value, 1)
        progress_text = max_level_text

    return TierState(
        current_tier_index=current_tier_index,
        current_tier_label=tier_labels[current_tier_index],
        next_threshold=next_threshold,
        next_tier_label=next_tier_label,
        unlocked=True,
        progress_value=progress_value,
        progress_total=progress_total,
        progress_text=progress_text,
    )


def build_tiered_badge(badge_id: str, value) -> Badge:
    title, thresholds, tier_labels, unit_label = tiered_badge_definitions[badge_id]
    state = get_tier_state(value, thresholds, tier_labels, unit_label)

    if not state.unlocked:
        description = f"{tier_labels[0]}."
    elif state.next_tier_label is not None:
        description = f"{state.next_tier_label}."
    elif state.current_tier_label is not None:
        description = f"{state.current_tier_label}."
    else:
        description = 'Max level reached.'

    return Badge(
        id=badge_id,
        title=title,
        description=description,
        unlocked=state.unlocked,
        progress_text=state.progress_text,
        progress_value=state.progress_value,
        progress_total=state.progress_total,
        current_tier_index=state.current_tier_index,
        tier_count=len(thresholds),
    )


def build_non_incremental_badge(badge_id: str, unlocked: bool) -> Badge:
    title, description = non_incremental_badge_definitions[badge_id]
    return Badge(
        id=badge_id,
        title=title,
        description=description,
        unlocked=unlocked,
        progress_text=max_level_text if unlocked else '0/1',
        progress_value=1 if unlocked else 0,
        progress_total=1,
        current_tier_index=1 if unlocked else 0,
        tier_count=1,
    )


def _sorted_by_date(entries: Iterable[Entry]) -> List[Entry]:
    return sorted(entries, key=lambda entry: entry.entry_date)


def _is_good_mood(entry: Entry) -> bool:
    mood = finite_or_none(entry.mood)
    return mood is not None and mood >= mood_good_threshold


# Incremental badges

def get_logger_badge(entries: Sequence[Entry]) -> Badge:
    return build_tiered_badge('logger-beast', len(entries))


def get_eight_hour_elite_badge(entries: Sequence[Entry]) -> Badge:
    count = 0
    for entry in entries:
        hours = valid_sleep_or_none(entry.sleep_hours)
        if hours is not None and hours >= 8:
            count += 1
    return build_tiered_badge('eight-hour-elite', count)


def get_events_explorer_badge(entries: Sequence[Entry]) -> Badge:
    unique_tags = set()
    for entry in entries:
        for tag in entry.tags or []:
            normalized = tag.strip().lower()
            if normalized:
                unique_tags.add(normalized)
    return build_tiered_badge('events-explorer', len(unique_tags))


def get_events_master_badge(entries: Sequence[Entry]) -> Badge:
    total = sum(len(entry.tags or []) for entry in entries)
    return build_tiered_badge('events-master', total)


def get_peak_days_badge(entries: Sequence[Entry]) -> Badge:
    count = len([entry for entry in entries if entry.mood == peak_mood])
    return build_tiered_badge('peak-days', count)


def get_reflector_badge(entries: Sequence[Entry]) -> Badge:
    count = len([entry for entry in entries if (entry.note or '').strip()])
    return build_tiered_badge('reflector', count)


def _mood_steady_runs(entries: Sequence[Entry]):
    """(best, current) runs of consecutive days with a good mood"""
    best = 0
    current = 0
    previous_date = None
    for entry in _sorted_by_date(entries):
        if _is_good_mood(entry):
            current = current + 1 if is_next_day(previous_date, entry.entry_date) else 1
            best = max(best, current)
        else:
            current = 0
        previous_date = entry.entry_date
    return best, current


def get_mood_steady_badge(entries: Sequence[Entry]) -> Badge:
    """
    Tiers are earned on the best-ever run of good-mood days, while the progress
    shown counts the live run towards the next tier.
    """
    best_streak, current_streak = _mood_steady_runs(entries)
    badge = build_tiered_badge('mood-steady', best_streak)
    _, thresholds, _, _ = tiered_badge_definitions['mood-steady']

    if not badge.unlocked:
        first = thresholds[0]
        progress_value = min(current_streak, first)
        return badge.model_copy(update={
            'progress_value': progress_value,
            'progress_total': first,
            'progress_text': f"{progress_value}/{first} days",
        })

    next_index = badge.current_tier_index + 1
    if next_index < len(thresholds):
        progress_total = thresholds[next_index]
        progress_value = min(current_streak, progress_total)
        progress_text = f"{progress_value}/{progress_total} {_unit_for(progress_total, 'days')}"
    else:
        progress_total = badge.progress_total
        progress_value = min(current_streak, progress_total)
        progress_text = max_level_text

    return badge.model_copy(update={
        'progress_value': progress_value,
        'progress_total': progress_total,
        'progress_text': progress_text,
    })


# Non-incremental badges

def has_balanced_week(entries: Sequence[Entry]) -> bool:
    """True when some run of 7 calendar days all logged sleep inside the balanced range"""
    low, high = balanced_sleep_range
    sleep_by_date = {}
    for entry in entries:
        hours = valid_sleep_or_none(entry.sleep_hours)
        if hours is not None:
            sleep_by_date[parse_entry_date(entry.entry_date)] = hours

    for start in sorted(sleep_by_date):
        end = start + timedelta(days=balanced_week_length - 1)
        if all(
            day in sleep_by_date and low <= sleep_by_date[day] <= high
            for day in iter_days(start, end)
        ):
            return True
    return False


def has_monthly_milestone(entries: Sequence[Entry]) -> bool:
    per_month = {}
    for entry in entries:
        month = entry.entry_date[:7]
        per_month[month] = per_month.get(month, 0) + 1
    return any(count >= monthly_milestone_entries for count in per_month.values())


def has_bounce_back(entries: Sequence[Entry]) -> bool:
    """
    Two or more good-mood days in a row after two or more low-mood days.

    The low run only grows while days are consecutive and the previous day was
    low. It is kept across good days, so a good run that starts right after a
    qualifying low run (or after a gap following one) triggers success as soon
    as it reaches two days.
    """
    mood_entries = _sorted_by_date(
        entry for entry in entries if finite_or_none(entry.mood) is not None
    )
    if len(mood_entries) < 4:
        return False

    low_run = 0
    high_run = 0
    previous_date = None
    previous_was_low = False
    for entry in mood_entries:
        consecutive = is_next_day(previous_date, entry.entry_date)
        if _is_good_mood(entry):
            high_run = high_run + 1 if consecutive else 1
            if low_run >= 2 and high_run >= 2:
                return True
            previous_was_low = False
        else:
            low_run = low_run + 1 if consecutive and previous_was_low else 1
            high_run = 0
            previous_was_low = True
        previous_date = entry.entry_date
    return False


def get_balanced_week_badge(entries: Sequence[Entry]) -> Badge:
    return build_non_incremental_badge('balanced-week', has_balanced_week(entries))


def get_monthly_milestone_badge(entries: Sequence[Entry]) -> Badge:
    return build_non_incremental_badge('monthly-milestone', has_monthly_milestone(entries))


def get_bounce_back_badge(entries: Sequence[Entry]) -> Badge:
    return build_non_incremental_badge('bounce-back', has_bounce_back(entries))


def get_tiered_badges(entries: Iterable[Entry]) -> List[Badge]:
    entries = list(entries)
    return [
        get_logger_badge(entries),
        get_eight_hour_elite_badge(entries),
        get_events_explorer_badge(entries),
        get_events_master_badge(entries),
        get_peak_days_badge(entries),
        get_reflector_badge(entries),
        get_mood_steady_badge(entries),
        get_balanced_week_badge(entries),
        get_monthly_milestone_badge(entries),
        get_bounce_back_badge(entries),
    ]
