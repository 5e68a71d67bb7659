# rythm/core/reporting/report_data.py
"""
Data behind the periodic report.

The report compares a recent window (30 days by default) against the window
of equal length immediately before it, and adds all-time context. Rendering
is left to the consumer.
"""

import logging
from collections import defaultdict
from datetime import date, timedelta
from typing import List, Optional, Sequence

from rythm.core.analysis.averages import calculate_averages
from rythm.core.analysis.correlation import get_correlation_insight
from rythm.core.analysis.sleep_consistency import get_sleep_consistency_label
from rythm.core.analysis.tag_insights import (
    DEFAULT_TAG_DRIVER_MIN_COUNT,
    build_tag_drivers,
    build_tag_insights,
    build_tag_sleep_drivers,
)
from rythm.core.models.data_models import Entry
from rythm.core.models.output_models import MoodDip, ReportData, ReportRange, WeeklySummary
from rythm.utils.dates import format_long_date, parse_entry_date, resolve_today
from rythm.utils.numeric import delta_or_none, finite_or_none, population_std_dev, valid_sleep_or_none

logger = logging.getLogger(__name__)

REPORT_TAG_LIMIT = 5
WEEKLY_SUMMARY_COUNT = 4


def get_report_range(range_days: int, today: Optional[date] = None) -> ReportRange:
    """Recent window ending today and the equal-length window before it"""
    end = resolve_today(today)
    start = end - timedelta(days=range_days - 1)
    return ReportRange(
        start=start,
        end=end,
        prior_start=start - timedelta(days=range_days),
        prior_end=start - timedelta(days=1),
    )


def get_entries_in_range(entries: Sequence[Entry], start: date, end: date) -> List[Entry]:
    return [entry for entry in entries if start <= parse_entry_date(entry.entry_date) <= end]


def _week_start(day: date) -> date:
    # Weeks start on Sunday
    return day - timedelta(days=(day.weekday() + 1) % 7)


def build_weekly_summaries(recent_entries: Sequence[Entry]) -> List[WeeklySummary]:
    """Sunday-start weekly averages for the last four weeks that have entries"""
    buckets = defaultdict(list)
    for entry in sorted(recent_entries, key=lambda entry: entry.entry_date):
        buckets[_week_start(parse_entry_date(entry.entry_date))].append(entry)

    summaries = []
    for week_start in sorted(buckets):
        week_entries = buckets[week_start]
        averages = calculate_averages(week_entries)
        sleeps = [valid_sleep_or_none(entry.sleep_hours) for entry in week_entries]
        week_end = week_start + timedelta(days=6)
        summaries.append(WeeklySummary(
            label=f"{format_long_date(week_start)} - {format_long_date(week_end)}",
            avg_sleep=averages.sleep,
            avg_mood=averages.mood,
            sleep_std_dev=population_std_dev(value for value in sleeps if value is not None),
        ))
    return summaries[-WEEKLY_SUMMARY_COUNT:]


def find_best_day(recent_entries: Sequence[Entry]) -> Optional[Entry]:
    """First entry with the highest mood"""
    best = None
    for entry in recent_entries:
        mood = finite_or_none(entry.mood)
        if mood is None:
            continue
        if best is None or mood > best.mood:
            best = entry
    return best


def find_best_night(recent_entries: Sequence[Entry]) -> Optional[Entry]:
    """First entry with the longest sleep"""
    best = None
    best_sleep = None
    for entry in recent_entries:
        sleep = valid_sleep_or_none(entry.sleep_hours)
        if sleep is None:
            continue
        if best is None or sleep > best_sleep:
            best = entry
            best_sleep = sleep
    return best


def find_biggest_mood_dip(recent_entries: Sequence[Entry]) -> Optional[MoodDip]:
    """Largest mood drop between neighbouring logged days"""
    if len(recent_entries) < 2:
        return None

    ordered = sorted(recent_entries, key=lambda entry: entry.entry_date)
    dip = None
    for previous, current in zip(ordered, ordered[1:]):
        previous_mood = finite_or_none(previous.mood)
        current_mood = finite_or_none(current.mood)
        if previous_mood is None or current_mood is None:
            continue
        delta = current_mood - previous_mood
        if delta < 0 and (dip is None or abs(delta) > abs(dip.delta)):
            dip = MoodDip(from_entry=previous, to_entry=current, delta=delta)
    return dip


def build_report_data(entries: Sequence[Entry], recent_entries: Sequence[Entry],
                      prior_entries: Sequence[Entry], tag_limit: int = REPORT_TAG_LIMIT,
                      tag_driver_min_count: int = DEFAULT_TAG_DRIVER_MIN_COUNT) -> ReportData:
    """
    Assemble the report for a recent window.

    Args:
        entries: Full entry history, used for the all-time sections
        recent_entries: Entries inside the report window
        prior_entries: Entries inside the preceding window of equal length
        tag_limit: Number of tags listed in the tag tables
        tag_driver_min_count: Minimum entries a tag needs to be listed as a driver

    Returns:
        ReportData with None for any figure the data cannot support
    """
    logger.debug(
        f"Building report data: {len(recent_entries)} recent, {len(prior_entries)} prior, "
        f"{len(entries)} total entries"
    )
    recent = calculate_averages(recent_entries)
    prior = calculate_averages(prior_entries)
    all_time = calculate_averages(entries)

    return ReportData(
        recent_entries=list(recent_entries),
        prior_entries=list(prior_entries),
        monthly_consistency=get_sleep_consistency_label(recent_entries),
        monthly_correlation=get_correlation_insight(recent_entries).label,
        monthly_tags=build_tag_insights(recent_entries, tag_limit),
        all_time_tags=build_tag_insights(entries, tag_limit),
        all_time_tag_drivers=build_tag_drivers(entries, tag_driver_min_count),
        all_time_tag_sleep_drivers=build_tag_sleep_drivers(entries, tag_driver_min_count),
        avg_sleep=recent.sleep,
        avg_mood=recent.mood,
        prior_avg_sleep=prior.sleep,
        prior_avg_mood=prior.mood,
        sleep_delta=delta_or_none(recent.sleep, prior.sleep),
        mood_delta=delta_or_none(recent.mood, prior.mood),
        best_day=find_best_day(recent_entries),
        best_night=find_best_night(recent_entries),
        biggest_mood_dip=find_biggest_mood_dip(recent_entries),
        weekly_summaries=build_weekly_summaries(recent_entries),
        all_time_avg_sleep=all_time.sleep,
        all_time_avg_mood=all_time.mood,
    )
