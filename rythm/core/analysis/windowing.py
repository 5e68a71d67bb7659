# rythm/core/analysis/windowing.py
"""
Windowed averages and trend series.

All window math runs on entries annotated with the calendar date parsed from
``entry_date``. Windows are inclusive ranges of whole days ending at
``today`` (optionally shifted back by an offset).
"""

import logging
from collections import defaultdict
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, Sequence

import numpy as np

from rythm.core.analysis.averages import calculate_averages
from rythm.core.analysis.correlation import paired_values
from rythm.core.models.data_models import Entry
from rythm.core.models.output_models import (
    RollingPoint,
    RollingSummary,
    ThresholdMoodSplit,
    TrendPoint,
    WeekdayAveragePoint,
    WindowAverages,
    WindowStats,
)
from rythm.utils.constants import default_values, weekday_labels
from rythm.utils.dates import DateFormatter, format_local_date, iter_days, parse_entry_date, resolve_today
from rythm.utils.numeric import (
    delta_or_none,
    finite_or_none,
    mean_or_none,
    population_std_dev,
    round_half_up,
    valid_sleep_or_none,
)

logger = logging.getLogger(__name__)


class TrendBuilder:
    """Builds windows, trend series and rolling averages for one entry history"""

    def __init__(self, entries: Iterable[Entry], date_formatter: DateFormatter = format_local_date,
                 today: Optional[date] = None):
        self.entries = list(entries)
        self.date_formatter = date_formatter
        self.today = resolve_today(today)

        # Index entries by calendar day once; every window reads from here
        self.entries_by_date: Dict[date, List[Entry]] = defaultdict(list)
        for entry in self.entries:
            self.entries_by_date[parse_entry_date(entry.entry_date)].append(entry)

    def entries_between(self, start: date, end: date) -> List[Entry]:
        """Entries dated within [start, end], oldest day first"""
        if start > end:
            return []
        selected = []
        for day in iter_days(start, end):
            selected.extend(self.entries_by_date.get(day, ()))
        return selected

    def window_entries(self, days: int, offset_days: int = 0) -> List[Entry]:
        end = self.today - timedelta(days=offset_days)
        start = end - timedelta(days=days - 1)
        return self.entries_between(start, end)

    def build_window(self, days: int, offset_days: int = 0) -> WindowStats:
        """Averages over [today - offset - days + 1, today - offset]"""
        return calculate_averages(self.window_entries(days, offset_days))

    def window_averages(self) -> WindowAverages:
        last7, last30, last90, last365 = (
            self.build_window(days) for days in default_values['fixed_windows']
        )
        return WindowAverages(last7=last7, last30=last30, last90=last90, last365=last365)

    def rhythm_score(self) -> Optional[int]:
        """
        0-100 score for how regular sleep has been over the trailing 30 days.

        Needs at least five finite sleep values; the population standard
        deviation is normalised against a 3 hour ceiling.
        """
        window = self.window_entries(default_values['rhythm_window_days'])
        values = [valid_sleep_or_none(entry.sleep_hours) for entry in window]
        values = [value for value in values if value is not None]
        if len(values) < default_values['rhythm_min_entries']:
            return None

        max_std_dev = default_values['rhythm_max_std_dev']
        std_dev = population_std_dev(values)
        score = float(np.clip(1 - min(max_std_dev, std_dev) / max_std_dev, 0.0, 1.0))
        return round_half_up(score * 100)

    def streak(self) -> int:
        """Consecutive days with any entry, walking back from the latest entry date"""
        if not self.entries:
            return 0
        date_keys = {entry.entry_date for entry in self.entries}
        latest = max(self.entries, key=lambda entry: entry.entry_date).entry_date

        streak = 0
        current = parse_entry_date(latest)
        while self.date_formatter(current) in date_keys:
            streak += 1
            current -= timedelta(days=1)
        return streak

    def build_trend_series(self, days: int) -> List[TrendPoint]:
        """One point per calendar day of the trailing window, oldest first, null-filled"""
        start = self.today - timedelta(days=days - 1)
        points = []
        for day in iter_days(start, self.today):
            averages = calculate_averages(self.entries_by_date.get(day, ()))
            points.append(TrendPoint(date=self.date_formatter(day), sleep=averages.sleep, mood=averages.mood))
        return points

    def rolling_series(self, days: Optional[int] = None) -> List[RollingPoint]:
        """Trailing 7/30/90-day averages ending on each of the trailing ``days`` days"""
        days = days or default_values['rolling_series_days']
        start = self.today - timedelta(days=days - 1)
        points = []
        for day in iter_days(start, self.today):
            values = {}
            for window in default_values['rolling_windows']:
                averages = calculate_averages(
                    self.entries_between(day - timedelta(days=window - 1), day)
                )
                values[f'sleep{window}'] = averages.sleep
                values[f'mood{window}'] = averages.mood
            points.append(RollingPoint(date=self.date_formatter(day), **values))
        return points

    def rolling_summaries(self) -> List[RollingSummary]:
        """Each rolling window compared against the window immediately before it"""
        summaries = []
        for window in default_values['rolling_windows']:
            current = self.build_window(window)
            previous = self.build_window(window, offset_days=window)
            summaries.append(RollingSummary(
                days=window,
                sleep=current.sleep,
                mood=current.mood,
                sleep_delta=delta_or_none(current.sleep, previous.sleep),
                mood_delta=delta_or_none(current.mood, previous.mood),
            ))
        return summaries


def build_weekly_trend_series(points: Sequence[TrendPoint],
                              bucket_size: int = default_values['weekly_bucket_size']) -> List[TrendPoint]:
    """Chunk daily points into consecutive groups, labelled with each group's first date"""
    weekly = []
    for start in range(0, len(points), bucket_size):
        chunk = points[start:start + bucket_size]
        weekly.append(TrendPoint(
            date=chunk[0].date,
            sleep=mean_or_none(point.sleep for point in chunk if point.sleep is not None),
            mood=mean_or_none(point.mood for point in chunk if point.mood is not None),
        ))
    return weekly


def mood_by_threshold(entries: Sequence[Entry], threshold: Optional[float],
                      min_entries: int = default_values['mood_by_threshold_min_entries']) -> ThresholdMoodSplit:
    """Average mood on nights at or above ``threshold`` hours versus below it"""
    if threshold is None or len(entries) < min_entries:
        return ThresholdMoodSplit(high=None, low=None)

    high, low = [], []
    for sleep, mood in paired_values(entries):
        (high if sleep >= threshold else low).append(mood)
    return ThresholdMoodSplit(high=mean_or_none(high), low=mean_or_none(low))


def personal_sleep_threshold(entries: Iterable[Entry]) -> Optional[float]:
    """
    Sleep duration associated with the user's best days.

    Averages the sleep of the top 30% of days by mood (at least three),
    rounded to the nearest half hour and clamped to a plausible range.
    """
    pairs = paired_values(entries)
    if len(pairs) < default_values['personal_threshold_min_entries']:
        return None

    # Stable sort: ties keep their incoming order
    ranked = sorted(pairs, key=lambda pair: -pair[1])
    # Integer ceiling of the top share
    top_share = -(-len(ranked) * default_values['personal_threshold_top_percent'] // 100)
    top_count = max(default_values['personal_threshold_min_top'], top_share)
    average_sleep = mean_or_none(sleep for sleep, _ in ranked[:top_count])

    lower, upper = default_values['personal_threshold_bounds']
    rounded = round_half_up(average_sleep * 2) / 2
    return float(min(upper, max(lower, rounded)))


def weekday_averages(entries: Iterable[Entry]) -> List[WeekdayAveragePoint]:
    """Average sleep and mood per weekday (Mon..Sun) over entries carrying both metrics"""
    buckets = {label: [] for label in weekday_labels}
    for entry in entries:
        sleep = valid_sleep_or_none(entry.sleep_hours)
        mood = finite_or_none(entry.mood)
        if sleep is None or mood is None:
            continue
        label = weekday_labels[parse_entry_date(entry.entry_date).weekday()]
        buckets[label].append((sleep, mood))

    return [
        WeekdayAveragePoint(
            label=label,
            avg_sleep=mean_or_none(sleep for sleep, _ in values),
            avg_mood=mean_or_none(mood for _, mood in values),
            observation_count=len(values),
        )
        for label, values in buckets.items()
    ]
