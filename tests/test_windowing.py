"""Tests for windows, trend series and threshold analysis."""

from datetime import timedelta

import pytest

from rythm.core.analysis.windowing import (
    TrendBuilder,
    build_weekly_trend_series,
    mood_by_threshold,
    personal_sleep_threshold,
    weekday_averages,
)
from rythm.core.models.output_models import ThresholdMoodSplit, TrendPoint


def test_build_window_is_inclusive_of_both_ends(make_entry, day_key, today):
    entries = [
        make_entry(entry_date=day_key(0), sleep_hours=8, mood=4),
        make_entry(entry_date=day_key(6), sleep_hours=6, mood=2),
        make_entry(entry_date=day_key(7), sleep_hours=10, mood=5),
    ]
    builder = TrendBuilder(entries, today=today)

    window = builder.build_window(7)
    assert (window.sleep, window.mood, window.count) == (7, 3, 2)

    previous = builder.build_window(7, offset_days=7)
    assert (previous.sleep, previous.mood, previous.count) == (10, 5, 1)


def test_window_averages_cover_fixed_windows(make_entry, day_key, today):
    entries = [make_entry(entry_date=day_key(100), sleep_hours=7, mood=3)]
    averages = TrendBuilder(entries, today=today).window_averages()
    assert averages.last7.count == 0
    assert averages.last90.sleep is None
    assert averages.last365.sleep == 7


def test_trend_series_is_null_filled_and_oldest_first(make_entry, day_key, today):
    entries = [make_entry(entry_date=day_key(0), sleep_hours=8, mood=4)]
    points = TrendBuilder(entries, today=today).build_trend_series(30)

    assert len(points) == 30
    assert points[0].date == day_key(29)
    assert points[-1] == TrendPoint(date=day_key(0), sleep=8, mood=4)
    assert all(point.sleep is None and point.mood is None for point in points[:-1])


def test_weekly_trend_series_buckets_by_seven():
    points = [
        TrendPoint(date='2026-01-01', sleep=6, mood=4),
        TrendPoint(date='2026-01-02', sleep=7, mood=5),
        TrendPoint(date='2026-01-03', sleep=8, mood=None),
        TrendPoint(date='2026-01-04', sleep=None, mood=6),
        TrendPoint(date='2026-01-05', sleep=9, mood=7),
        TrendPoint(date='2026-01-06', sleep=7, mood=5),
        TrendPoint(date='2026-01-07', sleep=8, mood=6),
        TrendPoint(date='2026-01-08', sleep=5, mood=3),
    ]
    assert build_weekly_trend_series(points) == [
        TrendPoint(date='2026-01-01', sleep=7.5, mood=5.5),
        TrendPoint(date='2026-01-08', sleep=5, mood=3),
    ]


def test_weekly_trend_series_empty():
    assert build_weekly_trend_series([]) == []


def test_rhythm_score_needs_five_sleep_values(make_series, today):
    entries = make_series([(8, 4)] * 4, start=today - timedelta(days=3))
    assert TrendBuilder(entries, today=today).rhythm_score() is None


@pytest.mark.parametrize('sleeps, expected', [
    ([7, 7, 7, 7, 7], 100),
    ([6, 8, 6, 8, 6, 8], 67),
    ([2, 8, 2, 8, 2, 8], 0),
])
def test_rhythm_score(make_series, today, sleeps, expected):
    entries = make_series([(sleep, 3) for sleep in sleeps], start=today - timedelta(days=len(sleeps) - 1))
    assert TrendBuilder(entries, today=today).rhythm_score() == expected


def test_streak_counts_any_entry(make_entry, day_key, today):
    entries = [
        make_entry(id='a', entry_date=day_key(2)),
        make_entry(id='b', entry_date=day_key(1), mood=None, is_complete=False, completed_at=None),
        make_entry(id='c', entry_date=day_key(0)),
    ]
    assert TrendBuilder(entries, today=today).streak() == 3


def test_streak_stops_at_gap(make_entry, day_key, today):
    entries = [make_entry(entry_date=day_key(0)), make_entry(entry_date=day_key(2))]
    assert TrendBuilder(entries, today=today).streak() == 1


def test_streak_walks_back_from_latest_entry(make_entry, day_key, today):
    entries = [make_entry(entry_date=day_key(10)), make_entry(entry_date=day_key(11))]
    assert TrendBuilder(entries, today=today).streak() == 2
    assert TrendBuilder([], today=today).streak() == 0


def test_streak_uses_injected_formatter(make_entry, day_key, today):
    entries = [make_entry(entry_date=day_key(0)), make_entry(entry_date=day_key(1))]
    builder = TrendBuilder(entries, date_formatter=lambda value: value.strftime('%d/%m/%Y'), today=today)
    assert builder.streak() == 0


def test_rolling_series_has_one_point_per_day(make_entry, day_key, today):
    entries = [make_entry(entry_date=day_key(10), sleep_hours=6, mood=3)]
    points = TrendBuilder(entries, today=today).rolling_series()

    assert len(points) == 90
    assert points[-1].date == day_key(0)
    assert points[-1].sleep7 is None
    assert points[-1].sleep30 == 6
    assert points[-1].mood90 == 3


def test_rolling_series_matches_windows(make_series, today):
    entries = make_series([(6 + index % 3, 2 + index % 4) for index in range(40)],
                          start=today - timedelta(days=45))
    builder = TrendBuilder(entries, today=today)
    points = builder.rolling_series()
    for offset, point in enumerate(reversed(points[-20:])):
        assert point.sleep7 == builder.build_window(7, offset_days=offset).sleep
        assert point.mood30 == builder.build_window(30, offset_days=offset).mood


def test_rolling_summaries_compare_with_previous_window(make_entry, day_key, today):
    entries = [
        make_entry(entry_date=day_key(0), sleep_hours=8, mood=4),
        make_entry(entry_date=day_key(7), sleep_hours=6, mood=3),
    ]
    summaries = {summary.days: summary for summary in TrendBuilder(entries, today=today).rolling_summaries()}

    assert set(summaries) == {7, 30, 90}
    assert summaries[7].sleep == 8
    assert summaries[7].sleep_delta == 2
    assert summaries[7].mood_delta == 1
    assert summaries[30].sleep == 7
    assert summaries[30].sleep_delta is None


def test_mood_by_threshold_ignores_incomplete_rows(make_entry, day_key):
    entries = [
        make_entry(id=f'entry-{index}', entry_date=day_key(index),
                   sleep_hours=8 if index < 3 else 6, mood=5 if index < 3 else 2)
        for index in range(5)
    ]
    entries.append(make_entry(id='draft', entry_date=day_key(6), sleep_hours=10, mood=None, is_complete=False))

    assert mood_by_threshold(entries, 7) == ThresholdMoodSplit(high=5, low=2)


def test_mood_by_threshold_needs_five_entries(make_entry):
    entries = [make_entry(sleep_hours=8, mood=5)] * 4
    assert mood_by_threshold(entries, 7) == ThresholdMoodSplit(high=None, low=None)


def test_personal_sleep_threshold_averages_best_days(make_entry):
    pairs = [(8, 5), (8.5, 5), (7.5, 4), (6, 3), (6, 3), (5, 2), (5, 2), (5, 1), (4, 1), (4, 1)]
    entries = [make_entry(sleep_hours=sleep, mood=mood) for sleep, mood in pairs]
    assert personal_sleep_threshold(entries) == 8.0


@pytest.mark.parametrize('top_sleeps, expected', [
    ([7, 7, 7.3], 7.0),
    ([7.3, 7.3, 7.2], 7.5),
    ([11, 11, 11], 10.0),
    ([3, 3, 3], 4.0),
])
def test_personal_sleep_threshold_rounds_and_clamps(make_entry, top_sleeps, expected):
    entries = [make_entry(sleep_hours=sleep, mood=5) for sleep in top_sleeps]
    entries += [make_entry(sleep_hours=6, mood=1), make_entry(sleep_hours=6, mood=1)]
    assert personal_sleep_threshold(entries) == expected


def test_personal_sleep_threshold_needs_five_complete_entries(make_entry):
    entries = [make_entry(sleep_hours=8, mood=5)] * 4 + [make_entry(sleep_hours=8, mood=None)]
    assert personal_sleep_threshold(entries) is None


def test_weekday_averages_use_complete_entries(make_entry):
    entries = [
        make_entry(entry_date='2026-01-26', sleep_hours=8, mood=4),
        make_entry(entry_date='2026-01-19', sleep_hours=6, mood=2),
        make_entry(entry_date='2026-01-27', sleep_hours=8, mood=None),
    ]
    points = {point.label: point for point in weekday_averages(entries)}

    assert list(points) == ['Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat', 'Sun']
    assert (points['Mon'].avg_sleep, points['Mon'].avg_mood, points['Mon'].observation_count) == (7, 3, 2)
    assert points['Tue'].observation_count == 0
    assert points['Tue'].avg_sleep is None


@pytest.mark.parametrize('filler_count, expected', [
    (6, 8.0),
    (7, 7.0),
])
def test_personal_sleep_threshold_top_share_rounds_up(make_entry, filler_count, expected):
    entries = [make_entry(sleep_hours=8, mood=5) for _ in range(3)]
    entries.append(make_entry(sleep_hours=4, mood=4))
    entries += [make_entry(sleep_hours=6, mood=1) for _ in range(filler_count)]
    assert personal_sleep_threshold(entries) == expected
