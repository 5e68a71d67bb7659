"""Tests for report ranges and report data."""

from datetime import date, timedelta

import pytest

from rythm.core.reporting.report_data import (
    build_report_data,
    build_weekly_summaries,
    find_best_day,
    find_best_night,
    find_biggest_mood_dip,
    get_entries_in_range,
    get_report_range,
)


def test_report_range(today):
    report_range = get_report_range(30, today)
    assert report_range.start == date(2026, 1, 2)
    assert report_range.end == date(2026, 1, 31)
    assert report_range.prior_start == date(2025, 12, 3)
    assert report_range.prior_end == date(2026, 1, 1)


def test_entries_in_range_are_inclusive(make_entry):
    entries = [make_entry(entry_date=day) for day in ('2026-01-01', '2026-01-02', '2026-01-31', '2026-02-01')]
    selected = get_entries_in_range(entries, date(2026, 1, 2), date(2026, 1, 31))
    assert [entry.entry_date for entry in selected] == ['2026-01-02', '2026-01-31']


def test_best_day_and_night_keep_the_first_maximum(make_entry):
    entries = [
        make_entry(id='a', entry_date='2026-01-10', sleep_hours=9, mood=5),
        make_entry(id='b', entry_date='2026-01-11', sleep_hours=9, mood=5),
        make_entry(id='c', entry_date='2026-01-12', sleep_hours=None, mood=None),
    ]
    assert find_best_day(entries).id == 'a'
    assert find_best_night(entries).id == 'a'
    assert find_best_day([]) is None


def test_biggest_mood_dip(make_entry):
    entries = [
        make_entry(id='a', entry_date='2026-01-12', mood=5),
        make_entry(id='b', entry_date='2026-01-13', mood=2),
        make_entry(id='c', entry_date='2026-01-10', mood=3),
        make_entry(id='d', entry_date='2026-01-11', mood=4),
    ]
    dip = find_biggest_mood_dip(entries)
    assert dip.from_entry.id == 'a'
    assert dip.to_entry.id == 'b'
    assert dip.delta == -3


def test_no_mood_dip_when_mood_only_rises(make_series):
    assert find_biggest_mood_dip(make_series([(7, 2), (7, 3), (7, 4)])) is None
    assert find_biggest_mood_dip(make_series([(7, 2)])) is None


def test_weekly_summaries_keep_last_four_sunday_weeks(make_series, today):
    entries = make_series([(7, 3)] * 30, start=today - timedelta(days=29))
    summaries = build_weekly_summaries(entries)

    assert len(summaries) == 4
    assert summaries[0].label == 'Jan 4, 2026 - Jan 10, 2026'
    assert summaries[-1].label == 'Jan 25, 2026 - Jan 31, 2026'
    assert summaries[-1].avg_sleep == 7
    assert summaries[-1].sleep_std_dev == 0


def test_weekly_summary_single_night_has_no_std_dev(make_entry):
    [summary] = build_weekly_summaries([make_entry(entry_date='2026-01-31', sleep_hours=6, mood=3)])
    assert summary.avg_sleep == 6
    assert summary.sleep_std_dev is None


def test_build_report_data(make_series, today):
    history = make_series([(6, 2)] * 30 + [(8, 4)] * 30, start=today - timedelta(days=59))
    history[-1] = history[-1].model_copy(update={'tags': ['walk'], 'mood': 5, 'sleep_hours': 9})
    report_range = get_report_range(30, today)
    recent = get_entries_in_range(history, report_range.start, report_range.end)
    prior = get_entries_in_range(history, report_range.prior_start, report_range.prior_end)

    report = build_report_data(history, recent, prior)

    assert len(report.recent_entries) == 30
    assert len(report.prior_entries) == 30
    assert report.prior_avg_sleep == 6
    assert report.prior_avg_mood == 2
    assert report.sleep_delta > 2
    assert report.best_day.entry_date == '2026-01-31'
    assert report.best_night.entry_date == '2026-01-31'
    assert report.biggest_mood_dip is None
    assert [tag.tag for tag in report.monthly_tags] == ['walk']
    assert [tag.tag for tag in report.all_time_tags] == ['walk']
    assert report.all_time_tag_drivers == []
    assert report.monthly_consistency == 'Very consistent'
    assert report.all_time_avg_sleep == pytest.approx(421 / 60)


def test_build_report_data_empty():
    report = build_report_data([], [], [])
    assert report.avg_sleep is None
    assert report.sleep_delta is None
    assert report.monthly_consistency is None
    assert report.monthly_correlation is None
    assert report.best_day is None
    assert report.biggest_mood_dip is None
    assert report.weekly_summaries == []
