"""Tests for CSV export and sleep-hours formatting."""

import pytest

from rythm.core.reporting.csv_export import EXPORT_COLUMNS, export_entries_csv, read_entries_csv
from rythm.utils.sleep_hours import format_sleep_hours, parse_sleep_hours


@pytest.mark.parametrize('value, expected', [
    (7, '7h'),
    (7.5, '7h 30m'),
    (6.25, '6h 15m'),
    (7.999, '8h'),
    (0, '0h'),
    (None, ''),
    (float('nan'), ''),
])
def test_format_sleep_hours(value, expected):
    assert format_sleep_hours(value) == expected


@pytest.mark.parametrize('text, expected', [
    ('7h', 7),
    ('7h 30m', 7.5),
    (' 6h 15m ', 6.25),
    ('', None),
])
def test_parse_sleep_hours(text, expected):
    assert parse_sleep_hours(text) == expected


@pytest.mark.parametrize('text', ['7', '7.5h', '7h 75m', 'seven'])
def test_parse_sleep_hours_rejects_malformed_values(text):
    with pytest.raises(ValueError):
        parse_sleep_hours(text)


def test_sleep_hours_survive_formatting_within_a_minute():
    for value in (5.1, 6.33, 7.77, 8.0, 11.95):
        assert parse_sleep_hours(format_sleep_hours(value)) == pytest.approx(value, abs=1 / 60)


def test_export_nothing_returns_none(tmp_path):
    path = tmp_path / 'entries.csv'
    assert export_entries_csv([], str(path)) is None
    assert not path.exists()


def test_export_writes_quoted_rows(make_entry, tmp_path):
    path = tmp_path / 'exports' / 'entries.csv'
    entries = [
        make_entry(entry_date='2026-01-30', sleep_hours=7.5, mood=None, note=None),
        make_entry(entry_date='2026-01-31', sleep_hours=8, mood=5, note='Note, with "quotes"'),
    ]

    assert export_entries_csv(entries, str(path)) == str(path)
    lines = path.read_text().splitlines()
    assert lines[0] == ','.join(EXPORT_COLUMNS)
    assert lines[1] == '2026-01-30,7h 30m,,'
    assert lines[2] == '2026-01-31,8h,5,"Note, with ""quotes"""'


def test_exported_file_reads_back(make_entry, tmp_path):
    path = str(tmp_path / 'entries.csv')
    entries = [
        make_entry(entry_date='2026-01-30', sleep_hours=6.75, mood=2, note='Late night'),
        make_entry(entry_date='2026-01-31', sleep_hours=None, mood=4, note=None),
    ]
    export_entries_csv(entries, path)

    restored = read_entries_csv(path, 'user')
    assert [entry.entry_date for entry in restored] == ['2026-01-30', '2026-01-31']
    assert restored[0].sleep_hours == 6.75
    assert restored[0].mood == 2
    assert restored[0].note == 'Late night'
    assert restored[1].sleep_hours is None
    assert restored[1].note is None


def test_read_rejects_missing_columns(tmp_path):
    path = tmp_path / 'entries.csv'
    path.write_text('date,mood\n2026-01-31,4\n')
    with pytest.raises(ValueError):
        read_entries_csv(str(path), 'user')
