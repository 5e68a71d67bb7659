"""
Pytest fixtures for the Rythm insights tests.
"""

import sys
from datetime import date, timedelta
from pathlib import Path

import pytest

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from rythm.core.models.data_models import Entry  # noqa: E402

FIXED_TODAY = date(2026, 1, 31)


@pytest.fixture
def today():
    """A fixed reference day (a Saturday) so trailing windows are stable."""
    return FIXED_TODAY


@pytest.fixture
def day_key(today):
    """Return the YYYY-MM-DD key for the day ``days_ago`` days before today."""
    def _day_key(days_ago):
        return (today - timedelta(days=days_ago)).isoformat()
    return _day_key


@pytest.fixture
def make_entry():
    """Factory for entries with sensible defaults; keyword arguments override fields."""
    def _make_entry(**overrides):
        values = {
            'id': 'entry',
            'user_id': 'user',
            'entry_date': '2026-01-01',
            'sleep_hours': 8,
            'mood': 4,
            'note': None,
            'tags': None,
            'is_complete': True,
            'completed_at': '2026-01-01T00:00:00Z',
            'created_at': '2026-01-01T00:00:00Z',
        }
        values.update(overrides)
        return Entry(**values)
    return _make_entry


@pytest.fixture
def make_series(make_entry):
    """Build entries on consecutive days starting at ``start`` from (sleep, mood) pairs."""
    def _make_series(pairs, start=date(2026, 1, 1), **overrides):
        return [
            make_entry(
                id=f'entry-{index}',
                entry_date=(start + timedelta(days=index)).isoformat(),
                sleep_hours=sleep,
                mood=mood,
                **overrides,
            )
            for index, (sleep, mood) in enumerate(pairs)
        ]
    return _make_series
