# rythm/core/analysis/averages.py
from typing import Iterable

from rythm.core.models.data_models import Entry
from rythm.core.models.output_models import WindowStats
from rythm.utils.numeric import finite_or_none, valid_sleep_or_none


def calculate_averages(entries: Iterable[Entry]) -> WindowStats:
    """
    Average sleep and mood over a list of entries.

    Each metric is summed over its own finite values and divided by its own
    count, so a day with only a sleep value still counts towards the sleep
    average. ``count`` is the number of entries that carry both metrics.
    """
    sleep_sum = 0.0
    sleep_count = 0
    mood_sum = 0.0
    mood_count = 0
    complete_count = 0

    for entry in entries:
        sleep = valid_sleep_or_none(entry.sleep_hours)
        mood = finite_or_none(entry.mood)
        if sleep is not None:
            sleep_sum += sleep
            sleep_count += 1
        if mood is not None:
            mood_sum += mood
            mood_count += 1
        if sleep is not None and mood is not None:
            complete_count += 1

    return WindowStats(
        sleep=sleep_sum / sleep_count if sleep_count else None,
        mood=mood_sum / mood_count if mood_count else None,
        count=complete_count,
    )
