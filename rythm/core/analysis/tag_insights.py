# rythm/core/analysis/tag_insights.py
from typing import Callable, Dict, Iterable, List, Optional

from rythm.core.models.data_models import Entry
from rythm.core.models.output_models import TagDriver, TagInsight, TagSleepDriver
from rythm.utils.constants import default_values
from rythm.utils.numeric import finite_or_none, valid_sleep_or_none

DEFAULT_TAG_DRIVER_MIN_COUNT = default_values['tag_driver_min_count']


def build_tag_insights(entries: Iterable[Entry], limit: Optional[int] = None) -> List[TagInsight]:
    """
    Per-tag sleep and mood averages, most frequent tags first.

    Sleep and mood are averaged independently over the finite values seen
    on entries carrying the tag; ``count`` is the number of tag occurrences.
    """
    aggregates: Dict[str, Dict[str, float]] = {}
    for entry in entries:
        sleep = valid_sleep_or_none(entry.sleep_hours)
        mood = finite_or_none(entry.mood)
        for tag in entry.tags or []:
            key = tag.strip()
            if not key:
                continue
            current = aggregates.setdefault(
                key, {'sleep_sum': 0.0, 'sleep_count': 0, 'mood_sum': 0.0, 'mood_count': 0, 'count': 0}
            )
            if sleep is not None:
                current['sleep_sum'] += sleep
                current['sleep_count'] += 1
            if mood is not None:
                current['mood_sum'] += mood
                current['mood_count'] += 1
            current['count'] += 1

    insights = [
        TagInsight(
            tag=tag,
            sleep=data['sleep_sum'] / data['sleep_count'] if data['sleep_count'] else None,
            mood=data['mood_sum'] / data['mood_count'] if data['mood_count'] else None,
            count=data['count'],
        )
        for tag, data in aggregates.items()
    ]
    insights.sort(key=lambda insight: insight.count, reverse=True)

    return insights[:limit] if limit is not None else insights


def _with_without_averages(entries: Iterable[Entry], metric: Callable[[Entry], Optional[float]]):
    """Per-tag (count, with average, without average) over entries where ``metric`` is finite"""
    aggregates: Dict[str, Dict[str, float]] = {}
    overall_sum = 0.0
    overall_count = 0

    for entry in entries:
        value = metric(entry)
        if value is None:
            continue
        overall_sum += value
        overall_count += 1

        for tag in dict.fromkeys(tag.strip() for tag in entry.tags or []):
            if not tag:
                continue
            current = aggregates.setdefault(tag, {'sum': 0.0, 'count': 0})
            current['sum'] += value
            current['count'] += 1

    results = []
    for tag, data in aggregates.items():
        value_with = data['sum'] / data['count'] if data['count'] else None
        without_count = overall_count - data['count']
        value_without = (overall_sum - data['sum']) / without_count if without_count > 0 else None
        delta = value_with - value_without if value_with is not None and value_without is not None else None
        results.append((tag, data['count'], value_with, value_without, delta))
    return results


def _filter_and_rank(results, min_count: int):
    kept = [result for result in results if result[1] >= min_count and result[4] is not None]
    # Stable sort keeps first-seen order among equal deltas
    kept.sort(key=lambda result: result[4], reverse=True)
    return kept


def build_tag_drivers(entries: Iterable[Entry], min_count: int = DEFAULT_TAG_DRIVER_MIN_COUNT) -> List[TagDriver]:
    """Tags whose presence shifts mood, largest positive shift first"""
    results = _with_without_averages(entries, lambda entry: finite_or_none(entry.mood))
    return [
        TagDriver(tag=tag, count=count, mood_with=with_avg, mood_without=without_avg, delta=delta)
        for tag, count, with_avg, without_avg, delta in _filter_and_rank(results, min_count)
    ]


def build_tag_sleep_drivers(
    entries: Iterable[Entry], min_count: int = DEFAULT_TAG_DRIVER_MIN_COUNT
) -> List[TagSleepDriver]:
    """Tags whose presence shifts sleep hours, largest positive shift first"""
    results = _with_without_averages(entries, lambda entry: valid_sleep_or_none(entry.sleep_hours))
    return [
        TagSleepDriver(tag=tag, count=count, sleep_with=with_avg, sleep_without=without_avg, delta=delta)
        for tag, count, with_avg, without_avg, delta in _filter_and_rank(results, min_count)
    ]
