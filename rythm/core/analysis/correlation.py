# rythm/core/analysis/correlation.py
from typing import Iterable, List, Optional, Tuple

import numpy as np

from rythm.core.models.data_models import Entry
from rythm.core.models.output_models import CorrelationInsight
from rythm.utils.constants import (
    correlation_direction_dead_zone,
    correlation_directions,
    correlation_labels,
    correlation_strong_label,
)
from rythm.utils.numeric import finite_or_none, valid_sleep_or_none


def paired_values(entries: Iterable[Entry]) -> List[Tuple[float, float]]:
    """(sleep, mood) pairs for entries where both metrics are finite"""
    pairs = []
    for entry in entries:
        sleep = valid_sleep_or_none(entry.sleep_hours)
        mood = finite_or_none(entry.mood)
        if sleep is not None and mood is not None:
            pairs.append((sleep, mood))
    return pairs


def pearson_correlation(entries: Iterable[Entry]) -> Optional[float]:
    """Pearson r between sleep and mood, or None when undefined"""
    pairs = paired_values(entries)
    if len(pairs) < 2:
        return None

    values = np.asarray(pairs, dtype=float)
    sleep_deltas = values[:, 0] - values[:, 0].mean()
    mood_deltas = values[:, 1] - values[:, 1].mean()

    numerator = float(np.sum(sleep_deltas * mood_deltas))
    denominator = float(np.sqrt(np.sum(sleep_deltas ** 2) * np.sum(mood_deltas ** 2)))
    if denominator == 0:
        return None
    return numerator / denominator


def correlation_label(correlation: float) -> str:
    magnitude = abs(correlation)
    for upper_bound, label in correlation_labels:
        if magnitude < upper_bound:
            return label
    return correlation_strong_label


def correlation_direction(correlation: float) -> str:
    if correlation > correlation_direction_dead_zone:
        return correlation_directions['positive']
    if correlation < -correlation_direction_dead_zone:
        return correlation_directions['negative']
    return correlation_directions['none']


def get_correlation_insight(entries: Iterable[Entry]) -> CorrelationInsight:
    """
    Describe how sleep and mood move together.

    Only entries with both metrics take part. With fewer than two of them, or
    with no variance on either axis, the correlation is undefined and both
    label and direction are None.
    """
    correlation = pearson_correlation(entries)
    if correlation is None:
        return CorrelationInsight(label=None, direction=None)

    return CorrelationInsight(
        label=correlation_label(correlation),
        direction=correlation_direction(correlation),
    )
