# rythm/core/analysis/stats.py
import logging
from datetime import date
from typing import Iterable, Optional

from rythm.core.analysis.correlation import get_correlation_insight, paired_values
from rythm.core.analysis.sleep_consistency import get_sleep_consistency_badges, get_sleep_consistency_label
from rythm.core.analysis.tag_insights import (
    DEFAULT_TAG_DRIVER_MIN_COUNT,
    build_tag_drivers,
    build_tag_insights,
    build_tag_sleep_drivers,
)
from rythm.core.analysis.windowing import (
    TrendBuilder,
    build_weekly_trend_series,
    mood_by_threshold,
    personal_sleep_threshold,
    weekday_averages,
)
from rythm.core.badges.tiered_badges import get_tiered_badges
from rythm.core.models.data_models import Entry
from rythm.core.models.output_models import StatCounts, StatsResult, TrendSeries
from rythm.utils.constants import default_values
from rythm.utils.dates import DateFormatter, format_local_date

logger = logging.getLogger(__name__)


def build_stats(entries: Iterable[Entry], sleep_threshold: float,
                date_formatter: DateFormatter = format_local_date, *,
                today: Optional[date] = None,
                tag_driver_min_count: int = DEFAULT_TAG_DRIVER_MIN_COUNT) -> StatsResult:
    """
    Compute every derived statistic for an entry history.

    Args:
        entries: The user's entries, in any order
        sleep_threshold: Hours used for the fixed mood-by-sleep split
        date_formatter: Maps a date to the ``YYYY-MM-DD`` key used by entries
        today: Reference day for all trailing windows (defaults to the local date)
        tag_driver_min_count: Minimum entries a tag needs to be reported as a driver

    Returns:
        A new StatsResult; identical inputs always give equal results
    """
    entries = list(entries)
    builder = TrendBuilder(entries, date_formatter, today=today)
    logger.debug(f"Building stats for {len(entries)} entries as of {builder.today.isoformat()}")

    correlation = get_correlation_insight(entries)
    personal_threshold = personal_sleep_threshold(entries)

    trend_windows = {
        f'last{days}': builder.build_trend_series(days)
        for days in default_values['trend_series_windows']
    }
    weekly_windows = {
        key: build_weekly_trend_series(points)
        for key, points in trend_windows.items()
    }

    stat_counts = StatCounts(
        total_entries=len(entries),
        complete_entries=len(paired_values(entries)),
    )

    return StatsResult(
        window_averages=builder.window_averages(),
        rhythm_score=builder.rhythm_score(),
        streak=builder.streak(),
        sleep_consistency_label=get_sleep_consistency_label(entries),
        sleep_consistency_badges=get_sleep_consistency_badges(entries),
        badges=get_tiered_badges(entries),
        correlation_label=correlation.label,
        correlation_direction=correlation.direction,
        mood_by_sleep_threshold=mood_by_threshold(entries, sleep_threshold),
        personal_sleep_threshold=personal_threshold,
        # The personal threshold already requires enough paired entries
        mood_by_personal_threshold=mood_by_threshold(entries, personal_threshold, min_entries=0),
        trend_series=TrendSeries(**trend_windows),
        weekly_trend_series=TrendSeries(**weekly_windows),
        rolling_series=builder.rolling_series(),
        rolling_summaries=builder.rolling_summaries(),
        tag_insights=build_tag_insights(entries),
        tag_drivers=build_tag_drivers(entries, tag_driver_min_count),
        tag_sleep_drivers=build_tag_sleep_drivers(entries, tag_driver_min_count),
        weekday_averages=weekday_averages(entries),
        stat_counts=stat_counts,
    )
