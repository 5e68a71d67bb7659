"""
Analysis module for sleep and mood insights.

This module contains the functions that turn a list of daily entries into
averages, correlation labels, trend series, tag drivers and the combined
StatsResult.
"""

from rythm.core.analysis.averages import calculate_averages
from rythm.core.analysis.correlation import get_correlation_insight
from rythm.core.analysis.sleep_consistency import get_sleep_consistency_badges, get_sleep_consistency_label
from rythm.core.analysis.tag_insights import build_tag_drivers, build_tag_insights, build_tag_sleep_drivers
from rythm.core.analysis.windowing import TrendBuilder, build_weekly_trend_series
from rythm.core.analysis.stats import build_stats

__all__ = [
    'calculate_averages',
    'get_correlation_insight',
    'get_sleep_consistency_label',
    'get_sleep_consistency_badges',
    'build_tag_insights',
    'build_tag_drivers',
    'build_tag_sleep_drivers',
    'TrendBuilder',
    'build_weekly_trend_series',
    'build_stats',
]
