# rythm/core/models/output_models.py
"""
Derived structures returned by the insights engine.

None of these are persisted; every call that produces them builds a fresh
instance.
"""

from datetime import date

from pydantic import BaseModel, Field
from typing import List, Optional

from rythm.core.models.data_models import Entry


# Averages
class WindowStats(BaseModel):
    sleep: Optional[float] = None
    mood: Optional[float] = None
    count: int = 0


class WindowAverages(BaseModel):
    last7: WindowStats
    last30: WindowStats
    last90: WindowStats
    last365: WindowStats


class ThresholdMoodSplit(BaseModel):
    high: Optional[float] = None
    low: Optional[float] = None


class CorrelationInsight(BaseModel):
    label: Optional[str] = None
    direction: Optional[str] = None


# Trends
class TrendPoint(BaseModel):
    date: str
    sleep: Optional[float] = None
    mood: Optional[float] = None


class TrendSeries(BaseModel):
    last30: List[TrendPoint] = Field(default_factory=list)
    last90: List[TrendPoint] = Field(default_factory=list)
    last365: List[TrendPoint] = Field(default_factory=list)


class RollingPoint(BaseModel):
    date: str
    sleep7: Optional[float] = None
    sleep30: Optional[float] = None
    sleep90: Optional[float] = None
    mood7: Optional[float] = None
    mood30: Optional[float] = None
    mood90: Optional[float] = None


class RollingSummary(BaseModel):
    days: int
    sleep: Optional[float] = None
    mood: Optional[float] = None
    sleep_delta: Optional[float] = None
    mood_delta: Optional[float] = None


class WeekdayAveragePoint(BaseModel):
    label: str
    avg_sleep: Optional[float] = None
    avg_mood: Optional[float] = None
    observation_count: int = 0


# Tags
class TagInsight(BaseModel):
    tag: str
    sleep: Optional[float] = None
    mood: Optional[float] = None
    count: int


class TagDriver(BaseModel):
    tag: str
    count: int
    mood_with: Optional[float] = None
    mood_without: Optional[float] = None
    delta: Optional[float] = None


class TagSleepDriver(BaseModel):
    tag: str
    count: int
    sleep_with: Optional[float] = None
    sleep_without: Optional[float] = None
    delta: Optional[float] = None


# Badges
class Badge(BaseModel):
    id: str
    title: str
    description: str
    unlocked: bool
    progress_text: Optional[str] = None
    progress_value: float
    progress_total: float
    current_tier_index: int = 0
    tier_count: int = 1


class StatCounts(BaseModel):
    total_entries: int = 0
    complete_entries: int = 0


class StatsResult(BaseModel):
    """Aggregate of every derived statistic for one entry history."""

    window_averages: WindowAverages
    rhythm_score: Optional[int] = None
    streak: int = 0
    sleep_consistency_label: Optional[str] = None
    sleep_consistency_badges: List[Badge] = Field(default_factory=list)
    badges: List[Badge] = Field(default_factory=list)
    correlation_label: Optional[str] = None
    correlation_direction: Optional[str] = None
    mood_by_sleep_threshold: ThresholdMoodSplit
    personal_sleep_threshold: Optional[float] = None
    mood_by_personal_threshold: ThresholdMoodSplit
    trend_series: TrendSeries
    weekly_trend_series: TrendSeries
    rolling_series: List[RollingPoint] = Field(default_factory=list)
    rolling_summaries: List[RollingSummary] = Field(default_factory=list)
    tag_insights: List[TagInsight] = Field(default_factory=list)
    tag_drivers: List[TagDriver] = Field(default_factory=list)
    tag_sleep_drivers: List[TagSleepDriver] = Field(default_factory=list)
    weekday_averages: List[WeekdayAveragePoint] = Field(default_factory=list)
    stat_counts: StatCounts


# Motivation
class MotivationContext(BaseModel):
    entries: List[Entry] = Field(default_factory=list)
    stat_counts: StatCounts
    streak: int = 0
    window_averages: WindowAverages
    rolling_summaries: List[RollingSummary] = Field(default_factory=list)
    rhythm_score: Optional[int] = None
    mood_by_sleep_delta_percent: Optional[float] = None
    has_missing_stats: bool = False
    weekday_averages: List[WeekdayAveragePoint] = Field(default_factory=list)
    correlation_label: Optional[str] = None


class MotivationMessage(BaseModel):
    id: str
    text: str


# Reports
class ReportRange(BaseModel):
    start: date
    end: date
    prior_start: date
    prior_end: date


class WeeklySummary(BaseModel):
    label: str
    avg_sleep: Optional[float] = None
    avg_mood: Optional[float] = None
    sleep_std_dev: Optional[float] = None


class MoodDip(BaseModel):
    from_entry: Entry
    to_entry: Entry
    delta: float


class ReportData(BaseModel):
    recent_entries: List[Entry] = Field(default_factory=list)
    prior_entries: List[Entry] = Field(default_factory=list)
    monthly_consistency: Optional[str] = None
    monthly_correlation: Optional[str] = None
    monthly_tags: List[TagInsight] = Field(default_factory=list)
    all_time_tags: List[TagInsight] = Field(default_factory=list)
    all_time_tag_drivers: List[TagDriver] = Field(default_factory=list)
    all_time_tag_sleep_drivers: List[TagSleepDriver] = Field(default_factory=list)
    avg_sleep: Optional[float] = None
    avg_mood: Optional[float] = None
    prior_avg_sleep: Optional[float] = None
    prior_avg_mood: Optional[float] = None
    sleep_delta: Optional[float] = None
    mood_delta: Optional[float] = None
    best_day: Optional[Entry] = None
    best_night: Optional[Entry] = None
    biggest_mood_dip: Optional[MoodDip] = None
    weekly_summaries: List[WeeklySummary] = Field(default_factory=list)
    all_time_avg_sleep: Optional[float] = None
    all_time_avg_mood: Optional[float] = None
