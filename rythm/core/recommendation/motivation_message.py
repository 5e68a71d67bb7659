# rythm/core/recommendation/motivation_message.py
"""
Daily motivation message selection.

Messages are an ordered list of rules, each with an eligibility condition
and a text renderer. The eligible rules are filtered and one is picked by a
hash of the calendar date, so the same message is shown all day and the
choice rotates daily without any stored state. The trailing tips are always
eligible, so a message is always returned.
"""

import logging
from datetime import date
from typing import Callable, List, NamedTuple, Optional, Sequence

from rythm.core.models.data_models import Entry
from rythm.core.models.output_models import MotivationContext, MotivationMessage, StatsResult
from rythm.utils.constants import weekday_full_labels
from rythm.utils.dates import resolve_today
from rythm.utils.numeric import finite_or_none

logger = logging.getLogger(__name__)


class MessageRule(NamedTuple):
    id: str
    condition: Callable[[MotivationContext], bool]
    get_text: Callable[[MotivationContext], str]


def _summary_for(ctx: MotivationContext, days: int):
    for summary in ctx.rolling_summaries:
        if summary.days == days:
            return summary
    return None


def _sleep_improving(ctx: MotivationContext) -> bool:
    summary = _summary_for(ctx, 7)
    return summary is not None and summary.sleep_delta is not None and summary.sleep_delta > 0


def _mood_trending_up(ctx: MotivationContext) -> bool:
    summary = _summary_for(ctx, 7)
    return summary is not None and summary.mood_delta is not None and summary.mood_delta > 0


def _more_sleep_lately(ctx: MotivationContext) -> bool:
    last7 = ctx.window_averages.last7.sleep
    last30 = ctx.window_averages.last30.sleep
    return last7 is not None and last30 is not None and last7 > last30


def _unlocked_several_stats(ctx: MotivationContext) -> bool:
    complete = ctx.stat_counts.complete_entries
    return not ctx.has_missing_stats and 3 <= complete <= 5


def _weekdays_with_data(ctx: MotivationContext):
    return [
        point for point in ctx.weekday_averages
        if point.observation_count >= 2 and point.avg_sleep is not None
    ]


def _has_weekday_pattern(ctx: MotivationContext) -> bool:
    if ctx.stat_counts.complete_entries < 30:
        return False
    return len(_weekdays_with_data(ctx)) >= 1


def _weekday_pattern_text(ctx: MotivationContext) -> str:
    ranked = sorted(_weekdays_with_data(ctx), key=lambda point: point.avg_sleep, reverse=True)
    day_label = weekday_full_labels.get(ranked[0].label, ranked[0].label) if ranked else ''
    return f"You tend to sleep better on {day_label}. Knowing your pattern is half the battle."


def _logging_on_low_mood_days(ctx: MotivationContext) -> bool:
    moods = [finite_or_none(entry.mood) for entry in ctx.entries]
    moods = [mood for mood in moods if mood is not None]
    if len(moods) < 5:
        return False
    low_count = len([mood for mood in moods if mood <= 2])
    return low_count >= 3 and low_count / len(moods) >= 0.15


def _always(ctx: MotivationContext) -> bool:
    return True


def _fixed(text: str) -> Callable[[MotivationContext], str]:
    return lambda ctx: text


MOTIVATION_MESSAGES: List[MessageRule] = [
    MessageRule(
        'streak-building',
        lambda ctx: 7 <= ctx.streak < 30,
        _fixed("You're building a real habit. Every day you log is a vote for yourself."),
    ),
    MessageRule(
        'sleep-improving',
        _sleep_improving,
        _fixed('Your sleep is heading in the right direction. Small changes add up.'),
    ),
    MessageRule(
        'mood-trend-up',
        _mood_trending_up,
        _fixed("Your mood trend is climbing. You're doing something right."),
    ),
    MessageRule(
        'mood-better-when-sleep-better',
        lambda ctx: ctx.mood_by_sleep_delta_percent is not None and ctx.mood_by_sleep_delta_percent >= 10,
        _fixed("When you sleep well, your mood tends to rise. You're not imagining it; your data shows it."),
    ),
    MessageRule(
        'more-sleep-lately',
        _more_sleep_lately,
        _fixed("You've been giving rest more priority. Your future self will thank you."),
    ),
    MessageRule(
        'new-first-week',
        lambda ctx: ctx.stat_counts.complete_entries <= 7,
        _fixed("You've started. That's often the hardest part. You're already ahead."),
    ),
    MessageRule(
        'coming-back-after-gap',
        lambda ctx: ctx.streak == 1 and ctx.stat_counts.complete_entries > 7,
        _fixed("You're back. That matters more than the gap. Today counts."),
    ),
    MessageRule(
        'steady-mood-despite-ups-and-downs',
        lambda ctx: ctx.stat_counts.complete_entries >= 14 and ctx.correlation_label is not None,
        _fixed("You're tracking through the ups and downs. That's how you learn what actually helps."),
    ),
    MessageRule(
        'sleep-consistency-improving',
        lambda ctx: ctx.rhythm_score is not None and ctx.rhythm_score >= 70,
        _fixed('Your sleep is becoming more predictable. Consistency is a superpower.'),
    ),
    MessageRule(
        'unlocked-several-stats',
        _unlocked_several_stats,
        _fixed("You're starting to see the full picture. Keep going and it gets even clearer."),
    ),
    MessageRule(
        'weekday-pattern',
        _has_weekday_pattern,
        _weekday_pattern_text,
    ),
    MessageRule(
        'logging-on-low-mood-days',
        _logging_on_low_mood_days,
        _fixed("You're still logging on the hard days. That's what makes the good days show up in your data."),
    ),
    MessageRule(
        'long-term-tracker',
        lambda ctx: ctx.stat_counts.complete_entries >= 60,
        _fixed("You've put in the time. Your data is starting to repay you."),
    ),
    MessageRule(
        'tip-anchor-wake',
        _always,
        _fixed('Waking up around the same time most days, even on weekends, helps your body clock '
               'so you sleep better and feel more alert.'),
    ),
    MessageRule(
        'tip-morning-light',
        _always,
        _fixed('Getting some daylight in the first hour after you wake helps you stay focused '
               'during the day and fall asleep easier at night.'),
    ),
    MessageRule(
        'tip-move-often',
        _always,
        _fixed('Moving regularly, even short walks, can lift your mood and help you handle stress better.'),
    ),
    MessageRule(
        'tip-wind-down',
        _always,
        _fixed('Dimming screens and taking it easy in the last hour before bed helps your brain '
               'wind down so you fall asleep faster and sleep better.'),
    ),
    MessageRule(
        'tip-connection',
        _always,
        _fixed('Even short, real moments with others can boost how you feel and support your health over time.'),
    ),
]


def day_seed(today: date) -> str:
    return today.strftime('%Y-%m-%d')


def simple_hash(text: str) -> int:
    """Absolute value of the 32-bit ``h = h * 31 + code`` string hash"""
    h = 0
    for ch in text:
        h = ((h << 5) - h + ord(ch)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return abs(h)


def get_motivation_message(ctx: MotivationContext, today: Optional[date] = None,
                           rules: Sequence[MessageRule] = MOTIVATION_MESSAGES) -> MotivationMessage:
    """
    Pick today's motivation message for the given context.

    Args:
        ctx: Context derived from the user's entries and stats
        today: Day used to seed the rotation (defaults to the local date)
        rules: Ordered rule list to choose from

    Returns:
        The chosen message id and text
    """
    eligible = [rule for rule in rules if rule.condition(ctx)]
    if not eligible:
        raise ValueError("No motivation message is eligible for this context")

    seed = simple_hash(day_seed(resolve_today(today)))
    chosen = eligible[seed % len(eligible)]
    logger.debug(f"Selected motivation message {chosen.id} from {len(eligible)} eligible")
    return MotivationMessage(id=chosen.id, text=chosen.get_text(ctx))


def build_motivation_context(entries: Sequence[Entry], stats: StatsResult) -> MotivationContext:
    """Derive the selector's context from an entry history and its stats"""
    split = stats.mood_by_sleep_threshold
    delta_percent = None
    if split.high is not None and split.low is not None and split.low > 0:
        delta_percent = (split.high - split.low) / split.low * 100

    last7 = stats.window_averages.last7
    has_missing_stats = any(
        value is None
        for value in (last7.sleep, last7.mood, stats.sleep_consistency_label, stats.correlation_label)
    )

    return MotivationContext(
        entries=list(entries),
        stat_counts=stats.stat_counts,
        streak=stats.streak,
        window_averages=stats.window_averages,
        rolling_summaries=stats.rolling_summaries,
        rhythm_score=stats.rhythm_score,
        mood_by_sleep_delta_percent=delta_percent,
        has_missing_stats=has_missing_stats,
        weekday_averages=stats.weekday_averages,
        correlation_label=stats.correlation_label,
    )
