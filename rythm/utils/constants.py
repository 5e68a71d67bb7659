"""
Constants used throughout the Rythm insights engine.
This includes label thresholds, badge definitions, default values, and other constants.
"""

# Correlation magnitude buckets, checked in order against |r|
correlation_labels = [
    (0.2, 'No clear'),
    (0.4, 'Weak'),
    (0.7, 'Moderate'),
]
correlation_strong_label = 'Strong'

# Dead zone around r == 0 where no direction is reported
correlation_direction_dead_zone = 0.05
correlation_directions = {
    'positive': 'Higher sleep, better mood',
    'negative': 'Higher sleep, lower mood',
    'none': 'No clear direction',
}

# Population std-dev of sleep hours -> consistency label (upper bounds, inclusive)
sleep_consistency_labels = [
    (0.9, 'Very consistent'),
    (2.0, 'Consistent'),
    (3.5, 'Mixed'),
]
sleep_consistency_fallback_label = 'Unstable'

# Default values for windows, thresholds and minimum-data gates
default_values = {
    'fixed_windows': (7, 30, 90, 365),
    'rolling_windows': (7, 30, 90),
    'rolling_series_days': 90,
    'trend_series_windows': (30, 90, 365),
    'rhythm_window_days': 30,
    'rhythm_min_entries': 5,
    'rhythm_max_std_dev': 3.0,
    'mood_by_threshold_min_entries': 5,
    'personal_threshold_min_entries': 5,
    'personal_threshold_min_top': 3,
    'personal_threshold_top_percent': 30,
    'personal_threshold_bounds': (4.0, 10.0),
    'tag_driver_min_count': 3,
    'weekly_bucket_size': 7,
}

# Weekday labels, indexed by date.weekday() (Monday == 0)
weekday_labels = ['Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat', 'Sun']
weekday_full_labels = {
    'Mon': 'Monday',
    'Tue': 'Tuesday',
    'Wed': 'Wednesday',
    'Thu': 'Thursday',
    'Fri': 'Friday',
    'Sat': 'Saturday',
    'Sun': 'Sunday',
}

# Sleep hours outside this range are treated as missing by the analytics
sleep_hours_range = (0.0, 12.0)

# Mood at or above this value counts as a "good" day
mood_good_threshold = 3
peak_mood = 5

# Tiered badges: id -> (title, thresholds, tier labels, unit)
tiered_badge_definitions = {
    'logger-beast': (
        'Logger beast',
        [1, 7, 30, 180, 365],
        ['1 logged day', '7 logged days', '30 logged days', '180 logged days', '365 logged days'],
        'days',
    ),
    'eight-hour-elite': (
        'Eight-Hour Elite',
        [1, 7, 14, 21, 30],
        [
            '8+ hours for 1 night',
            '8+ hours for 7 nights',
            '8+ hours for 14 nights',
            '8+ hours for 21 nights',
            '8+ hours for 30 nights',
        ],
        'nights',
    ),
    'events-explorer': (
        'Events Explorer',
        [5, 10, 15, 20, 30],
        [
            'Add 5 different daily events',
            'Add 10 different daily events',
            'Add 15 different daily events',
            'Add 20 different daily events',
            'Add 30 different daily events',
        ],
        'events',
    ),
    'events-master': (
        'Events Master',
        [10, 25, 50, 100, 500],
        [
            'Add 10 daily events',
            'Add 25 daily events',
            'Add 50 daily events',
            'Add 100 daily events',
            'Add 500 daily events',
        ],
        'events',
    ),
    'peak-days': (
        'Peak Days',
        [1, 3, 7, 14, 30],
        [
            '1 day with mood 5/5',
            '3 days with mood 5/5',
            '7 days with mood 5/5',
            '14 days with mood 5/5',
            '30 days with mood 5/5',
        ],
        'days',
    ),
    'reflector': (
        'Reflector',
        [5, 10, 15, 20, 30],
        [
            'Add a note 5 times',
            'Add a note 10 times',
            'Add a note 15 times',
            'Add a note 20 times',
            'Add a note 30 times',
        ],
        'times',
    ),
    'mood-steady': (
        'Mood Steady',
        [2, 5, 10, 14, 21],
        [
            '2 days in a row with mood ≥ 3/5',
            '5 days in a row with mood ≥ 3/5',
            '10 days in a row with mood ≥ 3/5',
            '14 days in a row with mood ≥ 3/5',
            '21 days in a row with mood ≥ 3/5',
        ],
        'days',
    ),
}

# Non-incremental badges: id -> (title, description)
non_incremental_badge_definitions = {
    'balanced-week': ('Balanced Week', 'All 7 nights between 6–9 hours.'),
    'monthly-milestone': ('Monthly Milestone', '30 logged days in a month.'),
    'bounce-back': ('Bounce Back', '2+ good-mood days in a row after 2+ low-mood days.'),
}

# Sleep consistency badge targets
balanced_sleep_range = (6.0, 9.0)
balanced_week_length = 7
monthly_milestone_entries = 30
rest_reward_window = 7
rest_reward_hours = 50

max_level_text = 'Max level'
