#!/usr/bin/env python
"""
Generate sleep and mood insights for a single user.

Loads the user's entries, builds their statistics, badges and today's
motivation message, prints a summary and optionally writes the full
statistics as JSON.
"""

import os
import sys
import argparse
import logging

# Add the project root to the path so we can import our modules
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from rythm.config.config_manager import ConfigManager
from rythm.core.repositories.entry_repository import EntryRepository
from rythm.core.services.insights_service import InsightsService
from rythm.utils.sleep_hours import format_sleep_hours

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description='Generate sleep and mood insights for a user')
    parser.add_argument('--user-id', type=str, required=True, help='User ID to generate insights for')
    parser.add_argument('--data-dir', type=str, default=None, help='Directory containing entries.csv')
    parser.add_argument('--config', type=str, default='config/config.yaml', help='Path to configuration file')
    parser.add_argument('--output', type=str, default=None, help='Write the full statistics as JSON to this path')
    return parser.parse_args(argv)


def _format_average(value, formatter=None):
    if value is None:
        return 'n/a'
    return formatter(value) if formatter else f"{value:.1f}"


def print_summary(user_id, stats, motivation):
    last7 = stats.window_averages.last7
    last30 = stats.window_averages.last30
    unlocked = [badge.title for badge in stats.badges + stats.sleep_consistency_badges if badge.unlocked]

    print(f"Insights for user {user_id}")
    print(f"  Entries: {stats.stat_counts.total_entries} ({stats.stat_counts.complete_entries} complete)")
    print(f"  Streak: {stats.streak} days")
    print(f"  Last 7 days: sleep {_format_average(last7.sleep, format_sleep_hours)}, "
          f"mood {_format_average(last7.mood)}")
    print(f"  Last 30 days: sleep {_format_average(last30.sleep, format_sleep_hours)}, "
          f"mood {_format_average(last30.mood)}")
    print(f"  Rhythm score: {stats.rhythm_score if stats.rhythm_score is not None else 'n/a'}")
    print(f"  Sleep consistency: {stats.sleep_consistency_label or 'n/a'}")
    if stats.correlation_label:
        print(f"  Sleep and mood: {stats.correlation_label} ({stats.correlation_direction})")
    if stats.personal_sleep_threshold is not None:
        print(f"  Personal sleep threshold: {format_sleep_hours(stats.personal_sleep_threshold)}")
    print(f"  Unlocked badges: {', '.join(unlocked) if unlocked else 'none yet'}")
    print(f"\n{motivation.text}")


def main(argv=None):
    args = parse_args(argv)
    config = ConfigManager(args.config)

    logging.basicConfig(
        level=getattr(logging, str(config.get('logging.level', 'INFO')).upper(), logging.INFO),
        format=config.get('logging.format', '%(asctime)s - %(name)s - %(levelname)s - %(message)s'),
    )

    data_dir = args.data_dir or config.get('data.data_dir', 'data')

    try:
        service = InsightsService(EntryRepository(data_dir), config)
        stats = service.get_stats(args.user_id)
        motivation = service.get_motivation(args.user_id)

        print_summary(args.user_id, stats, motivation)

        if args.output:
            output_dir = os.path.dirname(args.output)
            if output_dir:
                os.makedirs(output_dir, exist_ok=True)
            with open(args.output, 'w') as f:
                f.write(stats.model_dump_json(indent=2))
            logger.info(f"Statistics saved to {args.output}")

    except Exception as e:
        logger.error(f"Error generating insights: {str(e)}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
