# rythm/core/services/insights_service.py
import logging
from datetime import date
from typing import List, Optional

from rythm.config.config_manager import ConfigManager
from rythm.core.analysis.stats import build_stats
from rythm.core.models.data_models import Entry, EntryInput
from rythm.core.models.output_models import Badge, MotivationMessage, ReportData, StatsResult
from rythm.core.recommendation.motivation_message import build_motivation_context, get_motivation_message
from rythm.core.reporting.report_data import build_report_data, get_entries_in_range, get_report_range
from rythm.utils.dates import DateFormatter, format_local_date

logger = logging.getLogger(__name__)


class InsightsService:
    """Ties the entry repository to the insights engine for one user at a time"""

    def __init__(self, repository, config: Optional[ConfigManager] = None,
                 date_formatter: DateFormatter = format_local_date):
        self.repository = repository
        self.config = config or ConfigManager()
        self.date_formatter = date_formatter

    @property
    def sleep_threshold(self) -> float:
        return float(self.config.get('insights.sleep_threshold', 7))

    @property
    def tag_driver_min_count(self) -> int:
        return int(self.config.get('insights.tag_driver_min_count', 3))

    def log_entry(self, entry: EntryInput) -> Entry:
        saved = self.repository.upsert_entry(entry)
        logger.info(f"Logged entry for user {saved.user_id} on {saved.entry_date}")
        return saved

    def get_entries(self, user_id: str) -> List[Entry]:
        return self.repository.fetch_entries(user_id)

    def get_stats(self, user_id: str, today: Optional[date] = None) -> StatsResult:
        entries = self.get_entries(user_id)
        return build_stats(
            entries,
            self.sleep_threshold,
            self.date_formatter,
            today=today,
            tag_driver_min_count=self.tag_driver_min_count,
        )

    def get_badges(self, user_id: str, today: Optional[date] = None) -> dict:
        stats = self.get_stats(user_id, today)
        return {
            "user_id": user_id,
            "badges": stats.badges,
            "sleep_consistency_badges": stats.sleep_consistency_badges,
        }

    def get_motivation(self, user_id: str, today: Optional[date] = None) -> MotivationMessage:
        entries = self.get_entries(user_id)
        stats = build_stats(
            entries,
            self.sleep_threshold,
            self.date_formatter,
            today=today,
            tag_driver_min_count=self.tag_driver_min_count,
        )
        return get_motivation_message(build_motivation_context(entries, stats), today=today)

    def get_report(self, user_id: str, range_days: Optional[int] = None,
                   today: Optional[date] = None) -> ReportData:
        range_days = range_days or int(self.config.get('insights.report_range_days', 30))
        entries = self.get_entries(user_id)
        report_range = get_report_range(range_days, today)
        recent = get_entries_in_range(entries, report_range.start, report_range.end)
        prior = get_entries_in_range(entries, report_range.prior_start, report_range.prior_end)
        logger.debug(f"Report for user {user_id}: {report_range.start} to {report_range.end}")
        return build_report_data(
            entries,
            recent,
            prior,
            tag_limit=int(self.config.get('insights.tag_insights_limit', 5)),
            tag_driver_min_count=self.tag_driver_min_count,
        )
