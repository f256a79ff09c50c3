"""
Dashboard Manager

Handles all dashboard-related business logic, including:
- Fetching completed tasks and projects from the data source
- Running the completion statistics pipeline
- Resolving default date ranges and grouping thresholds from configuration
"""

import asyncio
from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo
from typing import Optional, Sequence, Tuple

from taskrecap.config.loader import ConfigLoader, get_config
from taskrecap.models.entities import (
    DashboardStats,
    DateRange,
    Project,
    RawTask,
    RecapSummary,
)
from taskrecap.processing import (
    aggregate_by_day,
    aggregate_by_hour,
    aggregate_by_project,
    aggregate_weekly_focus,
    normalize,
    summarize_recap,
)
from taskrecap.processing.clock import date_key, local_today, resolve_timezone
from taskrecap.processing.project_aggregator import (
    DEFAULT_MIN_THRESHOLD_COUNT,
    DEFAULT_THRESHOLD_PERCENT,
)

from ..logger import get_logger
from ..protocols import CompletedTaskSourceProtocol

logger = get_logger(__name__)


@dataclass
class AnalyticsSettings:
    """Analytics settings data structure"""

    default_range_days: int = 30
    threshold_percent: float = DEFAULT_THRESHOLD_PERCENT
    min_threshold_count: int = DEFAULT_MIN_THRESHOLD_COUNT
    timezone: Optional[tzinfo] = None

    @classmethod
    def from_config(cls, config: Optional[ConfigLoader] = None) -> "AnalyticsSettings":
        config = config or get_config()
        return cls(
            default_range_days=int(config.get("analytics.default_range_days", 30)),
            threshold_percent=float(
                config.get("analytics.project_threshold_percent", DEFAULT_THRESHOLD_PERCENT)
            ),
            min_threshold_count=int(
                config.get("analytics.project_min_threshold_count", DEFAULT_MIN_THRESHOLD_COUNT)
            ),
            timezone=resolve_timezone(config.get("analytics.timezone")),
        )


class DashboardManager:
    """Dashboard manager

    Responsible for fetching completion data and computing all dashboard statistics
    """

    def __init__(
        self,
        source: Optional[CompletedTaskSourceProtocol] = None,
        settings: Optional[AnalyticsSettings] = None,
    ):
        self._source = source
        self.settings = settings or AnalyticsSettings.from_config()

    @property
    def source(self) -> CompletedTaskSourceProtocol:
        if self._source is None:
            from taskrecap.todoist.client import TodoistClient

            self._source = TodoistClient.from_config()
        return self._source

    def resolve_range(
        self,
        start: Optional[date] = None,
        end: Optional[date] = None,
        today: Optional[date] = None,
    ) -> Tuple[date, date]:
        """Fill in missing range bounds: end defaults to today, start to end minus the default range"""
        if end is None:
            end = today or local_today(self.settings.timezone)
        if start is None:
            start = end - timedelta(days=self.settings.default_range_days)
        return start, end

    def build_dashboard(
        self,
        raw_tasks: Sequence[RawTask],
        projects: Sequence[Project],
        start: Optional[date] = None,
        end: Optional[date] = None,
        threshold_percent: Optional[float] = None,
        min_threshold_count: Optional[int] = None,
        today: Optional[date] = None,
    ) -> DashboardStats:
        """Run the full pipeline over already fetched data

        Args:
            raw_tasks: Completed tasks from the data source
            projects: Known projects
            start: First day of the range, see resolve_range
            end: Last day of the range (inclusive), see resolve_range
            threshold_percent: Override for the "Other" grouping share
            min_threshold_count: Override for the "Other" grouping cap
            today: Reference day for streak and weekly focus

        Returns:
            DashboardStats: All chart data plus the recap
        """
        tz = self.settings.timezone
        today = today or local_today(tz)
        start, end = self.resolve_range(start, end, today)

        tasks = normalize(raw_tasks, tz)
        day_stats = aggregate_by_day(tasks, start, end, tz)
        project_stats = aggregate_by_project(
            tasks,
            projects,
            threshold_percent=(
                self.settings.threshold_percent
                if threshold_percent is None
                else threshold_percent
            ),
            min_threshold_count=(
                self.settings.min_threshold_count
                if min_threshold_count is None
                else min_threshold_count
            ),
        )
        hour_stats = aggregate_by_hour(tasks)
        recap = summarize_recap(day_stats, project_stats, today=today)
        weekly_focus = aggregate_weekly_focus(day_stats, project_stats, reference=today)

        stats = DashboardStats(
            range=DateRange(start=date_key(start), end=date_key(end)),
            total_tasks=len(tasks),
            dropped_tasks=len(raw_tasks) - len(tasks),
            day_stats=day_stats,
            project_stats=project_stats,
            hour_stats=hour_stats,
            weekly_focus=weekly_focus,
            recap=recap,
            generated_at=datetime.now(tz).isoformat(),
        )

        logger.info(
            f"Dashboard statistics computed: {stats.total_tasks} tasks, "
            f"{len(day_stats)} days, {len(project_stats)} project buckets, "
            f"streak {recap.current_streak}"
        )
        return stats

    async def load_dashboard(
        self,
        start: Optional[date] = None,
        end: Optional[date] = None,
        since: Optional[str] = None,
        threshold_percent: Optional[float] = None,
        min_threshold_count: Optional[int] = None,
    ) -> DashboardStats:
        """Fetch tasks and projects concurrently, then run the pipeline

        Raises:
            TodoistAPIError: The data source failed
        """
        source = self.source
        raw_tasks, projects = await asyncio.gather(
            source.fetch_completed_tasks(since),
            source.fetch_projects(),
        )
        logger.debug(f"Fetched {len(raw_tasks)} tasks and {len(projects)} projects")

        return self.build_dashboard(
            raw_tasks,
            projects,
            start=start,
            end=end,
            threshold_percent=threshold_percent,
            min_threshold_count=min_threshold_count,
        )

    async def load_recap(self) -> RecapSummary:
        """Recap for the default range"""
        stats = await self.load_dashboard()
        return stats.recap


# Global DashboardManager instance
_dashboard_manager: Optional[DashboardManager] = None


def get_dashboard_manager() -> DashboardManager:
    """Get global DashboardManager instance

    Returns:
        DashboardManager: Global dashboard manager instance
    """
    global _dashboard_manager

    if _dashboard_manager is None:
        _dashboard_manager = DashboardManager()

    return _dashboard_manager
