"""
Completion statistics pipeline
raw tasks -> normalize -> {by day, by project, by hour} -> recap / weekly focus
"""

from .day_aggregator import aggregate_by_day
from .hour_aggregator import aggregate_by_hour
from .normalizer import normalize
from .project_aggregator import aggregate_by_project, grouping_threshold
from .recap import calculate_current_streak, summarize_recap
from .weekly_focus import aggregate_weekly_focus

__all__ = [
    "normalize",
    "aggregate_by_day",
    "aggregate_by_project",
    "grouping_threshold",
    "aggregate_by_hour",
    "summarize_recap",
    "calculate_current_streak",
    "aggregate_weekly_focus",
]
