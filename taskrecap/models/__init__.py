"""
Models for dashboard data and handler communication
"""

from .base import BaseModel
from .entities import (
    DEFAULT_PROJECT_COLOR,
    OTHER_PROJECTS_COLOR,
    BestDay,
    DashboardStats,
    DateRange,
    DayBucket,
    HourBucket,
    NormalizedTask,
    Project,
    ProjectBucket,
    RawTask,
    RecapSummary,
    TopProject,
    WeeklyFocusDay,
)
from .requests import AggregateTasksRequest, GetDashboardStatsRequest

__all__ = [
    # Base
    "BaseModel",
    # Entities
    "DEFAULT_PROJECT_COLOR",
    "OTHER_PROJECTS_COLOR",
    "RawTask",
    "NormalizedTask",
    "Project",
    "DayBucket",
    "ProjectBucket",
    "HourBucket",
    "BestDay",
    "TopProject",
    "RecapSummary",
    "WeeklyFocusDay",
    "DateRange",
    "DashboardStats",
    # Requests
    "GetDashboardStatsRequest",
    "AggregateTasksRequest",
]
