"""
Request models for dashboard handlers
"""

from datetime import date
from typing import Any, Dict, List, Optional

from pydantic import Field

from .base import BaseModel


class GetDashboardStatsRequest(BaseModel):
    """Request parameters for fetching and aggregating completed tasks.

    @property startDate - First calendar day of the range, defaults to endDate minus the configured range.
    @property endDate - Last calendar day of the range (inclusive), defaults to today.
    @property since - Optional ISO timestamp passed to the completed tasks endpoint.
    @property thresholdPercent - Share of all tasks below which a project is grouped into "Other".
    @property minThresholdCount - Upper bound on the "Other" grouping threshold.
    """

    start_date: Optional[date] = None
    end_date: Optional[date] = None
    since: Optional[str] = None
    threshold_percent: Optional[float] = Field(default=None, ge=0, le=1)
    min_threshold_count: Optional[int] = Field(default=None, ge=1)


class AggregateTasksRequest(BaseModel):
    """Request parameters for aggregating a supplied payload without fetching.

    @property items - Todoist completed item payloads.
    @property projects - Todoist project payloads.
    """

    items: List[Dict[str, Any]] = Field(default_factory=list)
    projects: List[Dict[str, Any]] = Field(default_factory=list)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    threshold_percent: Optional[float] = Field(default=None, ge=0, le=1)
    min_threshold_count: Optional[int] = Field(default=None, ge=1)
