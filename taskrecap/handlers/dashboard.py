"""
Dashboard module command handlers
"""

from typing import Dict, Any
from datetime import datetime
from taskrecap.core.logger import get_logger
from taskrecap.core.dashboard.manager import get_dashboard_manager
from taskrecap.models.entities import Project, RawTask
from taskrecap.models.requests import AggregateTasksRequest, GetDashboardStatsRequest
from taskrecap.todoist.client import TodoistAuthError
from . import api_handler

logger = get_logger(__name__)


@api_handler(
    body=GetDashboardStatsRequest,
    method="POST",
    path="/dashboard/stats",
    tags=["dashboard"],
    summary="Get completion statistics",
    description="Fetch completed tasks and projects from Todoist and compute daily, project, hour and weekly statistics plus the recap",
)
async def get_dashboard_stats(body: GetDashboardStatsRequest) -> Dict[str, Any]:
    """Get completion statistics

    @param body Date range and grouping overrides
    @returns Day, project, hour and weekly buckets with the recap
    """
    try:
        dashboard_manager = get_dashboard_manager()
        stats = await dashboard_manager.load_dashboard(
            start=body.start_date,
            end=body.end_date,
            since=body.since,
            threshold_percent=body.threshold_percent,
            min_threshold_count=body.min_threshold_count,
        )

        return {
            "success": True,
            "data": stats.model_dump(mode="json"),
            "timestamp": datetime.now().isoformat(),
        }

    except TodoistAuthError as e:
        logger.warning(f"Todoist authentication failed: {e}")
        return {
            "success": False,
            "message": f"Todoist authentication failed: {str(e)}",
            "timestamp": datetime.now().isoformat(),
        }
    except Exception as e:
        logger.error(f"Failed to get completion statistics: {e}", exc_info=True)
        return {
            "success": False,
            "message": f"Failed to get completion statistics: {str(e)}",
            "timestamp": datetime.now().isoformat(),
        }


@api_handler(
    method="GET",
    path="/dashboard/recap",
    tags=["dashboard"],
    summary="Get recap",
    description="Get total completed, current streak, best day and top project for the default range",
)
async def get_recap() -> Dict[str, Any]:
    """Get recap for the default range"""
    try:
        dashboard_manager = get_dashboard_manager()
        recap = await dashboard_manager.load_recap()

        return {
            "success": True,
            "data": recap.model_dump(mode="json"),
            "timestamp": datetime.now().isoformat(),
        }

    except Exception as e:
        logger.error(f"Failed to get recap: {e}", exc_info=True)
        return {
            "success": False,
            "message": f"Failed to get recap: {str(e)}",
            "timestamp": datetime.now().isoformat(),
        }


@api_handler(
    body=AggregateTasksRequest,
    method="POST",
    path="/dashboard/aggregate",
    tags=["dashboard"],
    summary="Aggregate supplied tasks",
    description="Compute completion statistics from completed items and projects supplied in the request body",
)
async def aggregate_tasks(body: AggregateTasksRequest) -> Dict[str, Any]:
    """Aggregate supplied tasks without contacting Todoist"""
    try:
        dashboard_manager = get_dashboard_manager()
        stats = dashboard_manager.build_dashboard(
            [RawTask.from_api(item) for item in body.items],
            [Project.from_api(item) for item in body.projects],
            start=body.start_date,
            end=body.end_date,
            threshold_percent=body.threshold_percent,
            min_threshold_count=body.min_threshold_count,
        )

        return {
            "success": True,
            "data": stats.model_dump(mode="json"),
            "timestamp": datetime.now().isoformat(),
        }

    except Exception as e:
        logger.error(f"Failed to aggregate tasks: {e}", exc_info=True)
        return {
            "success": False,
            "message": f"Failed to aggregate tasks: {str(e)}",
            "timestamp": datetime.now().isoformat(),
        }
