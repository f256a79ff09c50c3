"""
Entity models for completion statistics
Raw tasks and projects as supplied by Todoist, plus the buckets and summaries derived from them
"""

from datetime import datetime
from typing import Any, Dict, List

from pydantic import ConfigDict, Field

from .base import BaseModel

DEFAULT_PROJECT_COLOR = "#808080"
OTHER_PROJECTS_COLOR = "#A0A0A0"


def _as_str(value: Any) -> str:
    return "" if value is None else str(value)


class RawTask(BaseModel):
    """A completed task as returned by the data source.

    @property completedAt - ISO-8601 completion timestamp, possibly empty or invalid.
    @property projectId - Project id, empty when the task has no project.
    """

    model_config = ConfigDict(frozen=True)

    id: str = ""
    content: str = ""
    completed_at: str = ""
    project_id: str = ""
    labels: List[str] = Field(default_factory=list)

    @classmethod
    def from_api(cls, item: Dict[str, Any]) -> "RawTask":
        """Map a Todoist completed item payload, ignoring fields we don't use"""
        task_id = item.get("task_id")
        if task_id is None:
            task_id = item.get("id")
        labels = item.get("labels")
        return cls(
            id=_as_str(task_id),
            content=_as_str(item.get("content")),
            completed_at=_as_str(item.get("completed_at")),
            project_id=_as_str(item.get("project_id")),
            labels=[str(label) for label in labels] if isinstance(labels, list) else [],
        )


class NormalizedTask(RawTask):
    """A completed task whose completion timestamp parsed successfully.

    @property completedDate - Completion time in the local zone.
    @property hourOfDay - Local hour of completion (0-23).
    """

    completed_date: datetime
    hour_of_day: int = Field(ge=0, le=23)


class Project(BaseModel):
    """A Todoist project."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ""
    color: str = DEFAULT_PROJECT_COLOR

    @classmethod
    def from_api(cls, item: Dict[str, Any]) -> "Project":
        """Map a Todoist project payload"""
        project_id = _as_str(item.get("id"))
        name = item.get("name")
        color = item.get("color")
        return cls(
            id=project_id,
            name=f"Project {project_id}" if name is None else str(name),
            color=DEFAULT_PROJECT_COLOR if color is None else str(color),
        )


class DayBucket(BaseModel):
    """Completions on one calendar day (YYYY-MM-DD)."""

    date: str
    count: int = Field(default=0, ge=0)
    tasks: List[NormalizedTask] = Field(default_factory=list)


class ProjectBucket(BaseModel):
    """Completions attributed to one project, or to a synthetic group."""

    project_key: str
    project_name: str
    count: int = Field(gt=0)
    color: str = DEFAULT_PROJECT_COLOR


class HourBucket(BaseModel):
    """Completions within one local hour of the day."""

    hour: int = Field(ge=0, le=23)
    count: int = Field(default=0, ge=0)


class BestDay(BaseModel):
    date: str
    count: int


class TopProject(BaseModel):
    name: str
    count: int


class RecapSummary(BaseModel):
    """Headline metrics derived from day and project buckets."""

    total_done: int
    current_streak: int = Field(ge=0)
    best_day: BestDay
    top_project: TopProject


class WeeklyFocusDay(BaseModel):
    """Per-project completions on one weekday of the current week.

    @property day - Short weekday name (Mon..Sun).
    @property counts - Task count keyed by project name.
    """

    day: str
    date: str
    counts: Dict[str, int] = Field(default_factory=dict)


class DateRange(BaseModel):
    start: str
    end: str


class DashboardStats(BaseModel):
    """Everything the dashboard renders, computed in one pass"""

    range: DateRange
    total_tasks: int
    dropped_tasks: int
    day_stats: List[DayBucket]
    project_stats: List[ProjectBucket]
    hour_stats: List[HourBucket]
    weekly_focus: List[WeeklyFocusDay]
    recap: RecapSummary
    generated_at: str
