"""
Test data builders
"""

from datetime import datetime, timezone
from typing import List, Optional

from taskrecap.models.entities import DayBucket, NormalizedTask, RawTask

UTC = timezone.utc


def make_raw(
    task_id: str = "t1",
    completed_at: str = "2024-01-02T10:00:00Z",
    project_id: str = "",
    labels: Optional[List[str]] = None,
) -> RawTask:
    return RawTask(
        id=task_id,
        content=f"Task {task_id}",
        completed_at=completed_at,
        project_id=project_id,
        labels=labels or [],
    )


def make_task(
    task_id: str = "t1",
    when: datetime = datetime(2024, 1, 2, 10, 0, tzinfo=UTC),
    project_id: str = "",
) -> NormalizedTask:
    return NormalizedTask(
        id=task_id,
        content=f"Task {task_id}",
        completed_at=when.isoformat(),
        project_id=project_id,
        labels=[],
        completed_date=when,
        hour_of_day=when.hour,
    )


def make_days(counts: dict) -> List[DayBucket]:
    """DayBuckets from {"YYYY-MM-DD": count}, tasks left empty"""
    return [DayBucket(date=key, count=count) for key, count in sorted(counts.items())]
