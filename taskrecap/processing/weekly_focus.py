"""
Weekly focus aggregator
Per-weekday, per-project completions for the Monday-start week containing a reference day
"""

from datetime import date, timedelta
from typing import Dict, List, Optional, Sequence

from taskrecap.models.entities import DayBucket, ProjectBucket, WeeklyFocusDay

from .clock import date_key, local_today

DAYS_PER_WEEK = 7


def week_days(reference: date) -> List[date]:
    monday = reference - timedelta(days=reference.weekday())
    return [monday + timedelta(days=offset) for offset in range(DAYS_PER_WEEK)]


def aggregate_weekly_focus(
    day_buckets: Sequence[DayBucket],
    project_buckets: Sequence[ProjectBucket],
    reference: Optional[date] = None,
) -> List[WeeklyFocusDay]:
    """Break down each day of the current week by project

    Tasks are matched on their project id, so synthetic buckets ("Other",
    "No Project", unknown projects) always count zero. Days outside the
    aggregated range count zero for every project.
    """
    if reference is None:
        reference = local_today()

    by_date: Dict[str, DayBucket] = {bucket.date: bucket for bucket in day_buckets}
    week: List[WeeklyFocusDay] = []

    for day in week_days(reference):
        key = date_key(day)
        bucket = by_date.get(key)
        tasks = bucket.tasks if bucket else []
        counts = {
            project.project_name: sum(
                1 for task in tasks if task.project_id == project.project_key
            )
            for project in project_buckets
        }
        week.append(WeeklyFocusDay(day=day.strftime("%a"), date=key, counts=counts))

    return week
