"""
Day aggregator
Buckets normalized tasks into a dense per-day series over an explicit date range
"""

from datetime import date, datetime, timedelta, tzinfo
from typing import Any, Dict, List, Optional, Sequence

from taskrecap.core.logger import get_logger
from taskrecap.models.entities import DayBucket, NormalizedTask

from .clock import date_key, to_local

logger = get_logger(__name__)


def _floor_day(value: Any, tz: Optional[tzinfo]) -> Optional[date]:
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return to_local(value, tz).date()
        return value.date()
    if isinstance(value, date):
        return value
    return None


def aggregate_by_day(
    tasks: Sequence[NormalizedTask],
    start: Any,
    end: Any,
    tz: Optional[tzinfo] = None,
) -> List[DayBucket]:
    """Count completions per calendar day from start to end (inclusive)

    Every day in range gets a bucket, even with no completions. Tasks outside
    the range are dropped, never widening it. An invalid range yields no buckets.

    Args:
        tasks: Normalized tasks
        start: First day (date or datetime)
        end: Last day (date or datetime)
        tz: Zone used to floor aware datetimes, None for the system zone

    Returns:
        List[DayBucket]: Buckets in ascending date order
    """
    first_day = _floor_day(start, tz)
    last_day = _floor_day(end, tz)

    if first_day is None or last_day is None or first_day > last_day:
        logger.error(f"Invalid date range provided: {start!r} to {end!r}")
        return []

    counts: Dict[str, int] = {}
    day_tasks: Dict[str, List[NormalizedTask]] = {}

    for offset in range((last_day - first_day).days + 1):
        key = date_key(first_day + timedelta(days=offset))
        counts[key] = 0
        day_tasks[key] = []

    for task in tasks:
        key = date_key(task.completed_date.date())
        if key not in counts:
            logger.warning(
                f"Task date {key} (task {task.id}) outside initialized range "
                f"{date_key(first_day)} to {date_key(last_day)}"
            )
            continue
        counts[key] += 1
        day_tasks[key].append(task)

    return [
        DayBucket(date=key, count=counts[key], tasks=day_tasks[key])
        for key in sorted(counts)
    ]
