"""
Recap summarizer
Derives headline metrics (total, current streak, best day, top project) from day and project buckets
"""

from datetime import date, timedelta
from typing import Dict, Optional, Sequence

from taskrecap.core.logger import get_logger
from taskrecap.models.entities import (
    BestDay,
    DayBucket,
    ProjectBucket,
    RecapSummary,
    TopProject,
)

from .clock import date_key, local_today

logger = get_logger(__name__)

MAX_STREAK_LOOKBACK_DAYS = 730


def _earliest_day(day_map: Dict[str, int]) -> Optional[date]:
    days = []
    for key in day_map:
        try:
            days.append(date.fromisoformat(key))
        except ValueError:
            logger.warning(f"Ignoring malformed bucket date '{key}'")
    return min(days) if days else None


def calculate_current_streak(day_buckets: Sequence[DayBucket], today: date) -> int:
    """Count consecutive days with completions, walking back from today

    A day missing from the buckets ends an ongoing streak, but before any
    streak has started it is skipped, unless it lies before the earliest
    bucket. A day present with zero completions ends the walk, except today,
    which may still be empty without breaking yesterday's streak.
    """
    if not day_buckets:
        return 0

    day_map: Dict[str, int] = {bucket.date: bucket.count for bucket in day_buckets}
    earliest = _earliest_day(day_map)

    streak = 0
    current = today
    while True:
        count = day_map.get(date_key(current))

        if count is not None and count > 0:
            streak += 1
        elif count is None:
            if earliest is not None and current < earliest:
                break
            if streak > 0:
                break
        elif current != today:
            break

        previous = current - timedelta(days=1)
        if (today - previous).days > MAX_STREAK_LOOKBACK_DAYS:
            logger.warning(
                f"Streak calculation checked back more than {MAX_STREAK_LOOKBACK_DAYS} days"
            )
            break
        current = previous

    return streak


def summarize_recap(
    day_buckets: Sequence[DayBucket],
    project_buckets: Sequence[ProjectBucket],
    today: Optional[date] = None,
) -> RecapSummary:
    """Build the recap summary

    Args:
        day_buckets: Output of aggregate_by_day
        project_buckets: Output of aggregate_by_project (count descending)
        today: Reference day for the streak, defaults to today in local time

    Returns:
        RecapSummary: Headline metrics
    """
    if today is None:
        today = local_today()

    total_done = sum(bucket.count for bucket in day_buckets)

    best_date = ""
    best_count = 0
    for bucket in day_buckets:
        # Strictly greater: the earliest of tied days wins
        if bucket.count > best_count:
            best_date = bucket.date
            best_count = bucket.count

    top = project_buckets[0] if project_buckets else None

    return RecapSummary(
        total_done=total_done,
        current_streak=calculate_current_streak(day_buckets, today),
        best_day=BestDay(date=best_date or date_key(today), count=best_count),
        top_project=TopProject(
            name=(top.project_name if top else "") or "N/A",
            count=top.count if top else 0,
        ),
    )
