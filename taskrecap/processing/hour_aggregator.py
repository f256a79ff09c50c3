"""
Hour aggregator
Buckets normalized tasks into the 24 hours of the day
"""

from typing import List, Sequence

from taskrecap.core.logger import get_logger
from taskrecap.models.entities import HourBucket, NormalizedTask

logger = get_logger(__name__)

HOURS_PER_DAY = 24


def aggregate_by_hour(tasks: Sequence[NormalizedTask]) -> List[HourBucket]:
    """Count completions per local hour, always returning 24 buckets"""
    counts = [0] * HOURS_PER_DAY

    for task in tasks:
        hour = task.hour_of_day
        if not isinstance(hour, int) or not 0 <= hour < HOURS_PER_DAY:
            logger.warning(f"Task {task.id} has invalid hour: {hour}")
            continue
        counts[hour] += 1

    return [HourBucket(hour=hour, count=count) for hour, count in enumerate(counts)]
