"""
Task normalizer
Turns raw completed tasks into NormalizedTask records with a local completion time and hour
"""

from datetime import datetime, tzinfo
from typing import List, Optional, Sequence

from taskrecap.core.logger import get_logger
from taskrecap.models.entities import NormalizedTask, RawTask

from .clock import to_local

logger = get_logger(__name__)


def parse_completed_at(value: str, tz: Optional[tzinfo] = None) -> Optional[datetime]:
    """Parse an ISO-8601 completion timestamp into local time, None when unparseable"""
    if not value or not value.strip():
        return None
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        return to_local(parsed, tz)
    except (ValueError, OverflowError):
        return None


def normalize(
    raw_tasks: Sequence[RawTask], tz: Optional[tzinfo] = None
) -> List[NormalizedTask]:
    """Normalize completed tasks, dropping those without a valid completion date

    Args:
        raw_tasks: Tasks as supplied by the data source
        tz: Zone used as local time, None for the system zone

    Returns:
        List[NormalizedTask]: Valid tasks in input order
    """
    normalized: List[NormalizedTask] = []
    dropped = 0

    for task in raw_tasks:
        completed_date = parse_completed_at(task.completed_at, tz)
        if completed_date is None:
            dropped += 1
            logger.warning(
                f"Dropping task {task.id or '<no id>'}: invalid completion date '{task.completed_at}'"
            )
            continue

        normalized.append(
            NormalizedTask(
                **task.model_dump(by_alias=False, include=set(RawTask.model_fields)),
                completed_date=completed_date,
                hour_of_day=completed_date.hour,
            )
        )

    if dropped:
        logger.info(f"Normalized {len(normalized)} tasks, dropped {dropped}")
    return normalized
