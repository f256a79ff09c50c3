"""
Local time helpers
Calendar days and hours are always taken in one "local" zone: a configured IANA zone or the system zone
"""

from datetime import date, datetime, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from taskrecap.core.logger import get_logger

logger = get_logger(__name__)


def resolve_timezone(name: Optional[str]) -> Optional[tzinfo]:
    """Resolve an IANA zone name, None means system local time"""
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning(f"Unknown timezone '{name}', falling back to system local time")
        return None


def to_local(value: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """Convert to an aware datetime in the local zone

    Naive values are taken as already local.
    """
    if value.tzinfo is None:
        if tz is not None:
            return value.replace(tzinfo=tz)
        return value.astimezone()
    return value.astimezone(tz)


def local_today(tz: Optional[tzinfo] = None) -> date:
    return datetime.now(tz).date()


def date_key(day: date) -> str:
    """YYYY-MM-DD key, zero padded for every year"""
    return day.isoformat()
