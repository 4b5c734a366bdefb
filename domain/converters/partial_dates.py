"""
Converter: partial date components to a concrete timestamp.

Transcribed logs give dates as loose components (day, month, year, hour,
minute), any of which may be missing or out of range. Each component is
sanitized on its own, falling back to the current time's value.
"""

import calendar
import logging
from datetime import datetime, timezone
from typing import Optional

from domain.models.transcription import PartialDate

logger = logging.getLogger(__name__)

MIN_YEAR = 1900
MAX_YEAR = 2100


def _in_range(value: Optional[int], low: int, high: int) -> bool:
    return value is not None and low <= value <= high


def resolve_partial_date(
    parts: PartialDate,
    now: Optional[datetime] = None,
) -> datetime:
    """
    Build a timestamp from partial date components.

    Rules:
    - year outside 1900-2100, month outside 1-12, hour outside 0-23 and
      minute outside 0-59 are discarded in favour of the current time's value
    - a day beyond the last day of the resolved month is clamped to that
      last day; a day below 1 falls back to the current day (clamped too)
    - if the result is still not a valid date, the current timestamp is used

    Args:
        parts: Components read from the log
        now: Reference "current time" (defaults to UTC now)

    Returns:
        Resolved datetime, in the timezone of `now`

    Examples:
        >>> ref = datetime(2024, 6, 15, 9, 45, tzinfo=timezone.utc)
        >>> resolve_partial_date(PartialDate(day=31, month=2, year=2023, hour=25, minute=70), ref)
        datetime.datetime(2023, 2, 28, 9, 45, tzinfo=datetime.timezone.utc)
    """
    if now is None:
        now = datetime.now(timezone.utc)

    year = parts.year if _in_range(parts.year, MIN_YEAR, MAX_YEAR) else now.year
    month = parts.month if _in_range(parts.month, 1, 12) else now.month
    hour = parts.hour if _in_range(parts.hour, 0, 23) else now.hour
    minute = parts.minute if _in_range(parts.minute, 0, 59) else now.minute

    last_day = calendar.monthrange(year, month)[1]
    day = parts.day if parts.day is not None and parts.day >= 1 else now.day
    day = min(day, last_day)

    try:
        return datetime(year, month, day, hour, minute, tzinfo=now.tzinfo)
    except ValueError:
        logger.warning(f"Failed to build a valid date from {parts.model_dump()}, using current time")
        return now
