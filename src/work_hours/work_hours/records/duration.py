from __future__ import annotations

from datetime import time
from typing import Optional

from ..core.constants import MINUTES_PER_DAY


def _minutes_since_midnight(value: time) -> int:
    return value.hour * 60 + value.minute


def duration_minutes(start: Optional[time], end: Optional[time]) -> Optional[int]:
    """Whole minutes from ``start`` to ``end``, wrapping past midnight.

    An end earlier than the start means the session ended on the next day.
    Equal times give 0. Returns None when either side is missing.
    """
    if start is None or end is None:
        return None

    diff = _minutes_since_midnight(end) - _minutes_since_midnight(start)
    if diff < 0:
        diff += MINUTES_PER_DAY
    return diff


def duration_hours(start: Optional[time], end: Optional[time]) -> Optional[float]:
    minutes = duration_minutes(start, end)
    if minutes is None:
        return None
    return minutes / 60
