from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except (AttributeError, ValueError):
        raise ValidationError(f"Invalid date: {value!r}") from None


def parse_time_of_day(value: Optional[str]) -> Optional[time]:
    """Parse ``HH:MM`` (or ``HH:MM:SS``) into a minute-precision time.

    Empty input yields None; seconds are dropped.
    """
    if value is None or not str(value).strip():
        return None

    parts = str(value).strip().split(":")
    if len(parts) not in (2, 3):
        raise ValidationError(f"Invalid time: {value!r}")
    try:
        hour = int(parts[0])
        minute = int(parts[1])
    except ValueError:
        raise ValidationError(f"Invalid time: {value!r}") from None
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise ValidationError(f"Invalid time: {value!r}")
    return time(hour=hour, minute=minute)


def format_time_of_day(value: Optional[time]) -> Optional[str]:
    return value.strftime("%H:%M") if value else None


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
