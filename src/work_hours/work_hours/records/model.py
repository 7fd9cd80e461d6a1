from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from .duration import duration_hours


@dataclass(frozen=True)
class WorkRecord:
    """Domain entity: one logged work session.

    Plain data object; persistence lives in the repository implementations.
    """

    record_id: str
    work_date: date
    location: str
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    created_by: Optional[str] = None

    @property
    def duration_hours(self) -> Optional[float]:
        return duration_hours(self.start_time, self.end_time)

    @property
    def date_key(self) -> str:
        return self.work_date.isoformat()
