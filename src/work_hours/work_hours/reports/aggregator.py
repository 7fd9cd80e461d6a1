"""Date-range aggregation over work records.

Everything here is a pure function of its arguments: callers load the
records (from whichever store) and pass them in.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Optional, Sequence

from ..core.constants import DEFAULT_RECENT_LIMIT, UNASSIGNED_OWNER
from ..records.duration import duration_minutes
from ..records.model import WorkRecord


@dataclass(frozen=True)
class OwnerSummary:
    owner: str
    record_count: int
    total_hours: float
    distinct_days: int


@dataclass(frozen=True)
class Report:
    start: date
    end: date
    user_filter: Optional[str]
    records: tuple[WorkRecord, ...]
    total_hours: float
    distinct_days: int
    groups: dict[str, list[WorkRecord]] = field(default_factory=dict)

    @property
    def average_hours_per_day(self) -> float:
        if self.distinct_days == 0:
            return 0.0
        return self.total_hours / self.distinct_days

    @property
    def total_records(self) -> int:
        return len(self.records)


@dataclass(frozen=True)
class DashboardSummary:
    records_this_month: int
    unique_dates: int
    total_records: int
    recent: tuple[WorkRecord, ...]


def record_minutes(record: WorkRecord) -> int:
    return duration_minutes(record.start_time, record.end_time) or 0


def total_hours(records: Iterable[WorkRecord]) -> float:
    # Summed in whole minutes so totals do not drift.
    return sum(record_minutes(r) for r in records) / 60


def distinct_days(records: Iterable[WorkRecord]) -> int:
    return len({r.date_key for r in records})


def filter_records(
    records: Iterable[WorkRecord],
    *,
    start: date,
    end: date,
    user_filter: Optional[str] = None,
) -> list[WorkRecord]:
    """Records dated within [start, end] (both inclusive), optionally for one owner."""
    start_key = start.isoformat()
    end_key = end.isoformat()
    return [
        r
        for r in records
        if start_key <= r.date_key <= end_key and (user_filter is None or r.created_by == user_filter)
    ]


def group_by_owner(records: Iterable[WorkRecord]) -> dict[str, list[WorkRecord]]:
    """Group by ``created_by``; each group is ordered by date, newest first."""
    groups: dict[str, list[WorkRecord]] = {}
    for r in records:
        groups.setdefault(r.created_by or UNASSIGNED_OWNER, []).append(r)
    for owner_records in groups.values():
        owner_records.sort(key=lambda r: r.work_date, reverse=True)
    return groups


def build_report(
    records: Iterable[WorkRecord],
    *,
    start: date,
    end: date,
    user_filter: Optional[str] = None,
) -> Report:
    filtered = filter_records(records, start=start, end=end, user_filter=user_filter)
    return Report(
        start=start,
        end=end,
        user_filter=user_filter,
        records=tuple(filtered),
        total_hours=total_hours(filtered),
        distinct_days=distinct_days(filtered),
        groups=group_by_owner(filtered),
    )


def owner_summaries(report: Report) -> list[OwnerSummary]:
    """Per-owner totals, highest hours first."""
    out = [
        OwnerSummary(
            owner=owner,
            record_count=len(owner_records),
            total_hours=total_hours(owner_records),
            distinct_days=distinct_days(owner_records),
        )
        for owner, owner_records in report.groups.items()
    ]
    out.sort(key=lambda s: s.total_hours, reverse=True)
    return out


def summarize_dashboard(
    records: Sequence[WorkRecord],
    *,
    today: date,
    recent_limit: int = DEFAULT_RECENT_LIMIT,
) -> DashboardSummary:
    """Headline numbers for the dashboard.

    ``records`` must be in insertion order; the most recent ones come last.
    """
    this_month = [r for r in records if r.work_date.year == today.year and r.work_date.month == today.month]
    recent = tuple(reversed(records[-recent_limit:])) if recent_limit > 0 else ()
    return DashboardSummary(
        records_this_month=len(this_month),
        unique_dates=distinct_days(records),
        total_records=len(records),
        recent=recent,
    )
