from __future__ import annotations

import csv
import io
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import format_time_of_day, now_local
from ..records.model import WorkRecord
from .aggregator import Report, owner_summaries

CSV_FIELDS = ["work_date", "location", "start_time", "end_time", "duration_hours", "created_by"]


def _round_hours(value: Optional[float]) -> Optional[float]:
    return round(value, 2) if value is not None else None


def record_to_dict(record: WorkRecord) -> dict:
    return {
        "record_id": record.record_id,
        "work_date": record.date_key,
        "location": record.location,
        "start_time": format_time_of_day(record.start_time),
        "end_time": format_time_of_day(record.end_time),
        "duration_hours": _round_hours(record.duration_hours),
        "created_by": record.created_by,
    }


def _compact_date(value: date) -> str:
    return value.isoformat().replace("-", "")


def report_filename(report: Report, extension: str) -> str:
    return f"work_report_{_compact_date(report.start)}_{_compact_date(report.end)}.{extension}"


def report_to_dict(report: Report, *, generated_at: Optional[datetime] = None) -> dict:
    generated_at = generated_at or now_local()
    return {
        "period": {
            "start": report.start.isoformat(),
            "end": report.end.isoformat(),
        },
        "user": report.user_filter,
        "total_records": report.total_records,
        "total_hours": _round_hours(report.total_hours),
        "distinct_days": report.distinct_days,
        "average_hours_per_day": _round_hours(report.average_hours_per_day),
        "records": [record_to_dict(r) for r in report.records],
        "by_user": [
            {
                "user": s.owner,
                "record_count": s.record_count,
                "total_hours": _round_hours(s.total_hours),
                "distinct_days": s.distinct_days,
                "records": [record_to_dict(r) for r in report.groups[s.owner]],
            }
            for s in owner_summaries(report)
        ],
        "generated_at": generated_at.isoformat(timespec="seconds"),
    }


def report_to_csv_bytes(report: Report) -> bytes:
    """CSV of the filtered records, UTF-8 with BOM so spreadsheets pick the encoding."""
    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=CSV_FIELDS, extrasaction="ignore")
    writer.writeheader()
    for record in report.records:
        row = record_to_dict(record)
        row["start_time"] = row["start_time"] or ""
        row["end_time"] = row["end_time"] or ""
        row["duration_hours"] = "" if row["duration_hours"] is None else f"{row['duration_hours']:.2f}"
        row["created_by"] = row["created_by"] or ""
        writer.writerow(row)
    return out.getvalue().encode("utf-8-sig")
