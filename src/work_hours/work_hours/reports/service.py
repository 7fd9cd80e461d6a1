from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..core.enums import Capability
from ..core.exceptions import ValidationError
from ..core.permissions import require
from ..records.repository import WorkRecordRepository
from ..records.service import visible_records
from ..users.model import SessionUser
from .aggregator import Report, build_report

logger = logging.getLogger(__name__)


class ReportService:
    def __init__(self, records: WorkRecordRepository):
        self._records = records

    def build(
        self,
        actor: SessionUser,
        *,
        start: date,
        end: date,
        user_filter: Optional[str] = None,
    ) -> Report:
        require(actor.capabilities, Capability.VIEW_REPORTS)
        if start > end:
            raise ValidationError("Start date must not be after end date")

        if not actor.can(Capability.VIEW_ALL_RECORDS):
            user_filter = actor.username

        report = build_report(
            visible_records(self._records, actor),
            start=start,
            end=end,
            user_filter=user_filter or None,
        )
        logger.debug(
            "Report %s..%s user=%r: %d records, %.2fh",
            start,
            end,
            report.user_filter,
            report.total_records,
            report.total_hours,
        )
        return report
