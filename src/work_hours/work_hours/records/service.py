from __future__ import annotations

import logging
import uuid
from datetime import date, time
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty
from ..core.enums import Capability
from ..core.exceptions import NotFoundError, ValidationError
from ..core.permissions import require
from ..reports.aggregator import DashboardSummary, summarize_dashboard
from ..users.model import SessionUser
from .model import WorkRecord
from .repository import WorkRecordRepository

logger = logging.getLogger(__name__)

_UNSET = object()


def visible_records(records: WorkRecordRepository, actor: SessionUser) -> Sequence[WorkRecord]:
    """Records the actor may see: everything for VIEW_ALL_RECORDS, own records otherwise."""
    if actor.can(Capability.VIEW_ALL_RECORDS):
        return records.list_all()
    return records.list_for_owner(actor.username)


class WorkRecordService:
    def __init__(self, records: WorkRecordRepository):
        self._records = records

    def register(
        self,
        actor: SessionUser,
        *,
        location: str,
        start_time: Optional[time],
        end_time: Optional[time],
        work_date: Optional[date] = None,
    ) -> WorkRecord:
        require(actor.capabilities, Capability.REGISTER_WORK)

        location = require_non_empty(location, "Location")
        if start_time is None or end_time is None:
            raise ValidationError("Start and end time are required")

        record = WorkRecord(
            record_id=uuid.uuid4().hex,
            work_date=work_date or now_local().date(),
            location=location,
            start_time=start_time,
            end_time=end_time,
            created_by=actor.username,
        )
        self._records.create(record)
        logger.info("Work record %s registered by %r", record.record_id, actor.username)
        return record

    def update(
        self,
        actor: SessionUser,
        record_id: str,
        *,
        location: Optional[str] = None,
        work_date: Optional[date] = None,
        start_time=_UNSET,
        end_time=_UNSET,
    ) -> WorkRecord:
        """Edit a record in place. The owner and identifier never change.

        Times left unset keep their current value; passing None clears them.
        """
        require(actor.capabilities, Capability.EDIT_RECORDS)

        current = self._records.get_by_id(record_id)
        if not current:
            raise NotFoundError("Work record not found")

        updated = WorkRecord(
            record_id=current.record_id,
            work_date=work_date or current.work_date,
            location=require_non_empty(location, "Location") if location is not None else current.location,
            start_time=current.start_time if start_time is _UNSET else start_time,
            end_time=current.end_time if end_time is _UNSET else end_time,
            created_by=current.created_by,
        )
        if not self._records.update(updated):
            raise NotFoundError("Work record not found")
        logger.info("Work record %s updated by %r", record_id, actor.username)
        return updated

    def delete(self, actor: SessionUser, record_id: str) -> None:
        require(actor.capabilities, Capability.EDIT_RECORDS)

        if not self._records.delete_by_id(record_id):
            raise NotFoundError("Work record not found")
        logger.info("Work record %s deleted by %r", record_id, actor.username)

    def list_visible(self, actor: SessionUser) -> Sequence[WorkRecord]:
        return visible_records(self._records, actor)

    def dashboard(self, actor: SessionUser, *, today: Optional[date] = None) -> DashboardSummary:
        return summarize_dashboard(self.list_visible(actor), today=today or now_local().date())
