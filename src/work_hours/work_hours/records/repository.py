from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import WorkRecord


class WorkRecordRepository(Protocol):
    """Repository interface for WorkRecord.

    Services depend on this protocol, never on a concrete database. Listing
    methods return records in insertion order (oldest first).
    """

    def list_all(self) -> Sequence[WorkRecord]:
        raise NotImplementedError

    def list_for_owner(self, created_by: str) -> Sequence[WorkRecord]:
        raise NotImplementedError

    def get_by_id(self, record_id: str) -> Optional[WorkRecord]:
        raise NotImplementedError

    def create(self, record: WorkRecord) -> None:
        raise NotImplementedError

    def update(self, record: WorkRecord) -> bool:
        raise NotImplementedError

    def delete_by_id(self, record_id: str) -> bool:
        raise NotImplementedError

    def reassign_owner(self, old_owner: str, new_owner: str) -> int:
        raise NotImplementedError
