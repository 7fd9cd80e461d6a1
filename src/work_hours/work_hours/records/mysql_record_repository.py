from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import WorkRecord
from .repository import WorkRecordRepository

_COLUMNS = "record_id, work_date, location, start_time, end_time, created_by"


def _to_record(row: Dict[str, Any]) -> WorkRecord:
    return WorkRecord(
        record_id=str(row["record_id"]),
        work_date=row["work_date"],
        location=row["location"],
        start_time=normalize_mysql_time(row.get("start_time")),
        end_time=normalize_mysql_time(row.get("end_time")),
        created_by=row.get("created_by"),
    )


class MySQLWorkRecordRepository(WorkRecordRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[WorkRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM work_records ORDER BY seq ASC")
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_owner(self, created_by: str) -> Sequence[WorkRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM work_records WHERE created_by=%s ORDER BY seq ASC",
                (created_by,),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def get_by_id(self, record_id: str) -> Optional[WorkRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM work_records WHERE record_id=%s", (record_id,))
            row = fetchone(cur)
            return _to_record(row) if row else None

    def create(self, record: WorkRecord) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO work_records(record_id, work_date, location, start_time, end_time, created_by)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    record.record_id,
                    record.work_date,
                    record.location,
                    record.start_time,
                    record.end_time,
                    record.created_by,
                ),
            )

    def update(self, record: WorkRecord) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE work_records
                SET work_date=%s, location=%s, start_time=%s, end_time=%s
                WHERE record_id=%s
                """,
                (record.work_date, record.location, record.start_time, record.end_time, record.record_id),
            )
            # MySQL reports 0 affected rows when nothing changed; check existence separately.
            if cur.rowcount > 0:
                return True
            cur.execute("SELECT 1 AS found FROM work_records WHERE record_id=%s", (record.record_id,))
            return fetchone(cur) is not None

    def delete_by_id(self, record_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM work_records WHERE record_id=%s", (record_id,))
            return cur.rowcount > 0

    def reassign_owner(self, old_owner: str, new_owner: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE work_records SET created_by=%s WHERE created_by=%s",
                (new_owner, old_owner),
            )
            return cur.rowcount
