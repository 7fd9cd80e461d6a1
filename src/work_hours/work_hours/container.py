from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .core.constants import DEFAULT_SEED_ADMIN_USERNAME
from .database.connection import DBConfig, DatabaseConnection
from .records.mysql_record_repository import MySQLWorkRecordRepository
from .records.repository import WorkRecordRepository
from .records.service import WorkRecordService
from .reports.service import ReportService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    records_repo: WorkRecordRepository
    users_repo: UserRepository

    auth_service: AuthService
    user_service: UserService
    record_service: WorkRecordService
    report_service: ReportService


def assemble(
    *,
    records_repo: WorkRecordRepository,
    users_repo: UserRepository,
    seed_admin_username: str = DEFAULT_SEED_ADMIN_USERNAME,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services on top of any repository implementations."""
    return Container(
        conn=conn,
        records_repo=records_repo,
        users_repo=users_repo,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo, records=records_repo, seed_admin_username=seed_admin_username),
        record_service=WorkRecordService(records_repo),
        report_service=ReportService(records_repo),
    )


def build_container(*, db_config: dict, seed_admin_username: str = DEFAULT_SEED_ADMIN_USERNAME) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return assemble(
        records_repo=MySQLWorkRecordRepository(conn),
        users_repo=MySQLUserRepository(conn),
        seed_admin_username=seed_admin_username,
        conn=conn,
    )
