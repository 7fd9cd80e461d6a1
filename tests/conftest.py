from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, time
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from src.work_hours.work_hours.container import assemble
from src.work_hours.work_hours.core.enums import Role
from src.work_hours.work_hours.records.model import WorkRecord
from src.work_hours.work_hours.users.model import SessionUser, User


class InMemoryRecords:
    def __init__(self, records=None):
        self._records: list[WorkRecord] = list(records or [])

    def list_all(self):
        return list(self._records)

    def list_for_owner(self, created_by: str):
        return [r for r in self._records if r.created_by == created_by]

    def get_by_id(self, record_id: str) -> Optional[WorkRecord]:
        return next((r for r in self._records if r.record_id == record_id), None)

    def create(self, record: WorkRecord) -> None:
        self._records.append(record)

    def update(self, record: WorkRecord) -> bool:
        for i, r in enumerate(self._records):
            if r.record_id == record.record_id:
                self._records[i] = record
                return True
        return False

    def delete_by_id(self, record_id: str) -> bool:
        before = len(self._records)
        self._records = [r for r in self._records if r.record_id != record_id]
        return len(self._records) < before

    def reassign_owner(self, old_owner: str, new_owner: str) -> int:
        moved = 0
        for i, r in enumerate(self._records):
            if r.created_by == old_owner:
                self._records[i] = replace(r, created_by=new_owner)
                moved += 1
        return moved


class InMemoryUsers:
    def __init__(self, users=None):
        self._users: dict[str, User] = {u.user_id: u for u in (users or [])}

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self._users.get(user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self._users.values() if u.username == username), None)

    def create_user(self, user: User) -> None:
        self._users[user.user_id] = user

    def update_user(self, user: User) -> bool:
        if user.user_id not in self._users:
            return False
        self._users[user.user_id] = user
        return True

    def delete_by_id(self, user_id: str) -> bool:
        return self._users.pop(user_id, None) is not None

    def list_all(self):
        return list(self._users.values())


def make_user(user_id: str, username: str, password: str, role: Role) -> User:
    return User(user_id=user_id, username=username, password_hash=generate_password_hash(password), role=role)


def make_record(
    record_id: str,
    work_date: date,
    location: str = "Office",
    start: Optional[time] = time(8, 0),
    end: Optional[time] = time(17, 0),
    created_by: Optional[str] = "ana",
) -> WorkRecord:
    return WorkRecord(
        record_id=record_id,
        work_date=work_date,
        location=location,
        start_time=start,
        end_time=end,
        created_by=created_by,
    )


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 1, 15, 9, 30)


@pytest.fixture
def manager() -> SessionUser:
    return SessionUser.from_user(make_user("u-admin", "admin", "admin123", Role.MANAGER))


@pytest.fixture
def employee() -> SessionUser:
    return SessionUser.from_user(make_user("u-ana", "ana", "secret1", Role.EMPLOYEE))


@pytest.fixture
def company() -> SessionUser:
    return SessionUser.from_user(make_user("u-acme", "acme", "secret2", Role.COMPANY))


@pytest.fixture
def users_repo() -> InMemoryUsers:
    return InMemoryUsers(
        [
            make_user("u-admin", "admin", "admin123", Role.MANAGER),
            make_user("u-ana", "ana", "secret1", Role.EMPLOYEE),
            make_user("u-acme", "acme", "secret2", Role.COMPANY),
        ]
    )


@pytest.fixture
def records_repo() -> InMemoryRecords:
    return InMemoryRecords(
        [
            make_record("r1", date(2024, 1, 1), "A", time(8, 0), time(16, 0), created_by="ana"),
            make_record("r2", date(2024, 1, 3), "B", time(9, 0), time(13, 0), created_by="bob"),
            make_record("r3", date(2024, 2, 1), "C", time(22, 0), time(6, 0), created_by="ana"),
        ]
    )


@pytest.fixture
def container(records_repo, users_repo):
    return assemble(records_repo=records_repo, users_repo=users_repo, seed_admin_username="admin")


@pytest.fixture
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    from src.work_hours.work_hours.main import create_app

    return create_app(container=container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    def _login(username: str, password: str):
        return client.post("/login", json={"username": username, "password": password})

    return _login
