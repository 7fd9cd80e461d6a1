from __future__ import annotations

from datetime import date, time

import pytest

from src.work_hours.work_hours.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.work_hours.work_hours.records.service import WorkRecordService

from conftest import InMemoryRecords, make_record


def test_register_assigns_owner_and_fresh_id(employee):
    repo = InMemoryRecords()
    svc = WorkRecordService(repo)

    first = svc.register(employee, location=" Client ABC ", start_time=time(8, 0), end_time=time(17, 0), work_date=date(2024, 1, 2))
    second = svc.register(employee, location="Office", start_time=time(8, 0), end_time=time(12, 0), work_date=date(2024, 1, 2))

    assert first.record_id != second.record_id
    assert first.created_by == "ana"
    assert first.location == "Client ABC"
    assert first.duration_hours == 9.0
    assert repo.get_by_id(first.record_id) == first


def test_register_defaults_to_today(employee, fixed_now, monkeypatch):
    monkeypatch.setattr("src.work_hours.work_hours.records.service.now_local", lambda: fixed_now)
    svc = WorkRecordService(InMemoryRecords())

    record = svc.register(employee, location="Office", start_time=time(8, 0), end_time=time(9, 0))

    assert record.work_date == fixed_now.date()


def test_register_requires_location_and_times(employee):
    svc = WorkRecordService(InMemoryRecords())

    with pytest.raises(ValidationError):
        svc.register(employee, location="   ", start_time=time(8, 0), end_time=time(9, 0))
    with pytest.raises(ValidationError):
        svc.register(employee, location="Office", start_time=None, end_time=time(9, 0))


def test_company_cannot_register_work(company):
    svc = WorkRecordService(InMemoryRecords())

    with pytest.raises(AuthorizationError):
        svc.register(company, location="Office", start_time=time(8, 0), end_time=time(9, 0))


def test_update_keeps_identity_and_owner(manager):
    repo = InMemoryRecords([make_record("r1", date(2024, 1, 1), "Old", created_by="ana")])
    svc = WorkRecordService(repo)

    updated = svc.update(manager, "r1", location="New")

    assert updated.record_id == "r1"
    assert updated.created_by == "ana"
    assert updated.location == "New"
    assert updated.start_time == time(8, 0)
    assert repo.get_by_id("r1").location == "New"


def test_update_can_clear_times(manager):
    repo = InMemoryRecords([make_record("r1", date(2024, 1, 1))])
    svc = WorkRecordService(repo)

    updated = svc.update(manager, "r1", start_time=None, end_time=None)

    assert updated.duration_hours is None


def test_update_unknown_record(manager):
    svc = WorkRecordService(InMemoryRecords())

    with pytest.raises(NotFoundError):
        svc.update(manager, "missing", location="X")


def test_employee_cannot_edit_or_delete(employee):
    repo = InMemoryRecords([make_record("r1", date(2024, 1, 1))])
    svc = WorkRecordService(repo)

    with pytest.raises(AuthorizationError):
        svc.update(employee, "r1", location="X")
    with pytest.raises(AuthorizationError):
        svc.delete(employee, "r1")


def test_delete_removes_by_id(manager):
    repo = InMemoryRecords([make_record("r1", date(2024, 1, 1)), make_record("r2", date(2024, 1, 2))])
    svc = WorkRecordService(repo)

    svc.delete(manager, "r1")

    assert [r.record_id for r in repo.list_all()] == ["r2"]
    with pytest.raises(NotFoundError):
        svc.delete(manager, "r1")


def test_visibility_follows_ownership(manager, employee, records_repo):
    svc = WorkRecordService(records_repo)

    assert {r.record_id for r in svc.list_visible(manager)} == {"r1", "r2", "r3"}
    assert {r.record_id for r in svc.list_visible(employee)} == {"r1", "r3"}


def test_dashboard_counts_visible_records(employee, records_repo):
    svc = WorkRecordService(records_repo)

    summary = svc.dashboard(employee, today=date(2024, 1, 20))

    assert summary.total_records == 2
    assert summary.records_this_month == 1
    assert [r.record_id for r in summary.recent] == ["r3", "r1"]
