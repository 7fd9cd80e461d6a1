from __future__ import annotations

import pytest

from src.work_hours.work_hours.core.enums import Capability, Role
from src.work_hours.work_hours.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    ValidationError,
)
from src.work_hours.work_hours.records.service import WorkRecordService
from src.work_hours.work_hours.users.model import SessionUser
from src.work_hours.work_hours.users.service import AuthService, UserService, parse_role


def test_auth_wrong_password_raises(users_repo):
    with pytest.raises(AuthenticationError):
        AuthService(users_repo).authenticate("ana", "wrong")


def test_auth_unknown_user_raises(users_repo):
    with pytest.raises(AuthenticationError):
        AuthService(users_repo).authenticate("nobody", "secret1")


def test_auth_resolves_capabilities(users_repo):
    s_user = AuthService(users_repo).authenticate("admin", "admin123")

    assert s_user.role == Role.MANAGER
    assert s_user.can(Capability.MANAGE_USERS)


def test_create_account_rejects_duplicate_username(users_repo, manager):
    svc = UserService(users_repo)

    with pytest.raises(ValidationError):
        svc.create_account(manager, username="ana", password="another1", role=Role.EMPLOYEE)


def test_create_account_hashes_password(users_repo, manager):
    user = UserService(users_repo).create_account(manager, username="carl", password="carl123", role=Role.COMPANY)

    assert user.password_hash != "carl123"
    assert AuthService(users_repo).authenticate("carl", "carl123").role == Role.COMPANY


def test_short_password_rejected(users_repo, manager):
    with pytest.raises(ValidationError):
        UserService(users_repo).create_account(manager, username="dave", password="123", role=Role.EMPLOYEE)


def test_only_managers_manage_users(users_repo, employee):
    svc = UserService(users_repo)

    with pytest.raises(AuthorizationError):
        svc.create_account(employee, username="eve", password="secret9", role=Role.EMPLOYEE)
    with pytest.raises(AuthorizationError):
        svc.list_admin_view(employee)


def test_seed_admin_cannot_be_deleted(users_repo, manager):
    svc = UserService(users_repo, seed_admin_username="admin")

    with pytest.raises(ValidationError):
        svc.delete_user(manager, "u-admin")
    assert users_repo.get_by_id("u-admin") is not None


def test_delete_user(users_repo, manager):
    svc = UserService(users_repo)

    svc.delete_user(manager, "u-ana")

    assert users_repo.get_by_id("u-ana") is None
    with pytest.raises(NotFoundError):
        svc.delete_user(manager, "u-ana")


def test_update_account_keeps_password_when_blank(users_repo, manager):
    svc = UserService(users_repo)
    before = users_repo.get_by_id("u-ana").password_hash

    updated = svc.update_account(manager, "u-ana", username="ana.maria", role=Role.COMPANY)

    assert updated.username == "ana.maria"
    assert updated.role == Role.COMPANY
    assert updated.password_hash == before


def test_rename_to_taken_username_rejected(users_repo, manager):
    with pytest.raises(ValidationError):
        UserService(users_repo).update_account(manager, "u-ana", username="acme")


def test_self_registration_cannot_claim_manager(users_repo):
    svc = UserService(users_repo)

    with pytest.raises(ValidationError):
        svc.register(username="mallory", password="secret7", role=Role.MANAGER)

    user = svc.register(username="frank", password="secret7", role=Role.EMPLOYEE)
    assert users_repo.get_by_username("frank") == user


def test_list_admin_view_flags_protected_account(users_repo, manager):
    rows = UserService(users_repo).list_admin_view(manager)

    protected = {r["username"]: r["protected"] for r in rows}
    assert protected == {"admin": True, "ana": False, "acme": False}
    assert all("password_hash" not in r for r in rows)


def test_parse_role_rejects_unknown_value():
    assert parse_role("Company") == Role.COMPANY
    with pytest.raises(ValidationError):
        parse_role("Gerente")


def test_auth_rejects_non_text_credentials(users_repo):
    with pytest.raises(AuthenticationError):
        AuthService(users_repo).authenticate(None, "secret1")
    with pytest.raises(AuthenticationError):
        AuthService(users_repo).authenticate("ana", 123456)


def test_rename_moves_owned_records(users_repo, records_repo, manager):
    svc = UserService(users_repo, records=records_repo)

    renamed = svc.update_account(manager, "u-ana", username="ana2")

    ana2 = SessionUser.from_user(renamed)
    visible = WorkRecordService(records_repo).list_visible(ana2)
    assert [r.record_id for r in visible] == ["r1", "r3"]
    assert records_repo.list_for_owner("ana") == []
    assert [r.created_by for r in records_repo.list_all()] == ["ana2", "bob", "ana2"]


def test_update_without_rename_leaves_records(users_repo, records_repo, manager):
    UserService(users_repo, records=records_repo).update_account(manager, "u-ana", role=Role.COMPANY)

    assert [r.record_id for r in records_repo.list_for_owner("ana")] == ["r1", "r3"]
