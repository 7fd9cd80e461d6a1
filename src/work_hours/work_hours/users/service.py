from __future__ import annotations

import logging
import uuid
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty
from ..core.constants import DEFAULT_SEED_ADMIN_USERNAME, MIN_PASSWORD_LENGTH
from ..core.enums import Capability, Role
from ..core.exceptions import AuthenticationError, NotFoundError, ValidationError
from ..core.permissions import require
from ..records.repository import WorkRecordRepository
from .model import SessionUser, User
from .repository import UserRepository

logger = logging.getLogger(__name__)


def parse_role(value: Optional[str]) -> Role:
    try:
        return Role(value)
    except ValueError:
        raise ValidationError("Invalid role") from None


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, username: str, password: str) -> SessionUser:
        if not isinstance(username, str) or not isinstance(password, str):
            raise AuthenticationError("Invalid username or password")
        user = self._users.get_by_username(username.strip())
        if not user:
            logger.info("Login failed for unknown user %r", username)
            raise AuthenticationError("Invalid username or password")

        try:
            ok = check_password_hash(user.password_hash, password)
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            logger.info("Login failed for %r", user.username)
            raise AuthenticationError("Invalid username or password")

        return SessionUser.from_user(user)


class UserService:
    """Use case: manage the user roster."""

    def __init__(
        self,
        users: UserRepository,
        *,
        records: Optional[WorkRecordRepository] = None,
        seed_admin_username: str = DEFAULT_SEED_ADMIN_USERNAME,
    ):
        self._users = users
        self._records = records
        self._seed_admin_username = seed_admin_username

    def is_protected(self, user: User) -> bool:
        return user.username == self._seed_admin_username

    def _ensure_username_free(self, username: str, *, exclude_user_id: Optional[str] = None) -> None:
        existing = self._users.get_by_username(username)
        if existing and existing.user_id != exclude_user_id:
            raise ValidationError("Username already exists")

    def _new_account(self, *, username: str, password: str, role: Role) -> User:
        username = require_non_empty(username, "Username")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
        self._ensure_username_free(username)

        user = User(
            user_id=uuid.uuid4().hex,
            username=username,
            password_hash=generate_password_hash(password),
            role=role,
        )
        self._users.create_user(user)
        logger.info("User %r created with role %s", user.username, user.role.value)
        return user

    def register(self, *, username: str, password: str, role: Role) -> User:
        """Self-registration; the Manager role can only be granted by a manager."""
        if role == Role.MANAGER:
            raise ValidationError("Manager accounts cannot be self-registered")
        return self._new_account(username=username, password=password, role=role)

    def create_account(self, actor: SessionUser, *, username: str, password: str, role: Role) -> User:
        require(actor.capabilities, Capability.MANAGE_USERS)
        return self._new_account(username=username, password=password, role=role)

    def update_account(
        self,
        actor: SessionUser,
        user_id: str,
        *,
        username: Optional[str] = None,
        password: Optional[str] = None,
        role: Optional[Role] = None,
    ) -> User:
        require(actor.capabilities, Capability.MANAGE_USERS)

        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")

        new_username = user.username
        if username is not None:
            new_username = require_non_empty(username, "Username")
            if new_username != user.username:
                if self.is_protected(user):
                    raise ValidationError("The administrator account cannot be renamed")
                self._ensure_username_free(new_username, exclude_user_id=user.user_id)

        password_hash = user.password_hash
        if password:
            require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
            password_hash = generate_password_hash(password)

        updated = User(
            user_id=user.user_id,
            username=new_username,
            password_hash=password_hash,
            role=role or user.role,
        )
        if not self._users.update_user(updated):
            raise NotFoundError("User not found")
        if updated.username != user.username and self._records is not None:
            # Records are owned by username; carry them over to the new name.
            moved = self._records.reassign_owner(user.username, updated.username)
            logger.info("Moved %d record(s) from %r to %r", moved, user.username, updated.username)
        logger.info("User %r updated by %r", updated.username, actor.username)
        return updated

    def delete_user(self, actor: SessionUser, user_id: str) -> None:
        require(actor.capabilities, Capability.MANAGE_USERS)

        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        if self.is_protected(user):
            raise ValidationError("The administrator account cannot be deleted")

        if not self._users.delete_by_id(user_id):
            raise NotFoundError("User not found")
        logger.info("User %r deleted by %r", user.username, actor.username)

    def list_admin_view(self, actor: SessionUser) -> list[dict]:
        require(actor.capabilities, Capability.MANAGE_USERS)
        return [
            {
                "user_id": u.user_id,
                "username": u.username,
                "role": u.role.value,
                "protected": self.is_protected(u),
            }
            for u in self._users.list_all()
        ]
