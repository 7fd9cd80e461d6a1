from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet

from ..core.enums import Capability, Role
from ..core.permissions import capabilities_for


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: plain data object (no DB access code).
    """

    user_id: str
    username: str
    password_hash: str
    role: Role


@dataclass(frozen=True)
class SessionUser:
    """The acting user, with capabilities resolved once at login."""

    user_id: str
    username: str
    role: Role
    capabilities: FrozenSet[Capability] = field(default_factory=frozenset)

    @classmethod
    def from_user(cls, user: User) -> "SessionUser":
        return cls(
            user_id=user.user_id,
            username=user.username,
            role=user.role,
            capabilities=capabilities_for(user.role),
        )

    def can(self, capability: Capability) -> bool:
        return capability in self.capabilities
