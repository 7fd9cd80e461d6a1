from __future__ import annotations

from typing import FrozenSet

from .enums import Capability, Role
from .exceptions import AuthorizationError

ROLE_CAPABILITIES: dict[Role, FrozenSet[Capability]] = {
    Role.MANAGER: frozenset(Capability),
    Role.EMPLOYEE: frozenset({Capability.REGISTER_WORK}),
    Role.COMPANY: frozenset({Capability.VIEW_REPORTS, Capability.VIEW_ALL_RECORDS}),
}


def capabilities_for(role: Role) -> FrozenSet[Capability]:
    return ROLE_CAPABILITIES.get(role, frozenset())


def require(capabilities: FrozenSet[Capability], capability: Capability) -> None:
    if capability not in capabilities:
        raise AuthorizationError("You do not have permission for this action")
