"""Caller identity and role model.

Identity itself is established upstream (the gateway in front of this service
authenticates users); requests arrive with the external user id and the role
labels granted to that user. This module turns those raw values into a typed
``CallerContext`` so the rest of the code never compares role strings.
"""

from __future__ import annotations

import hmac
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable
from uuid import UUID

from app.core.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)


class Role(str, Enum):
    DIRECTOR = "director"
    PROJECT_MANAGER = "project_manager"
    EMPLOYEE = "employee"


MANAGER_OR_ABOVE = frozenset({Role.DIRECTOR, Role.PROJECT_MANAGER})
EMPLOYEE_OR_ABOVE = frozenset({Role.DIRECTOR, Role.PROJECT_MANAGER, Role.EMPLOYEE})


@dataclass(frozen=True)
class CallerContext:
    identity: str
    roles: frozenset[Role] = field(default_factory=frozenset)
    employee_id: UUID | None = None

    @property
    def is_director(self) -> bool:
        return Role.DIRECTOR in self.roles

    def has_any(self, allowed: Iterable[Role]) -> bool:
        return not self.roles.isdisjoint(allowed)


def parse_roles(raw: str | None) -> frozenset[Role]:
    if not raw:
        return frozenset()

    roles: set[Role] = set()
    for label in raw.split(","):
        label = label.strip().lower()
        if not label:
            continue
        try:
            roles.add(Role(label))
        except ValueError:
            logger.debug("auth.role.ignored label=%s", label)
    return frozenset(roles)


def verify_local_token(authorization: str | None) -> bool:
    expected = settings.local_auth_token
    if not expected:
        return True
    if not authorization or not authorization.lower().startswith("bearer "):
        return False
    token = authorization[len("bearer ") :].strip()
    return hmac.compare_digest(token.encode("utf-8"), expected.encode("utf-8"))
