"""
Acting-party identity.

Every core operation receives a ``UserSession`` explicitly. The
``loggedInUser`` record written by the authentication layer can be turned
into one with ``load_session``; the core only reads that record.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from core.exceptions import Unauthorized
from core.models import Role
from database.record_store import LOGGED_IN_USER, RecordStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UserSession:
    user_id: str
    role: Role

    @property
    def is_volunteer(self) -> bool:
        return self.role == Role.VOLUNTEER

    @property
    def is_organization(self) -> bool:
        return self.role == Role.ORGANIZATION

    def require_volunteer(self, action: str) -> None:
        if not self.is_volunteer:
            logger.warning(f"User {self.user_id} ({self.role.value}) may not {action}")
            raise Unauthorized(f"Only volunteers may {action}")

    def require_organization(self, action: str) -> None:
        if not self.is_organization:
            logger.warning(f"User {self.user_id} ({self.role.value}) may not {action}")
            raise Unauthorized(f"Only organizations may {action}")

    @classmethod
    def volunteer(cls, user_id: str) -> "UserSession":
        return cls(user_id=user_id, role=Role.VOLUNTEER)

    @classmethod
    def organization(cls, user_id: str) -> "UserSession":
        return cls(user_id=user_id, role=Role.ORGANIZATION)


def load_session(store: RecordStore) -> Optional[UserSession]:
    """Build a UserSession from the ``loggedInUser`` record, or None if nobody is logged in."""
    data = store.get(LOGGED_IN_USER)
    if not data or not data.get("id"):
        return None
    try:
        role = Role.parse(data.get("role"))
    except ValueError:
        logger.warning(f"Ignoring session record with unknown role {data.get('role')!r}")
        return None
    return UserSession(user_id=str(data["id"]), role=role)
