import logging
from typing import List, Optional

from core.models import UserProfile
from database.record_store import USER_PREFIX, user_key
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class UserRepository(BaseRepository):
    def get_by_id(self, user_id: str) -> Optional[UserProfile]:
        data = self.store.get(user_key(user_id))
        if not data:
            return None
        return UserProfile.from_record(data)

    def list_all(self) -> List[UserProfile]:
        return [UserProfile.from_record(d) for d in self.store.list_by_prefix(USER_PREFIX) if d]

    def get_by_email(self, email: str) -> Optional[UserProfile]:
        wanted = normalize_email(email)
        for user in self.list_all():
            if normalize_email(user.email) == wanted:
                return user
        return None

    def save(self, user: UserProfile) -> bool:
        ok = self.store.set(user_key(user.id), user.to_record())
        if ok:
            logger.debug(f"Saved user {user.id} ({user.role.value})")
        return ok
