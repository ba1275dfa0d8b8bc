"""
Key-value record store backed by the ``record`` table.

Every record lives under its own key, so concurrent writers only contend on
the record they touch. ``set`` is last-writer-wins; ``compare_and_set`` only
writes when the stored version still matches the one the caller read.

Key layout:
    user_<id>           user profile
    position_<id>       position
    application_<id>    application
    claim_<volunteer>_<position>
                        uniqueness claim for a (volunteer, position) pair
    loggedInUser        {id, role} of the current session (read-only here)
"""

import copy
import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import select, update, delete
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from database.models import Record

logger = logging.getLogger(__name__)

USER_PREFIX = "user_"
POSITION_PREFIX = "position_"
APPLICATION_PREFIX = "application_"
CLAIM_PREFIX = "claim_"
LOGGED_IN_USER = "loggedInUser"


def user_key(user_id: str) -> str:
    return f"{USER_PREFIX}{user_id}"


def position_key(position_id: str) -> str:
    return f"{POSITION_PREFIX}{position_id}"


def application_key(application_id: str) -> str:
    return f"{APPLICATION_PREFIX}{application_id}"


def claim_key(volunteer_id: str, position_id: str) -> str:
    return f"{CLAIM_PREFIX}{volunteer_id}_{position_id}"


class RecordStore:
    def __init__(self, db: Session):
        self.db = db

    def _row(self, key: str) -> Optional[Record]:
        stmt = select(Record).where(Record.key == key)
        return self.db.execute(stmt).scalar_one_or_none()

    def get(self, key: str, default: Any = None) -> Any:
        row = self._row(key)
        if row is None:
            return default
        return copy.deepcopy(row.value)

    def get_with_version(self, key: str) -> Tuple[Optional[Dict[str, Any]], Optional[int]]:
        row = self._row(key)
        if row is None:
            return None, None
        return copy.deepcopy(row.value), row.version

    def set(self, key: str, value: Dict[str, Any]) -> bool:
        """Insert or overwrite ``key``. Returns False if the write failed."""
        try:
            row = self._row(key)
            if row is None:
                self.db.add(Record(key=key, value=copy.deepcopy(value), version=1))
            else:
                row.value = copy.deepcopy(value)
                row.version = row.version + 1
            self.db.flush()
            return True
        except SQLAlchemyError as e:
            logger.error(f"Error setting data for key {key}: {e}")
            return False

    def compare_and_set(
        self,
        key: str,
        value: Dict[str, Any],
        expected_version: Optional[int]
    ) -> bool:
        """
        Write ``value`` only if the stored version equals ``expected_version``.

        ``expected_version=None`` means the key must not exist yet (insert-if-absent).
        Returns False when the precondition does not hold; nothing is written.
        """
        if expected_version is None:
            if self._row(key) is not None:
                return False
            try:
                self.db.add(Record(key=key, value=copy.deepcopy(value), version=1))
                self.db.flush()
            except IntegrityError:
                # Another transaction inserted the key first; the session must be rolled back
                logger.warning(f"Compare-and-set rejected for {key} (inserted concurrently)")
                return False
            return True

        stmt = (
            update(Record)
            .where(Record.key == key, Record.version == expected_version)
            .values(value=copy.deepcopy(value), version=Record.version + 1)
            .execution_options(synchronize_session=False)
        )
        result = self.db.execute(stmt)
        if result.rowcount != 1:
            logger.warning(f"Compare-and-set rejected for {key} (expected version {expected_version})")
            return False

        # Loaded instances for this key are now stale
        row = self.db.get(Record, key)
        if row is not None:
            self.db.refresh(row)
        return True

    def matching_keys(self, prefix: str) -> List[str]:
        stmt = (
            select(Record.key)
            .where(Record.key.startswith(prefix, autoescape=True))
            .order_by(Record.key)
        )
        return list(self.db.execute(stmt).scalars().all())

    def list_by_prefix(self, prefix: str) -> List[Dict[str, Any]]:
        stmt = (
            select(Record)
            .where(Record.key.startswith(prefix, autoescape=True))
            .order_by(Record.created_at, Record.key)
        )
        rows = self.db.execute(stmt).scalars().all()
        return [copy.deepcopy(row.value) for row in rows]

    def delete(self, key: str) -> bool:
        result = self.db.execute(delete(Record).where(Record.key == key))
        return result.rowcount > 0
