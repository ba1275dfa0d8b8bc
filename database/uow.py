import contextlib
import logging
from dataclasses import dataclass
from typing import Iterator, Optional

from sqlalchemy.orm import Session, sessionmaker

from database.database import SessionLocal, db_session_scope
from database.record_store import RecordStore
from database.repositories import ApplicationRepository, PositionRepository, UserRepository

logger = logging.getLogger(__name__)


@dataclass
class Repositories:
    """Repositories sharing one Session (and therefore one transaction)."""
    db: Session
    store: RecordStore
    users: UserRepository
    positions: PositionRepository
    applications: ApplicationRepository

    @classmethod
    def bind(cls, db: Session) -> "Repositories":
        return cls(
            db=db,
            store=RecordStore(db),
            users=UserRepository(db),
            positions=PositionRepository(db),
            applications=ApplicationRepository(db),
        )


@contextlib.contextmanager
def record_uow(session_factory: Optional[sessionmaker] = None) -> Iterator[Repositories]:
    """Per-unit-of-work transaction scope.

    Yields Repositories bound to a fresh Session. Commits on success,
    rolls back on exception, always closes.

    Usage:
        with record_uow() as repos:
            application = repos.applications.get_by_id(application_id)
            # perform operations...
        # commit happens automatically on successful exit
    """
    with db_session_scope(session_factory or SessionLocal) as session:
        yield Repositories.bind(session)
