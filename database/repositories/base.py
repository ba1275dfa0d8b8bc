from sqlalchemy.orm import Session

from database.record_store import RecordStore


class BaseRepository:
    def __init__(self, db: Session):
        self.db = db
        self.store = RecordStore(db)

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
