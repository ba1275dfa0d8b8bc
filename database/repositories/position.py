import logging
from typing import List, Optional

from core.models import Position
from database.record_store import POSITION_PREFIX, position_key
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class PositionRepository(BaseRepository):
    def get_by_id(self, position_id: str) -> Optional[Position]:
        data = self.store.get(position_key(position_id))
        if not data:
            return None
        return Position.from_record(data)

    def list_all(self) -> List[Position]:
        return [Position.from_record(d) for d in self.store.list_by_prefix(POSITION_PREFIX) if d]

    def list_for_organization(self, ngo_id: str) -> List[Position]:
        return [p for p in self.list_all() if p.ngo_id == ngo_id]

    def save(self, position: Position) -> bool:
        return self.store.set(position_key(position.id), position.to_record())
