import logging
from typing import List, Optional, Tuple

from core.models import Application
from database.record_store import APPLICATION_PREFIX, application_key, claim_key
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class ApplicationRepository(BaseRepository):
    def get_by_id(self, application_id: str) -> Optional[Application]:
        application, _ = self.get_with_version(application_id)
        return application

    def get_with_version(self, application_id: str) -> Tuple[Optional[Application], Optional[int]]:
        data, version = self.store.get_with_version(application_key(application_id))
        if not data:
            return None, None
        return Application.from_record(data), version

    def list_all(self) -> List[Application]:
        return [Application.from_record(d) for d in self.store.list_by_prefix(APPLICATION_PREFIX) if d]

    def list_for_volunteer(self, volunteer_id: str) -> List[Application]:
        return [a for a in self.list_all() if a.volunteer_id == volunteer_id]

    def list_for_organization(self, ngo_id: str) -> List[Application]:
        return [a for a in self.list_all() if a.ngo_id == ngo_id]

    def list_for_position(self, position_id: str) -> List[Application]:
        return [a for a in self.list_all() if a.position_id == position_id]

    def find_existing(self, volunteer_id: str, position_id: str) -> Optional[Application]:
        for application in self.list_for_volunteer(volunteer_id):
            if application.position_id == position_id:
                return application
        return None

    def claim_pair(self, application: Application) -> bool:
        """
        Reserve the (volunteer, position) pair for ``application``.

        Returns False if another application already holds the claim.
        """
        return self.store.compare_and_set(
            claim_key(application.volunteer_id, application.position_id),
            {"applicationId": application.id},
            expected_version=None,
        )

    def create(self, application: Application) -> bool:
        return self.store.set(application_key(application.id), application.to_record())

    def update_if_unchanged(self, application: Application, expected_version: int) -> bool:
        return self.store.compare_and_set(
            application_key(application.id),
            application.to_record(),
            expected_version=expected_version,
        )
