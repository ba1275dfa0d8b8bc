#!/usr/bin/env python3
"""
Application service - submission, status transitions and visibility.

Each operation runs in its own unit of work: it either commits completely or
leaves the record store untouched. Authorization is checked first in every
operation from the explicit UserSession, never from ambient state.

The volunteer is notified after a status change has been committed. Delivery
problems are logged and never undo or repeat the change.
"""

import logging
from collections import Counter
from typing import Callable, ContextManager, Dict, Iterable, List, Optional

from core.applications.state_machine import INITIAL_STATUS, can_transition, parse_status
from core.clock import Clock, SystemClock
from core.exceptions import (
    ConcurrentModificationError,
    DuplicateApplication,
    NotFound,
    PositionExpiredError,
    StorageError,
    Unauthorized,
    ValidationError,
)
from core.expiry import is_expired
from core.models import Application, ApplicationStatus, generate_id
from core.session import UserSession
from database.record_store import application_key
from database.uow import Repositories, record_uow
from notification.service import NotificationService

logger = logging.getLogger(__name__)

UnitOfWork = Callable[[], ContextManager[Repositories]]


def newest_first(applications: Iterable[Application]) -> List[Application]:
    return sorted(applications, key=lambda a: a.applied_at, reverse=True)


def status_counts(applications: Iterable[Application]) -> Dict[str, int]:
    """Counts per status plus ``all``, with every status present."""
    applications = list(applications)
    counts = Counter(a.status.value for a in applications)
    result = {'all': len(applications)}
    for status in ApplicationStatus:
        result[status.value] = counts.get(status.value, 0)
    return result


def filter_by_status(
    applications: Iterable[Application],
    status: Optional[ApplicationStatus] = None
) -> List[Application]:
    if status is None:
        return list(applications)
    return [a for a in applications if a.status == status]


class ApplicationService:
    """Creates applications and moves them between statuses."""

    def __init__(
        self,
        uow: Optional[UnitOfWork] = None,
        clock: Optional[Clock] = None,
        notifier: Optional[NotificationService] = None
    ):
        self._uow = uow or record_uow
        self.clock = clock or SystemClock()
        self.notifier = notifier

    def submit_application(
        self,
        session: UserSession,
        position_id: str,
        now: Optional[int] = None
    ) -> Application:
        """
        Apply to a position as the session's volunteer.

        Raises:
            Unauthorized: session is not a volunteer
            NotFound: position does not exist
            PositionExpiredError: position is past its validity window
            DuplicateApplication: volunteer already applied to this position
        """
        session.require_volunteer("apply to positions")
        now = self.clock.now_ms() if now is None else now

        with self._uow() as repos:
            position = repos.positions.get_by_id(position_id)
            if position is None:
                raise NotFound("Position", position_id)

            if is_expired(position, now):
                logger.warning(f"Rejected application to expired position {position_id}")
                raise PositionExpiredError(position_id)

            existing = repos.applications.find_existing(session.user_id, position_id)
            if existing is not None:
                logger.info(f"Volunteer {session.user_id} already applied to {position_id}")
                raise DuplicateApplication(session.user_id, position_id, existing.id)

            application = Application(
                id=generate_id(),
                volunteer_id=session.user_id,
                position_id=position.id,
                ngo_id=position.ngo_id,
                status=INITIAL_STATUS,
                applied_at=now,
            )

            if not repos.applications.claim_pair(application):
                raise DuplicateApplication(session.user_id, position_id)
            if not repos.applications.create(application):
                raise StorageError(f"Could not store application for position {position_id}")

        logger.info(
            f"Application {application.id} submitted by {session.user_id} for position {position_id}"
        )
        return application

    def update_status(
        self,
        session: UserSession,
        application_id: str,
        new_status
    ) -> Application:
        """
        Change an application's status as its owning organization.

        Raises:
            NotFound: application does not exist
            Unauthorized: session is not the owning organization
            ValidationError: status is not pending, accepted or rejected
            ConcurrentModificationError: application changed while updating
        """
        with self._uow() as repos:
            current, version = repos.applications.get_with_version(application_id)
            if current is None:
                raise NotFound("Application", application_id)

            if not (session.is_organization and session.user_id == current.ngo_id):
                logger.warning(
                    f"User {session.user_id} attempted to update application {application_id} "
                    f"owned by {current.ngo_id}"
                )
                raise Unauthorized(f"Not allowed to update application {application_id}")

            status = parse_status(new_status)
            if not can_transition(current.status, status):
                raise ValidationError(
                    {"status": f"Cannot move from {current.status.value} to {status.value}"}
                )

            updated = current.with_status(status)
            if not repos.applications.update_if_unchanged(updated, version):
                raise ConcurrentModificationError(application_key(application_id))

            volunteer = repos.users.get_by_id(current.volunteer_id)
            volunteer_email = volunteer.email if volunteer else None

        logger.info(
            f"Application {application_id} status {current.status.value} -> {status.value} "
            f"by {session.user_id}"
        )
        self._notify(volunteer_email, updated)
        return updated

    def _notify(self, email: Optional[str], application: Application) -> None:
        if self.notifier is None:
            return
        try:
            self.notifier.notify_status_change(email, application)
        except Exception:
            # The status change is already committed; delivery is best-effort
            logger.exception(f"Unexpected error notifying about application {application.id}")

    def get_application(self, session: UserSession, application_id: str) -> Application:
        with self._uow() as repos:
            application = repos.applications.get_by_id(application_id)
        if application is None:
            raise NotFound("Application", application_id)
        self._check_visible(session, application)
        return application

    def find_application(self, session: UserSession, position_id: str) -> Optional[Application]:
        """The session volunteer's application to a position, if any."""
        session.require_volunteer("view their applications")
        with self._uow() as repos:
            return repos.applications.find_existing(session.user_id, position_id)

    def list_applications(
        self,
        session: UserSession,
        status=None
    ) -> List[Application]:
        """Applications the session may see, newest first."""
        wanted = parse_status(status) if status is not None else None
        with self._uow() as repos:
            if session.is_volunteer:
                applications = repos.applications.list_for_volunteer(session.user_id)
            else:
                applications = repos.applications.list_for_organization(session.user_id)
        return newest_first(filter_by_status(applications, wanted))

    def list_for_position(
        self,
        session: UserSession,
        position_id: str,
        status=None
    ) -> List[Application]:
        """Applications to one of the session organization's positions, newest first."""
        session.require_organization("review applications")
        wanted = parse_status(status) if status is not None else None
        with self._uow() as repos:
            position = repos.positions.get_by_id(position_id)
            if position is None:
                raise NotFound("Position", position_id)
            if position.ngo_id != session.user_id:
                raise Unauthorized(f"Position {position_id} belongs to another organization")
            applications = repos.applications.list_for_position(position_id)
        return newest_first(filter_by_status(applications, wanted))

    @staticmethod
    def _check_visible(session: UserSession, application: Application) -> None:
        if session.is_volunteer and application.volunteer_id == session.user_id:
            return
        if session.is_organization and application.ngo_id == session.user_id:
            return
        raise Unauthorized(f"Not allowed to view application {application.id}")
