#!/usr/bin/env python3
"""
Position service - publishing positions and browsing them.

Expiry and relevance are computed when positions are read; neither is ever
stored on the position record.
"""

import logging
from typing import Any, Callable, ContextManager, Dict, Iterable, List, Optional

from core.clock import Clock, SystemClock
from core.config_loader import CatalogConfig, PositionConfig
from core.exceptions import NotFound, StorageError, ValidationError
from core.expiry import days_remaining, is_expired
from core.models import Position, UserProfile, generate_id
from core.scorer import PositionView, ScoringService
from core.session import UserSession
from core.validation import validate_position
from database.uow import Repositories, record_uow

logger = logging.getLogger(__name__)

UNKNOWN_ORGANIZATION = "Unknown NGO"

SORT_RELEVANCE = "relevance"
SORT_NEWEST = "newest"
SORT_EXPIRING_SOON = "expiring_soon"
SORT_OPTIONS = (SORT_RELEVANCE, SORT_NEWEST, SORT_EXPIRING_SOON)


def organization_name(profile: Optional[UserProfile]) -> str:
    if profile is None:
        return UNKNOWN_ORGANIZATION
    return profile.display_name


def _newest_key(view: PositionView):
    return -(view.position.created_at or 0)


def _expiring_soon_key(view: PositionView):
    # Open positions first, soonest deadline first, never-expiring last
    remaining = view.days_remaining
    return (view.is_expired, remaining is None, remaining or 0, _newest_key(view))


def _active_then_newest_key(view: PositionView):
    return (view.is_expired, _newest_key(view))


def matches_query(position: Position, search_query: Optional[str]) -> bool:
    """Case-insensitive substring match on title or description."""
    if not search_query or not search_query.strip():
        return True
    needle = search_query.strip().lower()
    return needle in (position.title or "").lower() or needle in (position.description or "").lower()


def sort_views(views: Iterable[PositionView], sort: str) -> List[PositionView]:
    views = list(views)
    if sort == SORT_RELEVANCE:
        return sorted(views, key=lambda v: (-v.relevance_score, _newest_key(v)))
    if sort == SORT_NEWEST:
        return sorted(views, key=_newest_key)
    if sort == SORT_EXPIRING_SOON:
        return sorted(views, key=_expiring_soon_key)
    raise ValidationError({"sort": f"Unknown sort order: {sort}"})


class PositionService:
    def __init__(
        self,
        uow: Optional[Callable[[], ContextManager[Repositories]]] = None,
        clock: Optional[Clock] = None,
        catalog: Optional[CatalogConfig] = None,
        limits: Optional[PositionConfig] = None,
        scorer: Optional[ScoringService] = None
    ):
        self._uow = uow or record_uow
        self.clock = clock or SystemClock()
        self.catalog = catalog or CatalogConfig()
        self.limits = limits or PositionConfig()
        self.scorer = scorer or ScoringService()

    def _now(self, now: Optional[int]) -> int:
        return self.clock.now_ms() if now is None else now

    def create_position(
        self,
        session: UserSession,
        data: Dict[str, Any],
        now: Optional[int] = None
    ) -> Position:
        """
        Publish a position owned by the session organization.

        Raises:
            Unauthorized: session is not an organization
            ValidationError: missing or out-of-range fields
        """
        session.require_organization("create positions")
        draft = validate_position(data, self.catalog, self.limits)

        position = Position(
            id=generate_id(),
            ngo_id=session.user_id,
            title=draft.title,
            description=draft.description,
            cause=draft.cause,
            location=draft.location,
            required_skills=frozenset(draft.required_skills),
            availability=frozenset(draft.availability),
            urgency=draft.urgency,
            created_at=self._now(now),
            valid_for_days=draft.valid_for_days,
        )

        with self._uow() as repos:
            if not repos.positions.save(position):
                raise StorageError("Could not store position")

        logger.info(
            f"Position {position.id} created by {session.user_id} "
            f"(valid for {position.valid_for_days} days)"
        )
        return position

    def get_position(self, position_id: str, now: Optional[int] = None) -> PositionView:
        now = self._now(now)
        with self._uow() as repos:
            position = repos.positions.get_by_id(position_id)
            if position is None:
                raise NotFound("Position", position_id)
            ngo_name = organization_name(repos.users.get_by_id(position.ngo_id))

        return PositionView(
            position=position,
            is_expired=is_expired(position, now),
            days_remaining=days_remaining(position, now),
            ngo_name=ngo_name,
        )

    def browse(
        self,
        session: UserSession,
        now: Optional[int] = None,
        show_expired: bool = False,
        cause: Optional[str] = None,
        location: Optional[str] = None,
        search_query: Optional[str] = None,
        sort: Optional[str] = None
    ) -> List[PositionView]:
        """
        Positions visible to the session, filtered and sorted.

        Organizations see only their own positions. Volunteers see every
        position together with its relevance to their profile.
        """
        now = self._now(now)
        if sort is None:
            sort = SORT_RELEVANCE if session.is_volunteer else SORT_NEWEST
        if sort not in SORT_OPTIONS:
            raise ValidationError({"sort": f"Unknown sort order: {sort}"})

        with self._uow() as repos:
            if session.is_organization:
                viewer = None
                positions = repos.positions.list_for_organization(session.user_id)
            else:
                viewer = repos.users.get_by_id(session.user_id)
                if viewer is None:
                    raise NotFound("User", session.user_id)
                positions = repos.positions.list_all()
            names = {u.id: organization_name(u) for u in repos.users.list_all() if u.is_organization}

        views = []
        for position in positions:
            if cause and position.cause != cause:
                continue
            if location and position.location != location:
                continue
            if not matches_query(position, search_query):
                continue

            expired = is_expired(position, now)
            if expired and not show_expired:
                continue

            views.append(PositionView(
                position=position,
                is_expired=expired,
                days_remaining=days_remaining(position, now),
                breakdown=self.scorer.breakdown(viewer, position) if viewer else None,
                ngo_name=names.get(position.ngo_id, UNKNOWN_ORGANIZATION),
            ))

        logger.debug(f"Browse for {session.user_id}: {len(views)} of {len(positions)} positions shown")
        return sort_views(views, sort)

    def list_for_organization(self, ngo_id: str, now: Optional[int] = None) -> List[PositionView]:
        """An organization's positions, open ones first, then newest first."""
        now = self._now(now)
        with self._uow() as repos:
            positions = repos.positions.list_for_organization(ngo_id)

        views = [
            PositionView(
                position=p,
                is_expired=is_expired(p, now),
                days_remaining=days_remaining(p, now),
            )
            for p in positions
        ]
        return sorted(views, key=_active_then_newest_key)
