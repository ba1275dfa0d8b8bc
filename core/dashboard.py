#!/usr/bin/env python3
"""
Dashboard summaries for volunteers and organizations.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, ContextManager, List, Optional

from core.applications.service import newest_first, status_counts
from core.clock import Clock, SystemClock
from core.config_loader import MatchingConfig
from core.exceptions import NotFound
from core.expiry import days_remaining, is_expired
from core.models import Application, ApplicationStatus
from core.scorer import PositionView, ScoringService
from core.session import UserSession
from database.uow import Repositories, record_uow

logger = logging.getLogger(__name__)


@dataclass
class VolunteerDashboard:
    available_positions: int = 0
    applied_positions: int = 0
    accepted_positions: int = 0
    recommendations: List[PositionView] = field(default_factory=list)
    recent_applications: List[Application] = field(default_factory=list)


@dataclass
class OrganizationDashboard:
    active_positions: int = 0
    total_applications: int = 0
    positions_filled: int = 0
    recent_positions: List[PositionView] = field(default_factory=list)
    recent_applications: List[Application] = field(default_factory=list)


class DashboardService:
    def __init__(
        self,
        uow: Optional[Callable[[], ContextManager[Repositories]]] = None,
        clock: Optional[Clock] = None,
        scorer: Optional[ScoringService] = None,
        config: Optional[MatchingConfig] = None
    ):
        self._uow = uow or record_uow
        self.clock = clock or SystemClock()
        self.config = config or MatchingConfig()
        self.scorer = scorer or ScoringService(self.config.scorer)

    def volunteer_summary(self, session: UserSession, now: Optional[int] = None) -> VolunteerDashboard:
        session.require_volunteer("view the volunteer dashboard")
        now = self.clock.now_ms() if now is None else now

        with self._uow() as repos:
            volunteer = repos.users.get_by_id(session.user_id)
            if volunteer is None:
                raise NotFound("User", session.user_id)
            positions = repos.positions.list_all()
            applications = repos.applications.list_for_volunteer(session.user_id)

        counts = status_counts(applications)
        recommendations = self.scorer.recommend(
            volunteer, positions, now, limit=self.config.recommendation_limit
        )

        return VolunteerDashboard(
            available_positions=sum(1 for p in positions if not is_expired(p, now)),
            applied_positions=counts['all'],
            accepted_positions=counts[ApplicationStatus.ACCEPTED.value],
            recommendations=recommendations,
            recent_applications=newest_first(applications)[:self.config.recent_limit],
        )

    def organization_summary(self, session: UserSession, now: Optional[int] = None) -> OrganizationDashboard:
        session.require_organization("view the organization dashboard")
        now = self.clock.now_ms() if now is None else now

        with self._uow() as repos:
            positions = repos.positions.list_for_organization(session.user_id)
            applications = repos.applications.list_for_organization(session.user_id)

        views = [
            PositionView(position=p, is_expired=is_expired(p, now), days_remaining=days_remaining(p, now))
            for p in positions
        ]
        # Open positions first, newest first within each group
        views.sort(key=lambda v: (v.is_expired, -(v.position.created_at or 0)))
        counts = status_counts(applications)

        return OrganizationDashboard(
            active_positions=sum(1 for v in views if not v.is_expired),
            total_applications=counts['all'],
            positions_filled=counts[ApplicationStatus.ACCEPTED.value],
            recent_positions=views[:self.config.recent_limit],
            recent_applications=newest_first(applications)[:self.config.recent_limit],
        )
