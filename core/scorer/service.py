#!/usr/bin/env python3
"""
Scoring Service - weighted relevance between a volunteer and a position.

score = round(w_skills*skill_match + w_cause*cause_match
              + w_availability*availability_match + w_proximity*proximity_match
              + w_urgency*urgency_score)

With the default weights (0.40, 0.25, 0.20, 0.10, 0.05) the result is an
integer in [0, 100]. Scoring is pure: no I/O and no shared state, so it is
safe to call concurrently.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Optional
import logging

from core.config_loader import ScorerConfig
from core.expiry import days_remaining, is_expired
from core.models import Position, UserProfile
from core.scorer import components
from core.scorer.models import MatchBreakdown, PositionView

logger = logging.getLogger(__name__)

WEIGHT_FIELDS = (
    'weight_skills',
    'weight_cause',
    'weight_availability',
    'weight_proximity',
    'weight_urgency',
)


def round_half_up(value: float) -> int:
    return int(Decimal(repr(value)).quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def _sanitize_weights(config: ScorerConfig) -> Dict[str, float]:
    """Read weights from config, clamping negatives and normalising to sum 1.0."""
    defaults = ScorerConfig()
    weights = {}
    for name in WEIGHT_FIELDS:
        raw = getattr(config, name, getattr(defaults, name))
        value = max(0.0, float(raw))
        if value != raw:
            logger.warning("Corrected %s from %r to %r", name, raw, value)
        weights[name] = value

    total = sum(weights.values())
    if total <= 0:
        logger.warning("All scorer weights are zero; using defaults")
        return {name: float(getattr(defaults, name)) for name in WEIGHT_FIELDS}

    if abs(total - 1.0) > 1e-9:
        logger.warning("Scorer weights sum to %.4f; normalising to 1.0", total)
        weights = {name: value / total for name, value in weights.items()}

    return weights


class ScoringService:
    """
    Computes relevance scores and ranks positions for a volunteer.

    Ties in score are not broken here; ``rank_positions`` orders ties by
    recency (newest ``createdAt`` first).
    """

    def __init__(self, config: Optional[ScorerConfig] = None):
        self.config = config or ScorerConfig()
        self.weights = _sanitize_weights(self.config)

    def breakdown(self, volunteer: UserProfile, position: Position) -> MatchBreakdown:
        skill = components.skill_match(volunteer, position)
        cause = components.cause_match(volunteer, position)
        availability = components.availability_match(volunteer, position)
        proximity = components.proximity_match(volunteer, position)
        urgency = components.urgency_score(position, self.config.urgency_multiplier)

        w = self.weights
        weighted_total = (
            skill * w['weight_skills'] +
            cause * w['weight_cause'] +
            availability * w['weight_availability'] +
            proximity * w['weight_proximity'] +
            urgency * w['weight_urgency']
        )
        score = max(0, min(100, round_half_up(weighted_total)))

        logger.debug(
            f"Position {position.id} for volunteer {volunteer.id}: "
            f"skills={skill:.1f}, cause={cause:.0f}, availability={availability:.1f}, "
            f"proximity={proximity:.0f}, urgency={urgency:.0f} -> {score}"
        )

        return MatchBreakdown(
            skill_match=skill,
            cause_match=cause,
            availability_match=availability,
            proximity_match=proximity,
            urgency_score=urgency,
            weights=dict(w),
            weighted_total=weighted_total,
            score=score,
        )

    def score(self, volunteer: UserProfile, position: Position) -> int:
        return self.breakdown(volunteer, position).score

    def view(self, volunteer: UserProfile, position: Position, now: int) -> PositionView:
        return PositionView(
            position=position,
            is_expired=is_expired(position, now),
            days_remaining=days_remaining(position, now),
            breakdown=self.breakdown(volunteer, position),
        )

    def rank_positions(
        self,
        volunteer: UserProfile,
        positions: Iterable[Position],
        now: int
    ) -> List[PositionView]:
        """Score every position; highest score first, newest first among ties."""
        views = [self.view(volunteer, position, now) for position in positions]
        views.sort(key=lambda v: (-v.relevance_score, -(v.position.created_at or 0)))
        return views

    def recommend(
        self,
        volunteer: UserProfile,
        positions: Iterable[Position],
        now: int,
        limit: Optional[int] = None
    ) -> List[PositionView]:
        """Rank only positions that are still open."""
        active = [p for p in positions if not is_expired(p, now)]
        ranked = self.rank_positions(volunteer, active, now)
        if limit is not None:
            ranked = ranked[:limit]
        return ranked


_default_service: Optional[ScoringService] = None


def _get_default_service() -> ScoringService:
    global _default_service
    if _default_service is None:
        _default_service = ScoringService()
    return _default_service


def score(volunteer: UserProfile, position: Position) -> int:
    """Relevance score with the default weights."""
    return _get_default_service().score(volunteer, position)


def breakdown(volunteer: UserProfile, position: Position) -> MatchBreakdown:
    """Sub-scores and aggregate with the default weights."""
    return _get_default_service().breakdown(volunteer, position)
