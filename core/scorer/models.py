#!/usr/bin/env python3
"""
Scoring Models - Data structures for relevance results.
"""

from typing import Dict, Any, Optional
from dataclasses import dataclass, field

from core.models import Position


@dataclass(frozen=True)
class MatchBreakdown:
    """Relevance score with the five sub-scores it was built from (each 0-100)."""
    skill_match: float = 0.0
    cause_match: float = 0.0
    availability_match: float = 0.0
    proximity_match: float = 0.0
    urgency_score: float = 0.0

    weights: Dict[str, float] = field(default_factory=dict)
    weighted_total: float = 0.0
    score: int = 0

    def as_dict(self) -> Dict[str, Any]:
        return {
            'skill_match': self.skill_match,
            'cause_match': self.cause_match,
            'availability_match': self.availability_match,
            'proximity_match': self.proximity_match,
            'urgency_score': self.urgency_score,
            'weights': dict(self.weights),
            'weighted_total': self.weighted_total,
            'score': self.score,
        }


@dataclass(frozen=True)
class PositionView:
    """A position with its read-time projections (expiry, relevance, owner name)."""
    position: Position
    is_expired: bool
    days_remaining: Optional[int]
    breakdown: Optional[MatchBreakdown] = None
    ngo_name: Optional[str] = None

    @property
    def relevance_score(self) -> int:
        return self.breakdown.score if self.breakdown else 0
