#!/usr/bin/env python3
"""
Scoring Module - relevance between volunteers and positions.

Public API:
- ScoringService: weighted scorer and ranking helpers
- MatchBreakdown: the five sub-scores plus the aggregate
- PositionView: a position with expiry and relevance projections
- score / breakdown: module-level helpers using the default weights

Layout:

- models.py: Data structures (MatchBreakdown, PositionView)
- components.py: Sub-score calculations (skills, cause, availability, proximity, urgency)
- service.py: ScoringService orchestrator
"""

from core.scorer.models import MatchBreakdown, PositionView
from core.scorer.service import ScoringService, score, breakdown, round_half_up

__all__ = ['ScoringService', 'MatchBreakdown', 'PositionView', 'score', 'breakdown', 'round_half_up']
