#!/usr/bin/env python3
"""
Sub-score Calculations - the five signals of the relevance score.

Every function returns a value on the 0-100 scale.
"""

from typing import AbstractSet, Optional
import logging

from core.models import Position, UserProfile

logger = logging.getLogger(__name__)

FULL_MATCH = 100.0
NO_MATCH = 0.0
DEFAULT_URGENCY = 1


def calculate_match_percentage(
    offered: AbstractSet[str],
    required: AbstractSet[str]
) -> float:
    """
    Share of ``required`` items present in ``offered``, as a percentage.

    Returns 0 when either side is empty.
    """
    if not offered or not required:
        return NO_MATCH

    matches = len(required & offered)
    return matches / len(required) * 100


def skill_match(volunteer: UserProfile, position: Position) -> float:
    return calculate_match_percentage(volunteer.skills, position.required_skills)


def cause_match(volunteer: UserProfile, position: Position) -> float:
    return FULL_MATCH if position.cause in volunteer.causes else NO_MATCH


def availability_match(volunteer: UserProfile, position: Position) -> float:
    return calculate_match_percentage(volunteer.availability, position.availability)


def proximity_match(volunteer: UserProfile, position: Position) -> float:
    if volunteer.location is None or position.location is None:
        return NO_MATCH
    return FULL_MATCH if volunteer.location == position.location else NO_MATCH


def urgency_score(position: Position, multiplier: float = 20.0) -> float:
    """Map urgency 1-5 onto 20-100. Positions without an urgency count as 1."""
    urgency: Optional[int] = position.urgency
    if not urgency:
        urgency = DEFAULT_URGENCY
    return max(NO_MATCH, min(FULL_MATCH, urgency * multiplier))
