#!/usr/bin/env python3
"""
Position expiry.

A position is open for ``validForDays`` days after ``createdAt``. Expiry is a
read-time projection: nothing is written back when a position lapses.

Positions whose ``createdAt`` or ``validForDays`` is missing or unusable are
treated as never expiring. That fallback predates this module and is kept for
compatibility with existing records. Such positions have no finite
count of days left, so ``days_remaining`` returns None for them rather than
an integer.
"""

import logging
import math
from typing import Optional

from core.clock import MS_PER_DAY
from core.models import Position

logger = logging.getLogger(__name__)


def expiry_instant(position: Position) -> Optional[int]:
    """Epoch ms after which the position is expired, or None if it never expires."""
    created_at = position.created_at
    valid_for_days = position.valid_for_days
    if not created_at or not valid_for_days or valid_for_days <= 0:
        logger.debug(
            f"Position {position.id} has no usable expiry window "
            f"(createdAt={created_at!r}, validForDays={valid_for_days!r}); treating as never expiring"
        )
        return None
    return created_at + valid_for_days * MS_PER_DAY


def is_expired(position: Position, now: int) -> bool:
    expires_at = expiry_instant(position)
    if expires_at is None:
        return False
    return now > expires_at


def days_remaining(position: Position, now: int) -> Optional[int]:
    """
    Whole days left before expiry, rounded up.

    Returns 0 for an expired position and None for one that never expires.
    """
    expires_at = expiry_instant(position)
    if expires_at is None:
        return None
    if now > expires_at:
        return 0
    return max(0, math.ceil((expires_at - now) / MS_PER_DAY))
