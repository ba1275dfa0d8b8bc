"""
Application lifecycle: submission and status transitions.
"""

from core.applications.service import ApplicationService, status_counts, newest_first, filter_by_status
from core.applications.state_machine import INITIAL_STATUS, TRANSITIONS, can_transition, parse_status

__all__ = [
    'ApplicationService',
    'status_counts',
    'newest_first',
    'filter_by_status',
    'INITIAL_STATUS',
    'TRANSITIONS',
    'can_transition',
    'parse_status',
]
