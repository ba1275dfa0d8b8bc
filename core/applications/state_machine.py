#!/usr/bin/env python3
"""
Application status transitions.

Applications start as ``pending``. The owning organization may move an
application to any status, including back and forth between ``accepted`` and
``rejected``; there is no terminal state and no history is kept.
"""

from typing import Any, Dict, FrozenSet

from core.exceptions import ValidationError
from core.models import ApplicationStatus

INITIAL_STATUS = ApplicationStatus.PENDING

ALL_STATUSES: FrozenSet[ApplicationStatus] = frozenset(ApplicationStatus)

# TODO: confirm with stakeholders whether accepted/rejected should become terminal
TRANSITIONS: Dict[ApplicationStatus, FrozenSet[ApplicationStatus]] = {
    status: ALL_STATUSES for status in ApplicationStatus
}


def parse_status(value: Any) -> ApplicationStatus:
    try:
        return ApplicationStatus.parse(value)
    except ValueError as e:
        allowed = ", ".join(s.value for s in ApplicationStatus)
        raise ValidationError({"status": f"Unknown status {value!r}; expected one of {allowed}"}) from e


def can_transition(current: ApplicationStatus, new: ApplicationStatus) -> bool:
    return new in TRANSITIONS.get(current, frozenset())
