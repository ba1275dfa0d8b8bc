#!/usr/bin/env python3
"""
Exceptions raised by the matching and lifecycle engine.
"""

from typing import Dict, Optional


class VolunteerMatchError(Exception):
    """Base exception for core operation failures."""
    pass


class ValidationError(VolunteerMatchError):
    """Raised when an input record is malformed or missing a required field."""

    def __init__(self, errors: Dict[str, str], message: Optional[str] = None):
        self.errors = dict(errors)
        if message is None:
            message = "; ".join(f"{field}: {reason}" for field, reason in self.errors.items())
        super().__init__(message)


class DuplicateApplication(VolunteerMatchError):
    """Raised when a volunteer applies to a position they already applied to."""

    def __init__(self, volunteer_id: str, position_id: str, existing_id: Optional[str] = None):
        self.volunteer_id = volunteer_id
        self.position_id = position_id
        self.existing_id = existing_id
        super().__init__(
            f"Volunteer {volunteer_id} has already applied to position {position_id}"
        )


class DuplicateEmailError(VolunteerMatchError):
    """Raised when a profile would share its email with another profile."""
    pass


class PositionExpiredError(VolunteerMatchError):
    """Raised when applying to a position past its validity window."""

    def __init__(self, position_id: str):
        self.position_id = position_id
        super().__init__(f"Position {position_id} is no longer accepting applications")


class NotFound(VolunteerMatchError):
    """Raised when a referenced id does not resolve in the record store."""

    def __init__(self, kind: str, entity_id: str):
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind} not found: {entity_id}")


class Unauthorized(VolunteerMatchError):
    """Raised when the acting identity does not own the target resource."""
    pass


class ConcurrentModificationError(VolunteerMatchError):
    """Raised when a record changed between read and write."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Record {key} was modified concurrently; retry the operation")


class NotificationDeliveryError(VolunteerMatchError):
    """Raised by notification channels when a send fails. Never reaches transition callers."""
    pass


class StorageError(VolunteerMatchError):
    """Raised when the record store rejects a write; the unit of work is rolled back."""
    pass
