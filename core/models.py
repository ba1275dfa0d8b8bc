#!/usr/bin/env python3
"""
Domain models - user profiles, positions and applications.

Records are stored as JSON objects with camelCase keys; these dataclasses
are the in-memory form the core works with. Derived values (expiry,
relevance) are never part of a stored record.
"""

import logging
import uuid
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, Optional

logger = logging.getLogger(__name__)

# Older records use "ngo" for organization accounts
LEGACY_ROLE_ALIASES = {"ngo": "organization"}


class Role(str, Enum):
    VOLUNTEER = "volunteer"
    ORGANIZATION = "organization"

    @classmethod
    def parse(cls, value: Any) -> "Role":
        if isinstance(value, Role):
            return value
        raw = str(value or "").strip().lower()
        return cls(LEGACY_ROLE_ALIASES.get(raw, raw))


class ApplicationStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"

    @classmethod
    def parse(cls, value: Any) -> "ApplicationStatus":
        if isinstance(value, ApplicationStatus):
            return value
        return cls(str(value or "").strip().lower())


def generate_id() -> str:
    return uuid.uuid4().hex


def _as_set(values: Optional[Iterable[str]]) -> FrozenSet[str]:
    if not values:
        return frozenset()
    if isinstance(values, str):
        return frozenset([values])
    return frozenset(v for v in values if v)


def _optional_int(value: Any) -> Optional[int]:
    """Coerce stored numbers (possibly strings from form input) to int, None if unusable."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class UserProfile:
    id: str
    role: Role
    name: str
    email: str
    location: Optional[str] = None
    credential: Optional[str] = None  # opaque; never compared by the core
    created_at: Optional[int] = None

    # Volunteer attributes
    skills: FrozenSet[str] = field(default_factory=frozenset)
    causes: FrozenSet[str] = field(default_factory=frozenset)
    availability: FrozenSet[str] = field(default_factory=frozenset)

    # Organization attributes
    organization_name: Optional[str] = None

    @property
    def is_volunteer(self) -> bool:
        return self.role == Role.VOLUNTEER

    @property
    def is_organization(self) -> bool:
        return self.role == Role.ORGANIZATION

    @property
    def display_name(self) -> str:
        if self.is_organization:
            return self.organization_name or self.name or "Unknown NGO"
        return self.name or "Unknown Volunteer"

    def with_changes(self, **changes) -> "UserProfile":
        return replace(self, **changes)

    def to_record(self) -> Dict[str, Any]:
        record: Dict[str, Any] = {
            "id": self.id,
            "role": self.role.value,
            "name": self.name,
            "email": self.email,
            "location": self.location,
            "createdAt": self.created_at,
        }
        if self.credential is not None:
            record["credential"] = self.credential
        if self.is_volunteer:
            record["skills"] = sorted(self.skills)
            record["causes"] = sorted(self.causes)
            record["availability"] = sorted(self.availability)
        else:
            record["organizationName"] = self.organization_name
        return record

    @classmethod
    def from_record(cls, data: Dict[str, Any]) -> "UserProfile":
        return cls(
            id=str(data["id"]),
            role=Role.parse(data.get("role")),
            name=data.get("name") or "",
            email=data.get("email") or "",
            location=data.get("location"),
            credential=data.get("credential"),
            created_at=_optional_int(data.get("createdAt")),
            skills=_as_set(data.get("skills")),
            causes=_as_set(data.get("causes")),
            availability=_as_set(data.get("availability")),
            organization_name=data.get("organizationName"),
        )


@dataclass(frozen=True)
class Position:
    id: str
    ngo_id: str
    title: str
    description: str
    cause: Optional[str]
    location: Optional[str]
    required_skills: FrozenSet[str] = field(default_factory=frozenset)
    availability: FrozenSet[str] = field(default_factory=frozenset)
    urgency: Optional[int] = None
    created_at: Optional[int] = None
    valid_for_days: Optional[int] = None

    def to_record(self) -> Dict[str, Any]:
        return {
            "positionId": self.id,
            "ngoId": self.ngo_id,
            "title": self.title,
            "description": self.description,
            "cause": self.cause,
            "location": self.location,
            "requiredSkills": sorted(self.required_skills),
            "availability": sorted(self.availability),
            "urgency": self.urgency,
            "createdAt": self.created_at,
            "validForDays": self.valid_for_days,
        }

    @classmethod
    def from_record(cls, data: Dict[str, Any]) -> "Position":
        return cls(
            id=str(data["positionId"]),
            ngo_id=str(data.get("ngoId") or ""),
            title=data.get("title") or "",
            description=data.get("description") or "",
            cause=data.get("cause"),
            location=data.get("location"),
            required_skills=_as_set(data.get("requiredSkills")),
            availability=_as_set(data.get("availability")),
            urgency=_optional_int(data.get("urgency")),
            created_at=_optional_int(data.get("createdAt")),
            valid_for_days=_optional_int(data.get("validForDays")),
        )


@dataclass(frozen=True)
class Application:
    id: str
    volunteer_id: str
    position_id: str
    ngo_id: str
    status: ApplicationStatus
    applied_at: int

    def with_status(self, status: ApplicationStatus) -> "Application":
        return replace(self, status=status)

    def to_record(self) -> Dict[str, Any]:
        return {
            "applicationId": self.id,
            "volunteerId": self.volunteer_id,
            "positionId": self.position_id,
            "ngoId": self.ngo_id,
            "status": self.status.value,
            "appliedAt": self.applied_at,
        }

    @classmethod
    def from_record(cls, data: Dict[str, Any]) -> "Application":
        return cls(
            id=str(data["applicationId"]),
            volunteer_id=str(data["volunteerId"]),
            position_id=str(data["positionId"]),
            ngo_id=str(data.get("ngoId") or ""),
            status=ApplicationStatus.parse(data.get("status")),
            applied_at=_optional_int(data.get("appliedAt")) or 0,
        )
