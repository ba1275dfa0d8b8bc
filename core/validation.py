#!/usr/bin/env python3
"""
Input validation for profiles and positions.

Shape and type checks are pydantic models; membership in the configured
catalog is checked afterwards. Every problem is reported through a single
``core.exceptions.ValidationError`` carrying a field -> message map, raised
before anything is written.
"""

import re
import logging
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from core.config_loader import CatalogConfig, PositionConfig
from core.exceptions import ValidationError
from core.models import Role

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

REQUIRED = "This field is required"


class PositionDraft(BaseModel):
    """Fields an organization supplies when publishing a position."""
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    cause: str = Field(min_length=1)
    location: str = Field(min_length=1)
    required_skills: List[str] = Field(alias="requiredSkills", min_length=1)
    availability: List[str] = Field(min_length=1)
    urgency: int
    valid_for_days: Optional[int] = Field(default=None, alias="validForDays")


class ProfileDraft(BaseModel):
    """Profile fields for registration and profile updates."""
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    name: str = Field(min_length=1)
    email: str
    role: Role
    location: str = Field(min_length=1)
    credential: Optional[str] = None

    skills: List[str] = Field(default_factory=list)
    causes: List[str] = Field(default_factory=list)
    availability: List[str] = Field(default_factory=list)
    organization_name: Optional[str] = Field(default=None, alias="organizationName")

    @field_validator("role", mode="before")
    @classmethod
    def _parse_role(cls, value: Any) -> Role:
        return Role.parse(value)

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: str) -> str:
        value = value.strip()
        if not EMAIL_PATTERN.match(value):
            raise ValueError("Please enter a valid email address")
        return value


def _field_name(loc) -> str:
    return str(loc[0]) if loc else "__root__"


def _collect_errors(exc: PydanticValidationError) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    for err in exc.errors():
        field = _field_name(err.get("loc", ()))
        message = err.get("msg", "Invalid value")
        if err.get("type") == "missing":
            message = REQUIRED
        errors.setdefault(field, message)
    return errors


def _unknown(values: List[str], allowed: List[str]) -> List[str]:
    allowed_set = set(allowed)
    return [v for v in values if v not in allowed_set]


def validate_position(
    data: Dict[str, Any],
    catalog: Optional[CatalogConfig] = None,
    limits: Optional[PositionConfig] = None
) -> PositionDraft:
    catalog = catalog or CatalogConfig()
    limits = limits or PositionConfig()

    try:
        draft = PositionDraft.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(_collect_errors(e)) from e

    errors: Dict[str, str] = {}
    if draft.cause not in catalog.causes:
        errors["cause"] = f"Unknown cause: {draft.cause}"
    if draft.location not in catalog.locations:
        errors["location"] = f"Unknown location: {draft.location}"
    unknown_skills = _unknown(draft.required_skills, catalog.skills)
    if unknown_skills:
        errors["required_skills"] = f"Unknown skills: {', '.join(unknown_skills)}"
    unknown_windows = _unknown(draft.availability, catalog.availability)
    if unknown_windows:
        errors["availability"] = f"Unknown availability: {', '.join(unknown_windows)}"
    if not catalog.min_urgency <= draft.urgency <= catalog.max_urgency:
        errors["urgency"] = f"Urgency must be between {catalog.min_urgency} and {catalog.max_urgency}"

    if draft.valid_for_days is None:
        draft = draft.model_copy(update={"valid_for_days": limits.default_valid_for_days})
    if draft.valid_for_days <= 0:
        errors["valid_for_days"] = "Please enter a valid number greater than 0"
    elif draft.valid_for_days > limits.max_valid_for_days:
        errors["valid_for_days"] = f"Maximum validity period is {limits.max_valid_for_days} days"

    if errors:
        raise ValidationError(errors)
    return draft


def validate_profile(data: Dict[str, Any], catalog: Optional[CatalogConfig] = None) -> ProfileDraft:
    catalog = catalog or CatalogConfig()

    try:
        draft = ProfileDraft.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(_collect_errors(e)) from e

    errors: Dict[str, str] = {}
    if draft.location not in catalog.locations:
        errors["location"] = f"Unknown location: {draft.location}"

    if draft.role == Role.VOLUNTEER:
        if not draft.skills:
            errors["skills"] = "Please select at least one skill"
        elif _unknown(draft.skills, catalog.skills):
            errors["skills"] = f"Unknown skills: {', '.join(_unknown(draft.skills, catalog.skills))}"
        if not draft.causes:
            errors["causes"] = "Please select at least one cause"
        elif _unknown(draft.causes, catalog.causes):
            errors["causes"] = f"Unknown causes: {', '.join(_unknown(draft.causes, catalog.causes))}"
        if not draft.availability:
            errors["availability"] = "Please select at least one availability option"
        elif _unknown(draft.availability, catalog.availability):
            errors["availability"] = (
                f"Unknown availability: {', '.join(_unknown(draft.availability, catalog.availability))}"
            )
    elif not draft.organization_name:
        errors["organization_name"] = REQUIRED

    if errors:
        raise ValidationError(errors)
    return draft
