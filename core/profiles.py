#!/usr/bin/env python3
"""
Profile service - registration and owner-only profile updates.

Credentials are stored as an opaque value supplied by the authentication
layer. This module never compares or derives anything from them.
"""

import logging
from typing import Any, Callable, ContextManager, Dict, Optional

from core.clock import Clock, SystemClock
from core.config_loader import CatalogConfig
from core.exceptions import DuplicateEmailError, NotFound, StorageError, Unauthorized
from core.models import UserProfile, generate_id
from core.positions import organization_name
from core.session import UserSession
from core.validation import ProfileDraft, validate_profile
from database.repositories.user import normalize_email
from database.uow import Repositories, record_uow

logger = logging.getLogger(__name__)

IMMUTABLE_FIELDS = ('id', 'role', 'createdAt')

# Attribute names accepted in updates, mapped to their stored record keys
RECORD_KEYS = {'organization_name': 'organizationName', 'created_at': 'createdAt'}


def _profile_from_draft(
    draft: ProfileDraft,
    user_id: str,
    created_at: Optional[int]
) -> UserProfile:
    return UserProfile(
        id=user_id,
        role=draft.role,
        name=draft.name,
        email=draft.email,
        location=draft.location,
        credential=draft.credential,
        created_at=created_at,
        skills=frozenset(draft.skills),
        causes=frozenset(draft.causes),
        availability=frozenset(draft.availability),
        organization_name=draft.organization_name,
    )


class ProfileService:
    def __init__(
        self,
        uow: Optional[Callable[[], ContextManager[Repositories]]] = None,
        clock: Optional[Clock] = None,
        catalog: Optional[CatalogConfig] = None
    ):
        self._uow = uow or record_uow
        self.clock = clock or SystemClock()
        self.catalog = catalog or CatalogConfig()

    def register(self, data: Dict[str, Any]) -> UserProfile:
        """
        Create a volunteer or organization profile.

        Raises:
            ValidationError: missing or invalid fields
            DuplicateEmailError: another profile uses the email
        """
        draft = validate_profile(data, self.catalog)

        with self._uow() as repos:
            if repos.users.get_by_email(draft.email) is not None:
                logger.warning("Registration rejected: email already exists")
                raise DuplicateEmailError("Email already exists")

            profile = _profile_from_draft(draft, generate_id(), self.clock.now_ms())
            if not repos.users.save(profile):
                raise StorageError("Registration failed")

        logger.info(f"Registered {profile.role.value} {profile.id}")
        return profile

    def get_profile(self, user_id: str) -> UserProfile:
        with self._uow() as repos:
            profile = repos.users.get_by_id(user_id)
        if profile is None:
            raise NotFound("User", user_id)
        return profile

    def update_profile(
        self,
        session: UserSession,
        user_id: str,
        changes: Dict[str, Any]
    ) -> UserProfile:
        """
        Apply ``changes`` to the session user's own profile.

        ``id``, ``role`` and ``createdAt`` cannot be changed.
        """
        if session.user_id != user_id:
            logger.warning(f"User {session.user_id} attempted to edit profile {user_id}")
            raise Unauthorized("Profiles can only be edited by their owner")

        with self._uow() as repos:
            current = repos.users.get_by_id(user_id)
            if current is None:
                raise NotFound("User", user_id)

            merged = current.to_record()
            for key, value in changes.items():
                key = RECORD_KEYS.get(key, key)
                if key not in IMMUTABLE_FIELDS:
                    merged[key] = value
            draft = validate_profile(merged, self.catalog)

            if normalize_email(draft.email) != normalize_email(current.email):
                other = repos.users.get_by_email(draft.email)
                if other is not None and other.id != user_id:
                    raise DuplicateEmailError("Email already exists")

            updated = _profile_from_draft(draft, current.id, current.created_at)
            if not repos.users.save(updated):
                raise StorageError("Profile update failed")

        logger.info(f"Profile {user_id} updated")
        return updated

    def organization_display_name(self, ngo_id: str) -> str:
        with self._uow() as repos:
            return organization_name(repos.users.get_by_id(ngo_id))
