"""
User profiles: first sign-in bootstrap, edits and role checks.
"""

from __future__ import annotations

import logging
from typing import Optional

from lokality.auth import Identity
from lokality.db import DbClient
from lokality.exceptions import NotFoundError, PermissionDeniedError, ValidationError
from lokality.storage import StorageClient, Upload
from shared.constants import (
    DEFAULT_BIO,
    DEFAULT_SEEKER_CRITERIA,
    DEFAULT_USER_NAME,
    MAX_SEARCH_CRITERIA_LENGTH,
    PLACEHOLDER_AVATAR,
)
from shared.types import ProfileType, UserProfile, UserRole

logger = logging.getLogger(__name__)

# Fields each profile type may edit besides the common ones.
_COMMON_FIELDS = ("name", "phone", "bio")
_SEEKER_FIELDS = ("search_criteria",)
_BUSINESS_FIELDS = ("company_name", "rera_id")


def default_name(identity: Identity) -> str:
    if identity.display_name:
        return identity.display_name
    if identity.email:
        return identity.email.split("@")[0]
    return DEFAULT_USER_NAME


def ensure_profile(db: DbClient, identity: Identity) -> UserProfile:
    """Returns the user's profile, creating a seeker profile on first sign-in."""
    profile = db.get_user(identity.uid)
    if profile is not None:
        return profile
    profile = UserProfile(
        id=identity.uid,
        name=default_name(identity),
        email=identity.email or "",
        type=ProfileType.SEEKER,
        phone=identity.phone_number or "",
        avatar=identity.photo_url or PLACEHOLDER_AVATAR,
        bio=DEFAULT_BIO,
        search_criteria=DEFAULT_SEEKER_CRITERIA,
    )
    db.save_user(profile)
    logger.info("Created seeker profile for %s", identity.uid)
    return profile


def get_profile(db: DbClient, user_id: str) -> UserProfile:
    profile = db.get_user(user_id)
    if profile is None:
        raise NotFoundError("User not found.")
    return profile


def update_profile(
    db: DbClient,
    storage: StorageClient,
    user_id: str,
    changes: dict,
    avatar: Optional[Upload] = None,
) -> UserProfile:
    """
    Applies edits from the profile page. Seekers may change their search
    criteria; dealers and developers their company name and RERA id.
    """
    profile = get_profile(db, user_id)
    allowed = set(_COMMON_FIELDS)
    if profile.is_seeker:
        allowed.update(_SEEKER_FIELDS)
    elif profile.type in (ProfileType.DEALER, ProfileType.DEVELOPER):
        allowed.update(_BUSINESS_FIELDS)

    for field_name, value in changes.items():
        if value is None:
            continue
        if field_name not in allowed:
            raise ValidationError(
                f"'{field_name}' cannot be set on a {profile.type} profile."
            )
        setattr(profile, field_name, value)

    if not profile.name.strip():
        raise ValidationError("Name cannot be empty.")
    if profile.search_criteria and len(profile.search_criteria) > MAX_SEARCH_CRITERIA_LENGTH:
        raise ValidationError(
            f"Search criteria cannot exceed {MAX_SEARCH_CRITERIA_LENGTH} characters."
        )

    if avatar is not None:
        path = f"avatars/{user_id}/{avatar.filename or 'avatar'}"
        profile.avatar = storage.upload_bytes(path, avatar.data, avatar.content_type)

    db.save_user(profile)
    return profile


def require_admin(db: DbClient, user_id: str) -> UserProfile:
    profile = db.get_user(user_id)
    if profile is None or not profile.is_admin:
        raise PermissionDeniedError("Admin access required.")
    return profile


def require_service_provider(
    db: DbClient, user_id: str, allow_admin: bool = False
) -> UserProfile:
    profile = db.get_user(user_id)
    allowed = profile is not None and (
        profile.is_service_provider or (allow_admin and profile.is_admin)
    )
    if not allowed:
        raise PermissionDeniedError("Service provider access required.")
    return profile


def find_user_by_email(db: DbClient, email: str) -> UserProfile:
    email = (email or "").strip()
    if not email:
        raise ValidationError("Email is required.")
    profile = db.find_user_by_email(email)
    if profile is None:
        raise NotFoundError(f"No user found with email {email}.")
    return profile


def set_role(db: DbClient, user_id: str, role: Optional[UserRole]) -> UserProfile:
    profile = get_profile(db, user_id)
    profile.role = role
    db.save_user(profile)
    logger.info("Set role of %s to %s", user_id, role)
    return profile
