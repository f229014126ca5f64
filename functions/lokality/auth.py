"""
Request authentication.

Production requests carry a Firebase ID token (`Authorization: Bearer`),
verified with the Firebase Admin SDK. With in-memory backends enabled the
`X-User-Id` / `X-User-Email` headers stand in for a signed-in user.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Header

from lokality.config import Settings, get_settings
from lokality.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

_firebase_app = None


@dataclass
class Identity:
    """The signed-in user as reported by the auth provider."""

    uid: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    phone_number: Optional[str] = None
    photo_url: Optional[str] = None


def get_firebase_app(settings: Settings):
    """Initialize the Firebase Admin app once; returns None when unconfigured."""
    global _firebase_app
    if _firebase_app:
        return _firebase_app
    if not (settings.firebase_credentials or settings.firestore_project_id):
        return None

    import firebase_admin
    from firebase_admin import credentials

    options = {}
    if settings.firestore_project_id:
        options["projectId"] = settings.firestore_project_id
    cred = (
        credentials.Certificate(settings.firebase_credentials)
        if settings.firebase_credentials
        else None
    )
    _firebase_app = firebase_admin.initialize_app(cred, options or None)
    return _firebase_app


def verify_id_token(token: str, settings: Settings) -> Identity:
    from firebase_admin import auth as firebase_auth

    app = get_firebase_app(settings)
    if app is None:
        raise AuthenticationError("Authentication is not configured.")
    try:
        claims = firebase_auth.verify_id_token(token, app=app)
    except Exception as e:
        logger.info("Rejected ID token: %s", e)
        raise AuthenticationError("Your session has expired. Please sign in again.")
    return Identity(
        uid=claims["uid"],
        email=claims.get("email"),
        display_name=claims.get("name"),
        phone_number=claims.get("phone_number"),
        photo_url=claims.get("picture"),
    )


def get_optional_identity(
    authorization: Optional[str] = Header(default=None),
    x_user_id: Optional[str] = Header(default=None),
    x_user_email: Optional[str] = Header(default=None),
    x_user_name: Optional[str] = Header(default=None),
    settings: Settings = Depends(get_settings),
) -> Optional[Identity]:
    if authorization and authorization.lower().startswith("bearer "):
        return verify_id_token(authorization[7:].strip(), settings)
    if x_user_id and settings.use_in_memory_backends:
        return Identity(uid=x_user_id, email=x_user_email, display_name=x_user_name)
    return None


def get_identity(
    identity: Optional[Identity] = Depends(get_optional_identity),
) -> Identity:
    if identity is None:
        raise AuthenticationError("You need to be logged in.")
    return identity
